"""
Caso de uso: ingesta de traducciones notificadas por webhook.

Máquina de estados:

    RECEIVED -> AUTHENTICATING -> REJECTED (401)
                               -> FETCHING -> DECODING -> WRITING -> SUCCEEDED (200)
                                                                  -> FAILED (500)

Cualquier excepción en FETCHING/DECODING/WRITING termina en FAILED con el
mensaje embebido en el body. No hay reintentos automáticos.
"""
from __future__ import annotations

from typing import Callable, List

from loguru import logger
from pydantic import ValidationError

from app.application.dto.ingestion_dto import WebhookFormDTO
from app.domain.entities.sync import (
    ContentPayload,
    IngestionResult,
    WebhookNotification,
    WriteEvent,
)
from app.domain.repositories.content_source import IContentSource
from app.domain.repositories.table_resolver import ITableResolver
from app.infrastructure.database.table_handle import TableHandle
from app.infrastructure.security.webhook_authenticator import WebhookAuthenticator
from app.infrastructure.translations.content_writer import ContentWriter
from app.infrastructure.translations.payload_codec import decode_payload
from app.shared.constants.sync_constants import YAML_I18N_TYPES, IngestionState
from app.shared.exceptions.auth import UnauthorizedException
from app.shared.exceptions.base import internal_error_body, webhook_error_body
from app.shared.exceptions.domain import FetchFailure, ProjectNotFoundException

WriterFactory = Callable[[TableHandle], ContentWriter]


class IngestionHandler:
    """
    Orquestador del webhook: autentica, descarga, decodifica y escribe.

    Todos los colaboradores se reciben por constructor.
    """

    def __init__(
        self,
        resolver: ITableResolver,
        authenticator: WebhookAuthenticator,
        writer_factory: WriterFactory = ContentWriter,
    ) -> None:
        self.resolver = resolver
        self.authenticator = authenticator
        self.writer_factory = writer_factory

    def handle(self, notification: WebhookNotification) -> IngestionResult:
        """
        Procesa una notificación completa.

        Returns:
            IngestionResult: status HTTP, body JSON, estado terminal y escrituras
        """
        state = self._transition(IngestionState.RECEIVED)

        state = self._transition(IngestionState.AUTHENTICATING, state)
        try:
            form = self._authenticate(notification)
        except UnauthorizedException as e:
            self._transition(IngestionState.REJECTED, state)
            logger.warning(f"Webhook rechazado: {e.reason}")
            return IngestionResult(
                status_code=401,
                body=webhook_error_body("Unauthorized"),
                state=IngestionState.REJECTED,
                error=e.reason,
            )

        writes: List[WriteEvent] = []
        try:
            state = self._transition(IngestionState.FETCHING, state)
            table = self.resolver.table_for_resource(form.project, form.resource)
            source = self.resolver.content_source_for(form.project)
            self._ensure_yaml_resource(source, form.resource)
            raw = source.download(form.resource, form.language)

            state = self._transition(IngestionState.DECODING, state)
            payload = decode_payload(raw)

            state = self._transition(IngestionState.WRITING, state)
            self._write(form, table, payload, writes)
        except Exception as e:
            self._transition(IngestionState.FAILED, state)
            logger.error(
                f"Error procesando webhook {form.project}/{form.resource} ({form.language}) "
                f"en estado '{state.value}': {e}"
            )
            return IngestionResult(
                status_code=500,
                body=internal_error_body(e),
                state=IngestionState.FAILED,
                writes=writes,
                error=str(e),
            )

        self._transition(IngestionState.SUCCEEDED, state)
        logger.info(
            f"Webhook {form.project}/{form.resource} ({form.language}) aplicado: "
            f"{sum(w.result.total for w in writes)} fila(s) en {len(writes)} tabla(s)"
        )
        return IngestionResult(
            status_code=200,
            body={},
            state=IngestionState.SUCCEEDED,
            writes=writes,
        )

    def _authenticate(self, notification: WebhookNotification) -> WebhookFormDTO:
        """
        Un proyecto desconocido o un body ilegible no tienen secreto contra el
        cual validar: se reportan como Unauthorized.
        """
        try:
            form = WebhookFormDTO.from_body(notification.body)
        except (ValidationError, UnicodeDecodeError) as e:
            raise UnauthorizedException(f"body inválido: {e}") from e

        try:
            secret = self.resolver.webhook_secret_for(form.project)
        except ProjectNotFoundException as e:
            raise UnauthorizedException(f"proyecto desconocido: {form.project}") from e

        self.authenticator.authenticate(notification, secret)
        return form

    @staticmethod
    def _ensure_yaml_resource(source: IContentSource, resource_slug: str) -> None:
        """
        Consulta los metadatos del resource antes de descargar: debe existir
        (si no, el content source falla) y su formato debe ser YAML, que es lo
        que sabe decodificar el writer.
        """
        metadata = source.get_resource(resource_slug) or {}
        i18n_type = str(metadata.get("i18n_type") or "").upper()
        if i18n_type and not any(t in i18n_type for t in YAML_I18N_TYPES):
            raise FetchFailure(
                f"El resource '{resource_slug}' es de tipo {i18n_type}; se esperaba YAML",
                details={"resource": resource_slug, "i18n_type": i18n_type},
            )

    def _write(
        self,
        form: WebhookFormDTO,
        table: TableHandle,
        payload: ContentPayload,
        writes: List[WriteEvent],
    ) -> None:
        """Cada sección del payload va a la tabla homónima del mismo database."""
        for table_name, section in payload.items():
            if table_name == table.name:
                target = table
            else:
                target = self.resolver.table_named(form.project, table_name)

            result = self.writer_factory(target).write_section(section, form.language)
            writes.append(
                WriteEvent(project_slug=form.project, resource_slug=form.resource, result=result)
            )

    @staticmethod
    def _transition(new_state: IngestionState, current: IngestionState = None) -> IngestionState:
        if current is None:
            logger.debug(f"Webhook: estado '{new_state.value}'")
        else:
            logger.debug(f"Webhook: '{current.value}' -> '{new_state.value}'")
        return new_state
