"""
Casos de uso de backfill y export (fuera del request/response del webhook).

- backfill_table: descarga cada locale configurado y lo aplica con
  ContentWriter. Un locale que falla no detiene a los demás.
- export_source: arma el payload del locale fuente con ContentReader y,
  opcionalmente, lo sube al content source.
"""
from __future__ import annotations

from typing import Callable, Iterable, Optional

from loguru import logger

from app.application.dto.ingestion_dto import BackfillResponseDTO, LocaleSyncDTO
from app.infrastructure.catalog.database_catalog import DatabaseCatalog
from app.infrastructure.database.table_handle import TableHandle
from app.infrastructure.translations.content_reader import ContentReader
from app.infrastructure.translations.content_writer import ContentWriter
from app.infrastructure.translations.payload_codec import decode_payload
from app.shared.exceptions.domain import SyncFailure


class BackfillUseCases:
    """Operaciones masivas sobre una tabla del catálogo."""

    def __init__(
        self,
        catalog: DatabaseCatalog,
        writer_factory: Callable[[TableHandle], ContentWriter] = ContentWriter,
    ) -> None:
        self.catalog = catalog
        self.writer_factory = writer_factory

    def backfill_table(
        self,
        database_name: str,
        table_name: str,
        locales: Optional[Iterable[str]] = None,
    ) -> BackfillResponseDTO:
        """
        Descarga y aplica las traducciones de una tabla.

        Args:
            database_name: Database del catálogo
            table_name: Tabla de traducciones
            locales: Locales a aplicar (por defecto los del database, sin el fuente)

        Returns:
            BackfillResponseDTO: Resultado por locale y errores por locale
        """
        db = self.catalog.database_named(database_name)
        table = db.table_named(table_name)
        if locales is None:
            locales = [loc for loc in db.locales if loc != db.config.source_locale]

        response = BackfillResponseDTO(database=db.name, table=table.name)
        writer = self.writer_factory(table)

        for locale in locales:
            try:
                raw = db.content_source.download(table.resource_slug, locale)
                result = writer.write_content(decode_payload(raw), locale)
            except SyncFailure as e:
                logger.error(f"Backfill {db.name}.{table.name} ({locale}) falló: {e.message}")
                response.errors[locale] = e.message
                continue

            response.locales.append(
                LocaleSyncDTO(locale=locale, inserted=result.inserted, updated=result.updated)
            )

        logger.info(
            f"Backfill {db.name}.{table.name}: {response.total_rows} fila(s), "
            f"{len(response.errors)} locale(s) con error"
        )
        return response

    def export_source(
        self,
        database_name: str,
        table_name: str,
        *,
        locale: Optional[str] = None,
        upload: bool = False,
        batch_size: Optional[int] = None,
    ) -> str:
        """
        Serializa el contenido fuente de una tabla (YAML).

        Args:
            upload: Si True, además lo sube como contenido fuente del resource
        """
        db = self.catalog.database_named(database_name)
        table = db.table_named(table_name)
        reader = ContentReader(table) if batch_size is None else ContentReader(table, batch_size=batch_size)
        content = reader.read_serialized(locale)

        if upload:
            summary = db.content_source.upload_source(table.resource_slug, content)
            logger.info(f"Contenido fuente subido a {db.project_slug}/{table.resource_slug}: {summary}")

        return content
