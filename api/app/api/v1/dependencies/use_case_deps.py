"""
Dependencias para inyeccion de casos de uso.
"""
from fastapi import Depends

from app.application.use_cases.backfill_use_cases import BackfillUseCases
from app.application.use_cases.ingestion_use_cases import IngestionHandler
from app.api.v1.dependencies.repository_deps import (
    get_database_catalog,
    get_table_resolver,
    get_webhook_authenticator,
)
from app.domain.repositories.table_resolver import ITableResolver
from app.infrastructure.catalog.database_catalog import DatabaseCatalog
from app.infrastructure.security.webhook_authenticator import WebhookAuthenticator


def get_ingestion_handler(
    resolver: ITableResolver = Depends(get_table_resolver),
    authenticator: WebhookAuthenticator = Depends(get_webhook_authenticator),
) -> IngestionHandler:
    """
    Dependencia para obtener el handler del webhook.

    Args:
        resolver: Resolución proyecto/resource -> tabla
        authenticator: Validador de firmas

    Returns:
        IngestionHandler: Instancia del handler
    """
    return IngestionHandler(resolver, authenticator)


def get_backfill_use_cases(
    catalog: DatabaseCatalog = Depends(get_database_catalog),
) -> BackfillUseCases:
    """
    Dependencia para obtener los casos de uso de backfill.

    Returns:
        BackfillUseCases: Instancia de casos de uso de backfill
    """
    return BackfillUseCases(catalog)
