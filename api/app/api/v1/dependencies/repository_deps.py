"""
Dependencias para inyección de resolvers y autenticadores.
"""
from app.core.config import settings
from app.domain.repositories.table_resolver import ITableResolver
from app.infrastructure.catalog.database_catalog import DatabaseCatalog, get_catalog
from app.infrastructure.security.webhook_authenticator import WebhookAuthenticator


def get_database_catalog() -> DatabaseCatalog:
    """
    Dependencia para obtener el catálogo cargado al arrancar.

    Returns:
        DatabaseCatalog: Catálogo de databases de la app
    """
    return get_catalog()


def get_table_resolver() -> ITableResolver:
    """
    Dependencia para resolver proyecto/resource -> tabla.

    Returns:
        ITableResolver: Por defecto, el catálogo de la app
    """
    return get_catalog()


def get_webhook_authenticator() -> WebhookAuthenticator:
    """
    Dependencia para obtener el autenticador de webhooks.

    Returns:
        WebhookAuthenticator: Con la ventana de tolerancia configurada
    """
    return WebhookAuthenticator(max_clock_skew_seconds=settings.WEBHOOK_MAX_CLOCK_SKEW_SECONDS)
