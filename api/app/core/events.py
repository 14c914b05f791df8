"""
Ciclo de vida de la aplicacion (lifespan de FastAPI).

- Inicio: sink de logging a archivo, carga del catalogo (engines y clientes
  de Transifex) y advertencias de configuracion.
- Cierre: libera engines y clientes del catalogo.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from loguru import logger

from app.core.config import settings
from app.infrastructure.catalog.database_catalog import DatabaseCatalog, close_catalog, init_catalog


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Lifespan de la aplicacion.

    Un error cargando el catalogo aborta el arranque: sin catalogo el webhook
    no puede validar ninguna firma.
    """
    logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")
    sink_id = logger.add(
        settings.LOG_FILE,
        rotation="500 MB",
        retention="10 days",
        level=settings.LOG_LEVEL,
    )

    try:
        catalog = init_catalog(settings.TXDB_CONFIG_PATH)
    except Exception:
        logger.exception("Error cargando el catalogo durante el arranque")
        logger.remove(sink_id)
        raise

    for warning in config_warnings(catalog):
        logger.warning(f"CONFIG: {warning}")
    logger.success("Aplicacion iniciada correctamente")

    try:
        yield
    finally:
        logger.info("Cerrando aplicacion...")
        closed = close_catalog()
        logger.info(f"Databases cerrados: {closed}")
        logger.remove(sink_id)


def config_warnings(catalog: DatabaseCatalog) -> list:
    """Problemas de configuracion que no impiden arrancar."""
    warnings = []

    if not catalog.databases:
        warnings.append("Catalogo vacio - el webhook rechazara todas las notificaciones")

    for db in catalog.databases:
        if not db.config.transifex.api_token:
            warnings.append(f"{db.name}: api_token de Transifex vacio - las descargas fallaran")
        if not db.tables:
            warnings.append(f"{db.name}: sin tablas configuradas")

    if settings.WEBHOOK_MAX_CLOCK_SKEW_SECONDS == 0:
        warnings.append("WEBHOOK_MAX_CLOCK_SKEW_SECONDS=0 - solo se aceptaran requests con Date exacto")

    return warnings
