"""
Punto de entrada del servicio de sincronizacion de traducciones.

Expone el webhook de Transifex y el backfill manual. Los clientes son otros
servicios (Transifex, jobs internos), por eso no hay CORS.
"""
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.api.middlewares.error_handler import ErrorHandlerMiddleware
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.events import lifespan
from app.infrastructure.catalog.database_catalog import get_catalog
from app.shared.exceptions.base import AppException


def create_application() -> FastAPI:
    """
    Factory de la aplicacion FastAPI.

    Returns:
        FastAPI: App con middleware de errores, routers v1 y lifespan del catalogo
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Sincronización de traducciones Transifex -> base de datos",
        lifespan=lifespan,
    )

    # Errores no manejados -> 500 con el formato que esperan los emisores del webhook
    application.add_middleware(ErrorHandlerMiddleware)
    application.include_router(api_router, prefix="/api")

    @application.exception_handler(AppException)
    async def app_exception_handler(request, exc: AppException):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @application.get("/health", tags=["Health"])
    async def health_check():
        """Estado del servicio y databases cargados en el catalogo."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "databases": [db.name for db in get_catalog().databases],
        }

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn
    from loguru import logger

    host = "localhost" if settings.HOST == "0.0.0.0" else settings.HOST
    logger.info(f"Webhook: http://{host}:{settings.PORT}/api/v1/hooks/transifex")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
