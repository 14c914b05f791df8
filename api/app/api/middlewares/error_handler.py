"""
Middleware para manejo centralizado de errores.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger

from app.shared.exceptions.base import internal_error_body


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware para capturar y manejar errores de forma centralizada."""

    async def dispatch(self, request: Request, call_next):
        """
        Procesa la petición y captura errores no manejados.

        Los emisores de webhooks esperan el mismo formato de error que el
        handler de ingesta: [{"error": "Internal server error: <mensaje>"}].

        Args:
            request: Petición HTTP
            call_next: Siguiente middleware/handler

        Returns:
            Response: Respuesta HTTP
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            # Log del error (escapar llaves para evitar error de formato en loguru)
            error_msg = f"Error no manejado en {request.method} {request.url.path}: {exc}"
            logger.error(error_msg.replace("{", "{{").replace("}", "}}"), exc_info=True)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=internal_error_body(exc),
            )
