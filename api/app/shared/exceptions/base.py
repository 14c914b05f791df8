"""
Excepción base para todas las excepciones personalizadas del servicio.
"""
from typing import Optional, Dict, Any, List


class AppException(Exception):
    """
    Excepción base de la aplicación.
    Todas las excepciones personalizadas deben heredar de esta clase.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error descriptivo
            status_code: Código de estado HTTP
            error_code: Código de error personalizado
            details: Detalles adicionales del error
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Representación usada por el handler global de FastAPI."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


def webhook_error_body(message: str) -> List[Dict[str, str]]:
    """
    Body de error que esperan los emisores del webhook.

    Ejemplo: [{"error": "Unauthorized"}]
    """
    return [{"error": message}]


def internal_error_body(exc: BaseException) -> List[Dict[str, str]]:
    """Body 500 con el mensaje de la excepción embebido."""
    return webhook_error_body(f"Internal server error: {exc}")
