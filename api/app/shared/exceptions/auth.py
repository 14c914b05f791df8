"""
Excepciones relacionadas con autenticación de webhooks.
"""
from app.shared.exceptions.base import AppException


class AuthException(AppException):
    """Excepción base para errores de autenticación."""

    def __init__(self, message: str, error_code: str = "AUTH_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details
        )


class UnauthorizedException(AuthException):
    """
    Excepción para notificaciones no autorizadas.

    Cubre firma ausente, firma inválida, header Date ilegible o fuera de la
    ventana de tolerancia. El mensaje público siempre es "Unauthorized";
    el motivo concreto viaja en `reason` para logging.
    """

    def __init__(self, reason: str = "invalid signature"):
        super().__init__(
            message="Unauthorized",
            error_code="UNAUTHORIZED",
            details={"reason": reason}
        )
        self.reason = reason
