"""
Excepciones relacionadas con la lógica de dominio.
"""
from typing import Any

from app.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class ValidationException(DomainException):
    """Excepción para errores de validación."""

    def __init__(self, message: str, field: str = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details
        )


class ProjectNotFoundException(DomainException):
    """Excepción cuando ningún database del catálogo corresponde al proyecto."""

    def __init__(self, project_slug: str):
        super().__init__(
            message=f"Proyecto '{project_slug}' no configurado",
            error_code="PROJECT_NOT_FOUND",
            details={"project": project_slug}
        )
        self.status_code = 404


class TableNotFoundException(DomainException):
    """Excepción cuando no se encuentra una tabla (por nombre o resource slug)."""

    def __init__(self, database_name: str, identifier: Any):
        super().__init__(
            message=f"Tabla '{identifier}' no encontrada en database '{database_name}'",
            error_code="TABLE_NOT_FOUND",
            details={"database": database_name, "table": str(identifier)}
        )
        self.status_code = 404


class SyncFailure(AppException):
    """
    Excepción base para fallos del pipeline de ingesta.
    Siempre se reporta como 500, sin reintentos automáticos.
    """

    def __init__(self, message: str, error_code: str = "SYNC_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=500,
            error_code=error_code,
            details=details
        )


class FetchFailure(SyncFailure):
    """Error al descargar contenido desde el content source."""

    def __init__(self, message: str, details=None):
        super().__init__(message=message, error_code="FETCH_ERROR", details=details)


class DecodeFailure(SyncFailure):
    """El contenido descargado no tiene la forma de un payload válido."""

    def __init__(self, message: str, details=None):
        super().__init__(message=message, error_code="DECODE_ERROR", details=details)


class WriteFailure(SyncFailure):
    """Error al escribir una entrada del payload en la tabla destino."""

    def __init__(self, message: str, table: str = None, record_id: Any = None):
        details = {}
        if table:
            details["table"] = table
        if record_id is not None:
            details["record_id"] = str(record_id)
        super().__init__(message=message, error_code="WRITE_ERROR", details=details)
