"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .catalog_dto import (
    CatalogConfigDTO,
    DatabaseConfigDTO,
    TableConfigDTO,
    TransifexProjectDTO,
)
from .ingestion_dto import BackfillResponseDTO, LocaleSyncDTO, WebhookFormDTO

__all__ = [
    "CatalogConfigDTO",
    "DatabaseConfigDTO",
    "TableConfigDTO",
    "TransifexProjectDTO",
    "BackfillResponseDTO",
    "LocaleSyncDTO",
    "WebhookFormDTO",
]
