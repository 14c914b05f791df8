"""
Entidades del dominio.
"""
from app.domain.entities.sync import (
    ContentPayload,
    IngestionResult,
    Record,
    SyncResult,
    WebhookNotification,
    WriteEvent,
)

__all__ = [
    "ContentPayload",
    "IngestionResult",
    "Record",
    "SyncResult",
    "WebhookNotification",
    "WriteEvent",
]
