"""
Entidades de dominio del pipeline de sincronización de traducciones.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from app.shared.constants.sync_constants import IngestionState, TERMINAL_STATES

# Una fila de la tabla: columna -> valor (snapshot de solo lectura)
Record = Dict[str, Any]

# { tabla -> { record_id -> { columna -> valor } } }
ContentPayload = Dict[str, Dict[Any, Dict[str, Any]]]


@dataclass(frozen=True)
class WebhookNotification:
    """
    Notificación entrante del webhook.

    Se valida una sola vez y luego se descarta. Los headers se guardan tal
    cual llegaron (None si faltan).
    """

    http_verb: str
    url: Optional[str]
    date_str: Optional[str]
    body: bytes
    signature: Optional[str]

    @classmethod
    def from_headers(
        cls,
        *,
        http_verb: str,
        headers: Mapping[str, str],
        body: bytes,
        signature_header: str,
        url_header: str,
        date_header: str,
    ) -> "WebhookNotification":
        return cls(
            http_verb=http_verb.upper(),
            url=headers.get(url_header),
            date_str=headers.get(date_header),
            body=body,
            signature=headers.get(signature_header),
        )


@dataclass(frozen=True)
class SyncResult:
    """Resultado de aplicar una sección del payload a una tabla."""

    table: str
    locale: str
    inserted: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.updated


@dataclass(frozen=True)
class WriteEvent:
    """
    Registro de una escritura disparada por el webhook.

    Relaciona el resultado con el proyecto/resource de origen.
    """

    project_slug: str
    resource_slug: str
    result: SyncResult

    @property
    def table(self) -> str:
        return self.result.table

    @property
    def locale(self) -> str:
        return self.result.locale


@dataclass
class IngestionResult:
    """
    Resultado de procesar una notificación: status HTTP, body JSON y el
    estado terminal alcanzado.
    """

    status_code: int
    body: Any
    state: IngestionState
    writes: List[WriteEvent] = field(default_factory=list)
    error: Optional[str] = None

    def __post_init__(self):
        """Validaciones después de la inicialización."""
        if self.state not in TERMINAL_STATES:
            raise ValueError(f"IngestionResult requiere un estado terminal, no '{self.state.value}'")

    @property
    def succeeded(self) -> bool:
        return self.state == IngestionState.SUCCEEDED
