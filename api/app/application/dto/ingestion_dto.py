"""
DTOs para la ingesta de traducciones vía webhook y backfill.
"""

from __future__ import annotations

from typing import Dict, List
from urllib.parse import parse_qs

from pydantic import BaseModel, Field


class WebhookFormDTO(BaseModel):
    """
    Body del webhook (application/x-www-form-urlencoded).

    Transifex envía más campos (p.ej. `percent`, `event`); solo usamos estos.
    """
    project: str = Field(..., min_length=1, description="Slug del proyecto Transifex")
    resource: str = Field(..., min_length=1, description="Slug del resource")
    language: str = Field(..., min_length=1, description="Locale traducido")

    @classmethod
    def from_body(cls, body: bytes) -> "WebhookFormDTO":
        """
        Parsea el body crudo. Para valores repetidos gana el primero.

        Raises:
            pydantic.ValidationError: si falta algún campo obligatorio
        """
        parsed = parse_qs(body.decode("utf-8"), keep_blank_values=True)
        return cls(**{k: v[0] for k, v in parsed.items() if k in cls.model_fields})


class LocaleSyncDTO(BaseModel):
    """Resultado de aplicar un locale a una tabla."""
    locale: str
    inserted: int = 0
    updated: int = 0


class BackfillResponseDTO(BaseModel):
    """Resultado de un backfill completo de una tabla."""
    database: str
    table: str
    locales: List[LocaleSyncDTO] = Field(default_factory=list)
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def total_rows(self) -> int:
        return sum(item.inserted + item.updated for item in self.locales)
