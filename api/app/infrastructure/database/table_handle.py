"""
Handle de una tabla destino.

El esquema se descubre por reflexión una sola vez por handle y queda cacheado
durante su vida útil (incluida la presencia de columnas de auditoría).
Si la tabla cambia de esquema, llamar a `refresh()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence

from loguru import logger
from sqlalchemy import MetaData, Table
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import NoSuchTableError

from app.application.dto.catalog_dto import TableConfigDTO
from app.shared.constants.sync_constants import (
    DEFAULT_CREATED_AT_COLUMN,
    DEFAULT_LOCALE_COLUMN,
    DEFAULT_ORDERING_COLUMN,
    DEFAULT_UPDATED_AT_COLUMN,
)
from app.shared.exceptions.domain import TableNotFoundException


@dataclass(frozen=True)
class AuditColumns:
    """Columnas de auditoría presentes en la tabla (None si no existe)."""

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def any(self) -> bool:
        return bool(self.created_at or self.updated_at)


class TableHandle:
    """
    Referencia a una relación destino: nombre, engine y metadatos reflejados.

    El engine pertenece al catálogo; el handle solo lo referencia.
    """

    def __init__(
        self,
        name: str,
        engine: Engine,
        *,
        database_name: str = "default",
        resource_slug: Optional[str] = None,
        foreign_key: Optional[str] = None,
        locale_column: str = DEFAULT_LOCALE_COLUMN,
        created_at_column: str = DEFAULT_CREATED_AT_COLUMN,
        updated_at_column: str = DEFAULT_UPDATED_AT_COLUMN,
        ordering_column: str = DEFAULT_ORDERING_COLUMN,
        translatable_columns: Sequence[str] = (),
        source_locale: str = "en",
    ) -> None:
        self.name = name
        self.engine = engine
        self.database_name = database_name
        self.resource_slug = resource_slug or f"{database_name}-{name}"
        self.foreign_key = foreign_key
        self.locale_column = locale_column
        self.created_at_column = created_at_column
        self.updated_at_column = updated_at_column
        self.ordering_column = ordering_column
        self.translatable_columns = list(translatable_columns)
        self.source_locale = source_locale

    @classmethod
    def from_config(
        cls,
        config: TableConfigDTO,
        engine: Engine,
        *,
        database_name: str,
        resource_slug: str,
        source_locale: str,
    ) -> "TableHandle":
        return cls(
            config.name,
            engine,
            database_name=database_name,
            resource_slug=resource_slug,
            foreign_key=config.foreign_key,
            locale_column=config.locale_column,
            created_at_column=config.created_at_column,
            updated_at_column=config.updated_at_column,
            ordering_column=config.ordering_column,
            translatable_columns=config.columns,
            source_locale=source_locale,
        )

    @cached_property
    def table(self) -> Table:
        """Tabla SQLAlchemy reflejada desde el database."""
        try:
            table = Table(self.name, MetaData(), autoload_with=self.engine)
        except NoSuchTableError as e:
            raise TableNotFoundException(self.database_name, self.name) from e
        logger.debug(f"Tabla reflejada {self.database_name}.{self.name}: {list(table.c.keys())}")
        return table

    @property
    def column_names(self) -> List[str]:
        return list(self.table.c.keys())

    def has_column(self, column: str) -> bool:
        return column in self.table.c

    @cached_property
    def audit_columns(self) -> AuditColumns:
        """Chequeo de capacidad: qué columnas de auditoría tiene la tabla."""
        audit = AuditColumns(
            created_at=self.created_at_column if self.has_column(self.created_at_column) else None,
            updated_at=self.updated_at_column if self.has_column(self.updated_at_column) else None,
        )
        logger.debug(f"Columnas de auditoría de {self.name}: {audit}")
        return audit

    def has_audit_columns(self) -> bool:
        return self.audit_columns.any

    @property
    def technical_columns(self) -> List[str]:
        """Columnas que no son contenido traducible."""
        cols = [
            self.ordering_column,
            self.foreign_key,
            self.locale_column,
            self.created_at_column,
            self.updated_at_column,
        ]
        cols.extend(c.name for c in self.table.primary_key.columns)
        return [c for c in cols if c]

    @property
    def content_columns(self) -> List[str]:
        """Columnas exportables: las configuradas o, si no hay, las no técnicas."""
        if self.translatable_columns:
            return list(self.translatable_columns)
        technical = set(self.technical_columns)
        return [c for c in self.column_names if c not in technical]

    def connect(self) -> Connection:
        return self.engine.connect()

    def begin(self):
        """Context manager de una transacción (commit al salir sin error)."""
        return self.engine.begin()

    def refresh(self) -> None:
        """Descarta el esquema cacheado (p.ej. tras una migración)."""
        self.__dict__.pop("table", None)
        self.__dict__.pop("audit_columns", None)

    def __repr__(self):
        return f"<TableHandle(database={self.database_name}, name={self.name})>"
