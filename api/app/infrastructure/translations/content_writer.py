"""
Escritura de traducciones en una tabla destino (UPSERT por record_id + locale).

Reglas por entrada:
- Si existe una fila (foreign_key = record_id, locale = locale): se actualizan
  solo las columnas recibidas y `updated_at` (si la tabla la tiene).
  `created_at` nunca se toca.
- Si no existe: se inserta foreign_key, locale, columnas recibidas y, si la
  tabla las tiene, `created_at` y `updated_at` con la hora actual.

Política transaccional: cada entrada se confirma en su propia transacción.
Si una entrada falla se detiene el procesamiento y se propaga el error; las
entradas anteriores quedan escritas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Mapping

from loguru import logger
from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities.sync import ContentPayload, SyncResult
from app.infrastructure.database.table_handle import TableHandle
from app.shared.exceptions.domain import WriteFailure
from app.shared.utils.datetime_utils import DateTimeUtils


class ContentWriter:
    """
    Aplica secciones de payload a una tabla de traducciones.
    """

    def __init__(
        self,
        table: TableHandle,
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
    ) -> None:
        if not table.foreign_key:
            raise ValueError(f"La tabla '{table.name}' no tiene foreign_key configurada")
        self.table = table
        self._clock = clock

    def write_content(self, payload: ContentPayload, locale: str) -> SyncResult:
        """
        Aplica la sección del payload que corresponde a esta tabla.
        Las secciones de otras tablas se ignoran.
        """
        return self.write_section(payload.get(self.table.name) or {}, locale)

    def write_section(self, entries: Mapping[Any, Mapping[str, Any]], locale: str) -> SyncResult:
        """
        Aplica cada entrada (record_id -> columnas) para el locale dado.

        Returns:
            SyncResult: Conteo de inserts vs updates

        Raises:
            WriteFailure: en la primera entrada que no se pueda escribir
        """
        inserted = 0
        updated = 0

        for record_id, values in entries.items():
            if self.write_entry(record_id, values or {}, locale):
                inserted += 1
            else:
                updated += 1

        logger.info(
            f"Traducciones '{locale}' aplicadas en {self.table.name}: "
            f"{inserted} insert(s), {updated} update(s)"
        )
        return SyncResult(table=self.table.name, locale=locale, inserted=inserted, updated=updated)

    def write_entry(self, record_id: Any, values: Mapping[str, Any], locale: str) -> bool:
        """
        UPSERT de una entrada.

        Returns:
            bool: True si se insertó una fila nueva, False si se actualizó
        """
        self._validate_columns(record_id, values)

        table = self.table.table
        audit = self.table.audit_columns
        fk_col = table.c[self.table.foreign_key]
        locale_col = table.c[self.table.locale_column]
        match = and_(fk_col == record_id, locale_col == locale)
        now = self._clock()

        try:
            with self.table.begin() as conn:
                existing = conn.execute(select(fk_col).where(match).limit(1)).first()

                if existing is not None:
                    changes: Dict[str, Any] = dict(values)
                    if audit.updated_at:
                        changes[audit.updated_at] = now
                    if changes:
                        conn.execute(update(table).where(match).values(changes))
                    return False

                row: Dict[str, Any] = {
                    self.table.foreign_key: record_id,
                    self.table.locale_column: locale,
                    **values,
                }
                if audit.created_at:
                    row[audit.created_at] = now
                if audit.updated_at:
                    row[audit.updated_at] = now
                conn.execute(insert(table).values(row))
                return True
        except SQLAlchemyError as e:
            logger.error(f"Error escribiendo {self.table.name} record {record_id} ({locale}): {e}")
            raise WriteFailure(
                f"No se pudo escribir el registro {record_id} en '{self.table.name}': {getattr(e, 'orig', None) or e}",
                table=self.table.name,
                record_id=record_id,
            ) from e

    def _validate_columns(self, record_id: Any, values: Mapping[str, Any]) -> None:
        reserved = {
            self.table.foreign_key,
            self.table.locale_column,
            self.table.created_at_column,
            self.table.updated_at_column,
        }
        reserved.update(c.name for c in self.table.table.primary_key.columns)

        for column in values:
            if column in reserved:
                raise WriteFailure(
                    f"La columna '{column}' no se puede escribir desde el payload",
                    table=self.table.name,
                    record_id=record_id,
                )
            if not self.table.has_column(column):
                raise WriteFailure(
                    f"La tabla '{self.table.name}' no tiene la columna '{column}'",
                    table=self.table.name,
                    record_id=record_id,
                )
