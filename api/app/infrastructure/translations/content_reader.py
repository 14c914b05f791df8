"""
Lectura del contenido fuente de una tabla de traducciones (camino de export).

Recorre la tabla con AutoIncrementIterator y arma un payload con la misma
forma que consume ContentWriter, filtrando las filas del locale pedido.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from loguru import logger

from app.domain.entities.sync import ContentPayload, Record
from app.infrastructure.database.table_handle import TableHandle
from app.infrastructure.iterators.auto_increment_iterator import iterate_table
from app.infrastructure.translations.payload_codec import encode_payload
from app.shared.constants.sync_constants import DEFAULT_BATCH_SIZE


class ContentReader:
    """Construye payloads a partir de las filas de un locale."""

    def __init__(self, table: TableHandle, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if not table.foreign_key:
            raise ValueError(f"La tabla '{table.name}' no tiene foreign_key configurada")
        self.table = table
        self.batch_size = batch_size

    def read_content(self, locale: Optional[str] = None) -> ContentPayload:
        """
        Lee todas las filas del locale (por defecto el locale fuente).

        Las columnas con valor None se omiten; una fila sin contenido no
        genera entrada.
        """
        locale = locale or self.table.source_locale
        columns = self.table.content_columns
        iterator = iterate_table(self.table, batch_size=self.batch_size)

        entries = dict(iterator.compact_map(lambda record: self._entry_for(record, locale, columns)))
        logger.info(f"Export de {self.table.name} ({locale}): {len(entries)} registro(s)")
        return {self.table.name: entries}

    def read_serialized(self, locale: Optional[str] = None) -> str:
        return encode_payload(self.read_content(locale))

    def _entry_for(
        self, record: Record, locale: str, columns: List[str]
    ) -> Optional[Tuple[Any, dict]]:
        if record.get(self.table.locale_column) != locale:
            return None
        values = {c: record[c] for c in columns if record.get(c) is not None}
        if not values:
            return None
        return record[self.table.foreign_key], values
