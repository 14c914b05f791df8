"""
Iterador por cursor sobre una columna autoincremental.

Recorre la tabla en lotes acotados ordenados por `ordering_column`:

- Cada lote trae hasta `batch_size` filas con `ordering_column >= watermark`.
- Tras un lote no vacío, `watermark = último valor visto + 1`.
- Un lote vacío termina la secuencia (no es un error).

Las filas insertadas por delante del watermark mientras se itera aparecen en
lotes posteriores. Si la columna no es única, filas con el mismo valor que el
último visto que lleguen después de avanzar el watermark se pierden; es un
riesgo conocido y no se corrige aquí.

El estado (watermark) vive en memoria, por instancia. Cada `for` sobre el
iterador es una pasada completa desde el principio. No es thread-safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, TypeVar

from loguru import logger
from sqlalchemy import select

from app.domain.entities.sync import Record
from app.infrastructure.database.table_handle import TableHandle
from app.shared.constants.sync_constants import DEFAULT_BATCH_SIZE, DEFAULT_ORDERING_COLUMN

T = TypeVar("T")


@dataclass(frozen=True)
class IteratorConfig:
    """Opciones del iterador, validadas al construir."""

    batch_size: int = DEFAULT_BATCH_SIZE
    ordering_column: str = DEFAULT_ORDERING_COLUMN

    def __post_init__(self):
        """Validaciones después de la inicialización."""
        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int):
            raise ValueError("batch_size debe ser un entero")
        if self.batch_size < 1:
            raise ValueError(f"batch_size debe ser >= 1 (recibido: {self.batch_size})")
        if not self.ordering_column:
            raise ValueError("ordering_column no puede estar vacío")


class AutoIncrementIterator:
    """
    Secuencia perezosa y reiniciable de registros de una tabla.

    Uso:
        iterator = AutoIncrementIterator(table, IteratorConfig(batch_size=100))
        for record in iterator:
            ...

        # O lote a lote:
        batch = iterator.next_batch()
        while batch:
            ...
            batch = iterator.next_batch()
    """

    def __init__(self, table: TableHandle, config: Optional[IteratorConfig] = None) -> None:
        self.table = table
        self.config = config or IteratorConfig()
        if not table.has_column(self.config.ordering_column):
            raise ValueError(
                f"La tabla '{table.name}' no tiene la columna '{self.config.ordering_column}'"
            )
        self._watermark = 0
        self._exhausted = False

    @property
    def batch_size(self) -> int:
        return self.config.batch_size

    @property
    def column(self) -> str:
        return self.config.ordering_column

    @property
    def watermark(self) -> int:
        """Menor valor de la columna aún no confirmado como leído."""
        return self._watermark

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def next_batch(self) -> List[Record]:
        """
        Trae el siguiente lote y avanza el watermark.

        Returns:
            List[Record]: Lote en orden ascendente; vacío = fin de la secuencia
        """
        records = self._records_since(self._watermark)
        if not records:
            self._exhausted = True
            return []

        self._watermark = records[-1][self.column] + 1
        return records

    def reset(self) -> None:
        """Reinicia la secuencia desde el principio."""
        self._watermark = 0
        self._exhausted = False

    def __iter__(self) -> Iterator[Record]:
        """
        Recorre la tabla completa desde el principio.

        Cada iteración es una pasada nueva (reinicia el watermark al empezar);
        para avanzar paso a paso sin reiniciar usar `next_batch()`.
        """
        self.reset()
        while True:
            batch = self.next_batch()
            if not batch:
                return
            yield from batch

    each_record = __iter__

    def compact_map(self, fn: Callable[[Record], Optional[T]]) -> Iterator[T]:
        """
        Aplica `fn` a cada registro y descarta los resultados None.
        También es perezoso.
        """
        for record in self:
            value = fn(record)
            if value is not None:
                yield value

    def _records_since(self, counter: int) -> List[Record]:
        table = self.table.table
        column = table.c[self.column]
        query = (
            select(table)
            .where(column >= counter)
            .order_by(column)
            .limit(self.batch_size)
        )
        with self.table.connect() as conn:
            rows = conn.execute(query).mappings().all()

        logger.debug(
            f"Lote de {self.table.name}: {len(rows)} fila(s) con {self.column} >= {counter}"
        )
        return [dict(row) for row in rows]


def iterate_table(
    table: TableHandle,
    batch_size: int = DEFAULT_BATCH_SIZE,
    ordering_column: Optional[str] = None,
) -> AutoIncrementIterator:
    """Atajo que usa la columna de orden configurada en el handle."""
    column = ordering_column or table.ordering_column or DEFAULT_ORDERING_COLUMN
    return AutoIncrementIterator(table, IteratorConfig(batch_size=batch_size, ordering_column=column))
