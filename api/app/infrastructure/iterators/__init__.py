"""
Iteradores de lectura por lotes sobre tablas destino.
"""
from app.infrastructure.iterators.auto_increment_iterator import (
    AutoIncrementIterator,
    IteratorConfig,
    iterate_table,
)

__all__ = ["AutoIncrementIterator", "IteratorConfig", "iterate_table"]
