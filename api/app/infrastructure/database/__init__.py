"""
Acceso a los databases destino.

No hay modelos ORM: las tablas se reflejan en tiempo de ejecución.
"""
from app.infrastructure.database.session import build_engine, dispose_engine
from app.infrastructure.database.table_handle import AuditColumns, TableHandle

__all__ = ["build_engine", "dispose_engine", "AuditColumns", "TableHandle"]
