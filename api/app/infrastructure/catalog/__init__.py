"""
Catálogo de databases, proyectos y tablas configurados.
"""
from app.infrastructure.catalog.database_catalog import (
    Database,
    DatabaseCatalog,
    close_catalog,
    get_catalog,
    init_catalog,
    load_catalog_config,
)

__all__ = [
    "Database",
    "DatabaseCatalog",
    "close_catalog",
    "get_catalog",
    "init_catalog",
    "load_catalog_config",
]
