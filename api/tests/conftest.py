"""
Configuración de fixtures para pytest.
"""
from typing import Iterator
from unittest.mock import MagicMock

import pytest
from sqlalchemy.engine import Engine

from app.application.dto.catalog_dto import CatalogConfigDTO
from app.domain.repositories.content_source import IContentSource
from app.infrastructure.catalog.database_catalog import DatabaseCatalog
from app.infrastructure.database.session import build_engine
from app.infrastructure.database.table_handle import TableHandle
from tests.db_helpers import FrozenClock, create_gadget_tables, create_widget_tables
from tests.webhook_helpers import WEBHOOK_SECRET


# URL de base de datos de prueba
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def engine() -> Iterator[Engine]:
    """Engine de un database en memoria nuevo para cada test."""
    engine = build_engine(TEST_DATABASE_URL)
    yield engine
    engine.dispose()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def widget_translations(engine: Engine) -> TableHandle:
    """Tabla de traducciones sin columnas de auditoría."""
    create_widget_tables(engine)
    return TableHandle("widget_translations", engine, database_name="shop", foreign_key="widget_id")


@pytest.fixture
def audited_translations(engine: Engine) -> TableHandle:
    """Tabla de traducciones con created_at/updated_at."""
    create_widget_tables(engine, with_audit=True)
    return TableHandle("widget_translations", engine, database_name="shop", foreign_key="widget_id")


@pytest.fixture
def content_source() -> MagicMock:
    """Content source falso: los tests configuran `download.return_value`."""
    source = MagicMock(spec=IContentSource)
    source.get_resource.return_value = {"slug": "shop-widget_translations"}
    source.download.return_value = ""
    return source


@pytest.fixture
def catalog_config() -> CatalogConfigDTO:
    return CatalogConfigDTO.model_validate(
        {
            "databases": [
                {
                    "name": "shop",
                    "database_url": TEST_DATABASE_URL,
                    "source_locale": "en",
                    "locales": ["en", "es", "fr"],
                    "transifex": {
                        "project_slug": "shop",
                        "api_token": "token",
                        "webhook_secret": WEBHOOK_SECRET,
                    },
                    "tables": [
                        {"name": "widget_translations", "columns": ["name", "description"]},
                        {"name": "gadget_translations"},
                    ],
                }
            ]
        }
    )


@pytest.fixture
def catalog(engine: Engine, catalog_config: CatalogConfigDTO, content_source: MagicMock) -> Iterator[DatabaseCatalog]:
    """Catálogo con un database `shop` sobre el engine en memoria del test."""
    create_widget_tables(engine, with_audit=True)
    create_gadget_tables(engine)
    catalog = DatabaseCatalog.from_config(
        catalog_config,
        engine_factory=lambda url: engine,
        content_source_factory=lambda config: content_source,
    )
    yield catalog
    catalog.close()
