"""
Tests de backfill por locale y export del contenido fuente.
"""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import yaml

from app.application.use_cases.backfill_use_cases import BackfillUseCases
from app.infrastructure.catalog.database_catalog import DatabaseCatalog
from app.infrastructure.external.transifex.transifex_client import TransifexApiError
from app.infrastructure.translations.content_reader import ContentReader
from app.shared.exceptions.domain import TableNotFoundException, ValidationException
from tests.db_helpers import count_rows, fetch_rows, insert_many


@pytest.fixture
def use_cases(catalog: DatabaseCatalog) -> BackfillUseCases:
    return BackfillUseCases(catalog)


def test_backfill_uses_configured_locales_except_source(
    engine, use_cases: BackfillUseCases, content_source: MagicMock
) -> None:
    content_source.download.side_effect = lambda resource, locale: (
        f"widget_translations:\n  1:\n    name: nombre-{locale}\n"
    )

    response = use_cases.backfill_table("shop", "widget_translations")

    assert [c.args for c in content_source.download.call_args_list] == [
        ("shop-widget_translations", "es"),
        ("shop-widget_translations", "fr"),
    ]
    assert [(item.locale, item.inserted) for item in response.locales] == [("es", 1), ("fr", 1)]
    assert response.total_rows == 2
    assert {r["locale"]: r["name"] for r in fetch_rows(engine, "widget_translations")} == {
        "es": "nombre-es",
        "fr": "nombre-fr",
    }


def test_failed_locale_does_not_stop_the_rest(
    engine, use_cases: BackfillUseCases, content_source: MagicMock
) -> None:
    def download(resource, locale):
        if locale == "es":
            raise TransifexApiError("Transifex request falló 404: Not found")
        return "widget_translations:\n  1:\n    name: un\n"

    content_source.download.side_effect = download

    response = use_cases.backfill_table("shop", "widget_translations", ["es", "fr"])

    assert response.errors == {"es": "Transifex request falló 404: Not found"}
    assert [item.locale for item in response.locales] == ["fr"]
    assert count_rows(engine, "widget_translations") == 1


def test_backfill_unknown_table_or_database(use_cases: BackfillUseCases) -> None:
    with pytest.raises(TableNotFoundException):
        use_cases.backfill_table("shop", "nope_translations")
    with pytest.raises(ValidationException):
        use_cases.backfill_table("nada", "widget_translations")


def test_reader_exports_source_locale_rows(engine, catalog: DatabaseCatalog) -> None:
    insert_many(
        engine,
        "widget_translations",
        [
            {"widget_id": 1, "locale": "en", "name": "sprocket", "description": "toothed"},
            {"widget_id": 1, "locale": "es", "name": "sproqueta"},
            {"widget_id": 2, "locale": "en", "name": "gear"},
            {"widget_id": 3, "locale": "en"},
        ],
    )
    table = catalog.table_named("shop", "widget_translations")

    payload = ContentReader(table, batch_size=2).read_content()

    assert payload == {
        "widget_translations": {
            1: {"name": "sprocket", "description": "toothed"},
            2: {"name": "gear"},
        }
    }
    assert ContentReader(table).read_content("es") == {"widget_translations": {1: {"name": "sproqueta"}}}


def test_reader_without_configured_columns_skips_technical_ones(engine, catalog: DatabaseCatalog) -> None:
    insert_many(engine, "gadget_translations", [{"gadget_id": 5, "locale": "en", "name": "gizmo"}])
    table = catalog.table_named("shop", "gadget_translations")

    assert table.content_columns == ["name"]
    assert ContentReader(table).read_content() == {"gadget_translations": {5: {"name": "gizmo"}}}


def test_export_source_serializes_and_uploads(
    engine, use_cases: BackfillUseCases, content_source: MagicMock
) -> None:
    insert_many(engine, "widget_translations", [{"widget_id": 1, "locale": "en", "name": "sprocket"}])
    content_source.upload_source.return_value = {"strings_added": 1}

    content = use_cases.export_source("shop", "widget_translations", upload=True, batch_size=10)

    assert yaml.safe_load(content) == {"widget_translations": {1: {"name": "sprocket"}}}
    content_source.upload_source.assert_called_once_with("shop-widget_translations", content)


def test_export_source_without_upload(use_cases: BackfillUseCases, content_source: MagicMock) -> None:
    content = use_cases.export_source("shop", "widget_translations")

    assert yaml.safe_load(content) == {"widget_translations": {}}
    content_source.upload_source.assert_not_called()
