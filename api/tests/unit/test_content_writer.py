"""
Tests del writer de traducciones (UPSERT por record_id + locale).
"""
from __future__ import annotations

from datetime import timedelta

import pytest

from app.infrastructure.database.table_handle import TableHandle
from app.infrastructure.translations.content_writer import ContentWriter
from app.shared.exceptions.domain import WriteFailure
from tests.db_helpers import count_rows, fetch_rows, insert_row, naive


@pytest.fixture
def sprocket_id(engine, widget_translations) -> int:
    widget_id = insert_row(engine, "widgets", name="sprocket")
    insert_row(engine, "widget_translations", widget_id=widget_id, locale="en", name="sprocket")
    return widget_id


def test_inserts_new_translation(engine, widget_translations: TableHandle, sprocket_id: int) -> None:
    writer = ContentWriter(widget_translations)

    result = writer.write_content(
        {"widget_translations": {sprocket_id: {"name": "sproqueta"}}}, "es"
    )

    assert count_rows(engine, "widget_translations") == 2
    translation = fetch_rows(engine, "widget_translations")[-1]
    assert translation["widget_id"] == sprocket_id
    assert translation["name"] == "sproqueta"
    assert translation["locale"] == "es"
    assert (result.inserted, result.updated) == (1, 0)
    assert result.table == "widget_translations"
    assert result.locale == "es"


def test_updates_existing_translation_without_new_rows(engine, widget_translations: TableHandle) -> None:
    sprocket_id = insert_row(engine, "widgets", name="sprocket")
    insert_row(engine, "widget_translations", widget_id=sprocket_id, locale="en", name="sprocket")
    es_id = insert_row(engine, "widget_translations", widget_id=sprocket_id, locale="es", name="sproqueta")
    writer = ContentWriter(widget_translations)

    result = writer.write_section({sprocket_id: {"name": "sproqueta2"}}, "es")

    assert count_rows(engine, "widget_translations") == 2
    by_id = {row["id"]: row for row in fetch_rows(engine, "widget_translations")}
    assert by_id[es_id]["name"] == "sproqueta2"
    assert by_id[1]["name"] == "sprocket"
    assert (result.inserted, result.updated) == (0, 1)


def test_update_only_touches_supplied_columns(engine, widget_translations: TableHandle) -> None:
    es_id = insert_row(
        engine, "widget_translations", widget_id=7, locale="es", name="viejo", description="se queda"
    )

    ContentWriter(widget_translations).write_section({7: {"name": "nuevo"}}, "es")

    row = {r["id"]: r for r in fetch_rows(engine, "widget_translations")}[es_id]
    assert row["name"] == "nuevo"
    assert row["description"] == "se queda"


def test_fills_created_at_and_updated_at_on_insert(engine, audited_translations: TableHandle, clock) -> None:
    writer = ContentWriter(audited_translations, clock=clock)

    writer.write_section({1: {"name": "sproqueta"}}, "es")

    translation = fetch_rows(engine, "widget_translations")[-1]
    assert translation["created_at"] == naive(clock.now)
    assert translation["updated_at"] == naive(clock.now)


def test_reapplication_bumps_updated_at_and_keeps_created_at(
    engine, audited_translations: TableHandle, clock
) -> None:
    writer = ContentWriter(audited_translations, clock=clock)
    payload = {"widget_translations": {1: {"name": "sproqueta"}}}
    writer.write_content(payload, "es")
    created = clock.now

    clock.advance(timedelta(days=1))
    result = writer.write_content(payload, "es")

    translation = fetch_rows(engine, "widget_translations")[-1]
    assert result.updated == 1
    assert translation["created_at"] == naive(created)
    assert translation["updated_at"] == naive(clock.now)


def test_same_payload_twice_is_idempotent(engine, audited_translations: TableHandle, clock) -> None:
    writer = ContentWriter(audited_translations, clock=clock)
    payload = {
        "widget_translations": {
            1: {"name": "uno", "description": "primero"},
            2: {"name": "dos"},
        }
    }
    writer.write_content(payload, "es")
    first = fetch_rows(engine, "widget_translations")

    clock.advance(timedelta(hours=3))
    writer.write_content(payload, "es")
    second = fetch_rows(engine, "widget_translations")

    assert len(second) == len(first) == 2
    for before, after in zip(first, second):
        changed = {k for k in before if before[k] != after[k]}
        assert changed == {"updated_at"}


def test_locales_are_independent(engine, widget_translations: TableHandle) -> None:
    writer = ContentWriter(widget_translations)

    writer.write_section({1: {"name": "uno"}}, "es")
    writer.write_section({1: {"name": "un"}}, "fr")

    rows = fetch_rows(engine, "widget_translations")
    assert [(r["locale"], r["name"]) for r in rows] == [("es", "uno"), ("fr", "un")]


def test_table_without_audit_columns(engine, widget_translations: TableHandle) -> None:
    assert widget_translations.has_audit_columns() is False

    ContentWriter(widget_translations).write_section({1: {"name": "x"}}, "es")
    ContentWriter(widget_translations).write_section({1: {"name": "y"}}, "es")

    rows = fetch_rows(engine, "widget_translations")
    assert len(rows) == 1
    assert "created_at" not in rows[0]
    assert rows[0]["name"] == "y"


def test_ignores_sections_of_other_tables(engine, widget_translations: TableHandle) -> None:
    result = ContentWriter(widget_translations).write_content(
        {"gadget_translations": {1: {"name": "nope"}}}, "es"
    )

    assert result.total == 0
    assert count_rows(engine, "widget_translations") == 0


def test_unknown_column_raises_write_failure(engine, widget_translations: TableHandle) -> None:
    with pytest.raises(WriteFailure, match="no tiene la columna 'colour'"):
        ContentWriter(widget_translations).write_section({1: {"colour": "rojo"}}, "es")

    assert count_rows(engine, "widget_translations") == 0


@pytest.mark.parametrize("column", ["widget_id", "locale", "id", "updated_at"])
def test_reserved_columns_cannot_be_written(widget_translations: TableHandle, column: str) -> None:
    with pytest.raises(WriteFailure, match="no se puede escribir"):
        ContentWriter(widget_translations).write_section({1: {column: "x"}}, "es")


def test_failure_keeps_previous_entries(engine, widget_translations: TableHandle) -> None:
    entries = {
        1: {"name": "uno"},
        2: {"colour": "rojo"},
        3: {"name": "tres"},
    }

    with pytest.raises(WriteFailure) as exc_info:
        ContentWriter(widget_translations).write_section(entries, "es")

    assert exc_info.value.details["record_id"] == "2"
    assert [r["widget_id"] for r in fetch_rows(engine, "widget_translations")] == [1]


def test_requires_foreign_key(engine) -> None:
    with pytest.raises(ValueError):
        ContentWriter(TableHandle("widget_translations", engine))
