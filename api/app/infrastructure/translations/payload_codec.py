"""
Serialización del payload de contenido (YAML).

Forma:

    widget_translations:
      1:
        name: sproqueta
      2:
        name: engranaje

Se mantiene libre de I/O para poder testearlo fácilmente.
"""

from __future__ import annotations

from typing import Any, Union

import yaml

from app.domain.entities.sync import ContentPayload
from app.shared.exceptions.domain import DecodeFailure


def decode_payload(raw: Union[str, bytes, None]) -> ContentPayload:
    """
    Decodifica y valida un payload.

    Un documento vacío es un payload vacío. Las secciones vacías (`tabla:` sin
    entradas) se normalizan a {}.

    Raises:
        DecodeFailure: si el YAML es inválido o no tiene la forma esperada
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if not raw or not raw.strip():
        return {}

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise DecodeFailure(f"YAML inválido: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DecodeFailure(f"El payload debe ser un mapping tabla -> registros, no {type(data).__name__}")

    payload: ContentPayload = {}
    for table_name, section in data.items():
        if not isinstance(table_name, str):
            raise DecodeFailure(f"Nombre de tabla inválido: {table_name!r}")
        if section is None:
            payload[table_name] = {}
            continue
        if not isinstance(section, dict):
            raise DecodeFailure(f"La sección '{table_name}' debe ser un mapping record_id -> columnas")
        payload[table_name] = {
            record_id: _decode_entry(table_name, record_id, values)
            for record_id, values in section.items()
        }
    return payload


def _decode_entry(table_name: str, record_id: Any, values: Any) -> dict[str, Any]:
    if record_id is None:
        raise DecodeFailure(f"Registro sin identificador en '{table_name}'")
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise DecodeFailure(f"El registro {record_id} de '{table_name}' debe ser un mapping columna -> valor")
    for column in values:
        if not isinstance(column, str):
            raise DecodeFailure(f"Columna inválida {column!r} en el registro {record_id} de '{table_name}'")
    return dict(values)


def encode_payload(payload: ContentPayload) -> str:
    """Serializa un payload a YAML (orden estable, unicode sin escapar)."""
    return yaml.safe_dump(payload, allow_unicode=True, sort_keys=True, default_flow_style=False)
