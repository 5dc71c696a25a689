"""Compact, single-line JSON rendering for log messages."""

from __future__ import annotations

import base64
import dataclasses
import json
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)) and not value


def _map_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise TypeError(f"json: unsupported map key type: {type(key).__name__}")


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return _jsonable(obj.value)
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            _camel(field.name): _jsonable(getattr(obj, field.name))
            for field in dataclasses.fields(obj)
            if not _is_empty(getattr(obj, field.name))
        }
    if isinstance(obj, Mapping):
        items = sorted((_map_key(k), v) for k, v in obj.items())
        return {k: _jsonable(v) for k, v in items}
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in obj]
    raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def concise(obj: Any) -> str:
    """Render ``obj`` as compact JSON, or the error text if it cannot be encoded.

    Map keys are sorted, dataclass fields use camelCase names and empty
    fields are omitted, and HTML-sensitive characters are escaped.
    """
    try:
        text = json.dumps(
            _jsonable(obj), ensure_ascii=False, allow_nan=False, separators=(",", ":")
        )
    except (TypeError, ValueError) as err:
        return str(err)
    for char, escaped in _ESCAPES.items():
        text = text.replace(char, escaped)
    return text