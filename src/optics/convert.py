"""Conversion between plain Python data, JSON text and optics Values."""

from __future__ import annotations

import json
from typing import Any

from .model import Value, VDict, VList, VScalar, is_value


def to_value(obj: Any) -> Value:
    """Convert plain Python data to a Value.

    - Values are returned unchanged
    - ``list`` / ``tuple`` → VList
    - ``dict`` → VDict (keys must be strings)
    - anything else → VScalar
    """
    if is_value(obj):
        return obj
    if isinstance(obj, (list, tuple)):
        return VList([to_value(item) for item in obj])
    if isinstance(obj, dict):
        entries: dict[str, Value] = {}
        for k, v in obj.items():
            if not isinstance(k, str):
                raise TypeError(f"dict keys must be strings, got {k!r}")
            entries[k] = to_value(v)
        return VDict(entries)
    return VScalar(obj)


def to_python(value: Value | list[Value]) -> Any:
    """Convert a Value (or a traversal result list) back to plain Python data."""
    if isinstance(value, list):
        return [to_python(item) for item in value]
    if isinstance(value, VList):
        return [to_python(item) for item in value.items]
    if isinstance(value, VDict):
        return {k: to_python(v) for k, v in value.entries.items()}
    if isinstance(value, VScalar):
        return value.value
    raise TypeError(f"not a Value: {value!r}")


def loads(text: str) -> Value:
    """Parse JSON *text* into a Value; object key order is kept."""
    return to_value(json.loads(text))


def dumps(value: Value | list[Value], indent: int | None = None) -> str:
    return json.dumps(to_python(value), indent=indent, ensure_ascii=False)
