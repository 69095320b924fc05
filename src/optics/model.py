"""Value model for optics: lists, dicts and opaque scalars."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .errors import IndexOutOfRange, KeyNotFound, ShapeError


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class VList:
    items: list[Value] = field(default_factory=list)


@dataclass(slots=True)
class VDict:
    entries: dict[str, Value] = field(default_factory=dict)


@dataclass(slots=True)
class VScalar:
    value: Any  # str / int / float / bool / None, never traversed

    def __str__(self) -> str:
        return str(self.value)


Value = Union[VList, VDict, VScalar]


# ---------------------------------------------------------------------------
# Shape predicates and checks
# ---------------------------------------------------------------------------

def is_list(value: Value) -> bool:
    return isinstance(value, VList)


def is_dict(value: Value) -> bool:
    return isinstance(value, VDict)


def is_value(obj: object) -> bool:
    return isinstance(obj, (VList, VDict, VScalar))


def shape_of(value: object) -> str:
    """Return ``"list"``, ``"dict"`` or ``"scalar"`` for *value*."""
    if isinstance(value, VList):
        return "list"
    if isinstance(value, VDict):
        return "dict"
    return "scalar"


def _suffix(detail: str) -> str:
    return f"; {detail}" if detail else ""


def require_list(value: Value, op: str, detail: str = "") -> VList:
    """Return *value* if it is a list, else raise :class:`ShapeError`.

    *op* names the operation in the message and *detail* is appended to it;
    the engine passes the lens it was applying.
    """
    if not isinstance(value, VList):
        raise ShapeError(
            f"{op} shape incompatibility (expected a list, got a {shape_of(value)})"
            + _suffix(detail),
            expected="list",
            actual=shape_of(value),
        )
    return value


def require_dict(value: Value, op: str, detail: str = "") -> VDict:
    if not isinstance(value, VDict):
        raise ShapeError(
            f"{op} shape incompatibility (expected a dict, got a {shape_of(value)})"
            + _suffix(detail),
            expected="dict",
            actual=shape_of(value),
        )
    return value


# ---------------------------------------------------------------------------
# List accessors
# ---------------------------------------------------------------------------

def list_len(value: Value) -> int:
    return len(require_list(value, "list_len").items)


def _check_position(items: list[Value], position: int, op: str, detail: str) -> None:
    if not 0 <= position < len(items):
        raise IndexOutOfRange(
            f"{op}: index {position} out of range for a list of length {len(items)}"
            + _suffix(detail),
            position=position,
            length=len(items),
        )


def list_get(value: Value, position: int, op: str = "list_get", detail: str = "") -> Value:
    """Return the element at *position* (0-based, no negative indexing)."""
    items = require_list(value, op, detail).items
    _check_position(items, position, op, detail)
    return items[position]


def list_set(value: Value, position: int, item: Value, op: str = "list_set", detail: str = "") -> None:
    items = require_list(value, op, detail).items
    _check_position(items, position, op, detail)
    items[position] = item


def list_append(value: Value, item: Value, op: str = "list_append", detail: str = "") -> None:
    require_list(value, op, detail).items.append(item)


# ---------------------------------------------------------------------------
# Dict accessors
# ---------------------------------------------------------------------------

def dict_get(value: Value, key: str, op: str = "dict_get", detail: str = "") -> Value:
    entries = require_dict(value, op, detail).entries
    if key not in entries:
        raise KeyNotFound(
            f"{op}: key {key!r} not found among {list(entries)}" + _suffix(detail),
            key=key,
        )
    return entries[key]


def dict_set(value: Value, key: str, item: Value, op: str = "dict_set", detail: str = "") -> None:
    """Insert or replace *key*; a replaced key keeps its insertion position."""
    require_dict(value, op, detail).entries[key] = item


def dict_keys(value: Value) -> list[str]:
    """Keys of a dict in insertion order."""
    return list(require_dict(value, "dict_keys").entries)
