"""JavaScript value semantics for the restricted interpreter."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from cssmodulize.source.literals import format_number

__all__ = [
    "UNDEFINED",
    "ExpressionError",
    "get_property",
    "to_js_string",
    "to_number",
    "truthy",
]


class ExpressionError(Exception):
    """Raised when an expression cannot be evaluated against the scope."""


class _Undefined:
    """The JavaScript ``undefined`` value."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def to_js_string(value: Any) -> str:
    """Stringify *value* the way JavaScript's ``String()`` does."""
    if isinstance(value, str):
        return value
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ",".join(
            "" if item is None or item is UNDEFINED else to_js_string(item)
            for item in value
        )
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0
        try:
            number = float(stripped)
        except ValueError:
            return math.nan
        return int(number) if number.is_integer() else number
    return math.nan


def truthy(value: Any) -> bool:
    if value is UNDEFINED or value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def _as_index(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, float) and key.is_integer():
        return int(key)
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


def get_property(obj: Any, key: Any) -> Any:
    """Read ``obj[key]``; missing properties are ``undefined``."""
    if obj is None or obj is UNDEFINED:
        raise ExpressionError(
            f"Cannot read properties of {to_js_string(obj)} "
            f"(reading '{to_js_string(key)}')"
        )
    if isinstance(obj, Mapping):
        if isinstance(key, (str, int, float)) and key in obj:
            return obj[key]
        return obj.get(to_js_string(key), UNDEFINED)
    if isinstance(obj, (str, list, tuple)):
        if key == "length":
            return len(obj)
        index = _as_index(key)
        if index is not None and 0 <= index < len(obj):
            return obj[index]
        return UNDEFINED
    if isinstance(obj, (bool, int, float)):
        return UNDEFINED
    # Namespaces and plain objects exported by Python definitions modules.
    if isinstance(key, str) and not key.startswith("_"):
        return getattr(obj, key, UNDEFINED)
    return UNDEFINED
