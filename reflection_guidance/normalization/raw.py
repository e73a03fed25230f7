"""
Tagging and primitive accessors for raw backend values.

Raw payloads arrive as already-parsed generic JSON: None, bool, int/float,
str, list or dict. Every decoder classifies a value with kind_of() first and
then handles each RawKind explicitly, so no accessor here can raise on
unexpected shapes.

Note: bool is a subclass of int in Python. kind_of() reports booleans as
BOOL, never NUMBER, so a stray `true` can never become turn 1.
"""

import json
import math
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple


class RawKind(str, Enum):
    """Closed set of shapes a raw JSON value can take."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAPPING = "mapping"
    OTHER = "other"


def kind_of(value: Any) -> RawKind:
    if value is None:
        return RawKind.NULL
    if isinstance(value, bool):
        return RawKind.BOOL
    if isinstance(value, (int, float)):
        return RawKind.NUMBER
    if isinstance(value, str):
        return RawKind.STRING
    if isinstance(value, (list, tuple)):
        return RawKind.LIST
    if isinstance(value, Mapping):
        return RawKind.MAPPING
    return RawKind.OTHER


def as_mapping(value: Any) -> Optional[Mapping]:
    """Return value if it is a mapping, else None."""
    return value if kind_of(value) is RawKind.MAPPING else None


def as_int(value: Any) -> Optional[int]:
    """
    Integer view of a NUMBER value.

    Floats truncate toward zero. Booleans, numeric strings and non-finite
    floats (json.loads accepts NaN/Infinity) are not numbers here.
    """
    if kind_of(value) is not RawKind.NUMBER:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def is_true(value: Any) -> bool:
    """Strict truth test: only the JSON literal true counts."""
    return value is True


def stringify(value: Any) -> Optional[str]:
    """
    Render a raw value as text, JSON style.

    Returns None for null. Integral floats lose their ".0" so a turn id sent
    as 7.0 reads "7".
    """
    kind = kind_of(value)
    if kind is RawKind.NULL:
        return None
    if kind is RawKind.STRING:
        return value
    if kind is RawKind.BOOL:
        return "true" if value else "false"
    if kind is RawKind.NUMBER:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    if kind in (RawKind.LIST, RawKind.MAPPING):
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def first_present(
    mapping: Mapping, keys: Iterable[str]
) -> Optional[Tuple[str, Any]]:
    """
    Walk an ordered alias table and return the first (key, value) whose
    value is not null.
    """
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return key, value
    return None


def first_int(mapping: Mapping, keys: Iterable[str]) -> Optional[int]:
    """First alias whose value is a NUMBER, as int. Other types are skipped."""
    for key in keys:
        number = as_int(mapping.get(key))
        if number is not None:
            return number
    return None
