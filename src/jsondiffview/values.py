"""Structured JSON values.

A closed tagged union over the six JSON shapes. Every stage of the diff
pipeline dispatches on ``JsonValue.kind`` and handles each kind explicitly.

Design decisions:
- Values are frozen; arrays hold tuples, objects hold tuples of (key, value)
- Object entries keep insertion order (order is only changed by normalization)
- Conversion from decoded Python data is the only place plain dicts/lists appear
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Tag for a JsonValue."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class JsonValue:
    """A parsed JSON document or sub-document.

    Attributes:
        kind: Which JSON shape this is
        payload: None, bool, int | float, str, tuple[JsonValue, ...]
            or tuple[tuple[str, JsonValue], ...] depending on kind
    """

    kind: ValueKind
    payload: Any = None

    @property
    def items(self) -> tuple[JsonValue, ...]:
        """Array elements."""
        if self.kind is not ValueKind.ARRAY:
            raise TypeError(f"{self.kind.value} value has no items")
        return self.payload

    @property
    def entries(self) -> tuple[tuple[str, JsonValue], ...]:
        """Object members in their current order."""
        if self.kind is not ValueKind.OBJECT:
            raise TypeError(f"{self.kind.value} value has no entries")
        return self.payload

    def to_python(self) -> Any:
        """Convert back to plain Python data (dict, list, scalars)."""
        if self.kind is ValueKind.ARRAY:
            return [item.to_python() for item in self.payload]
        if self.kind is ValueKind.OBJECT:
            return {key: value.to_python() for key, value in self.payload}
        return self.payload


NULL = JsonValue(ValueKind.NULL)


def boolean(value: bool) -> JsonValue:
    return JsonValue(ValueKind.BOOLEAN, value)


def number(value: int | float) -> JsonValue:
    return JsonValue(ValueKind.NUMBER, value)


def string(value: str) -> JsonValue:
    return JsonValue(ValueKind.STRING, value)


def array(items: list[JsonValue] | tuple[JsonValue, ...]) -> JsonValue:
    return JsonValue(ValueKind.ARRAY, tuple(items))


def obj(entries: list[tuple[str, JsonValue]] | tuple[tuple[str, JsonValue], ...]) -> JsonValue:
    return JsonValue(ValueKind.OBJECT, tuple(entries))


class DepthExceededError(ValueError):
    """Raised when decoded data nests deeper than allowed."""


def from_python(data: Any, max_depth: int | None = None, _depth: int = 0) -> JsonValue:
    """Build a JsonValue from decoded JSON data.

    Args:
        data: Output of ``json.loads`` (dict, list, str, int, float, bool, None)
        max_depth: Maximum container nesting; None for unlimited

    Returns:
        Equivalent JsonValue

    Raises:
        DepthExceededError: If nesting exceeds max_depth
        TypeError: If data holds something JSON cannot represent
    """
    # bool before int: bool is an int subclass
    if data is None:
        return NULL
    if isinstance(data, bool):
        return boolean(data)
    if isinstance(data, (int, float)):
        return number(data)
    if isinstance(data, str):
        return string(data)
    if not isinstance(data, (list, tuple, dict)):
        raise TypeError(f"Cannot represent {type(data).__name__} as JSON")

    # _depth counts the containers enclosing this one
    if max_depth is not None and _depth >= max_depth:
        raise DepthExceededError(f"Maximum nesting depth of {max_depth} exceeded")
    if isinstance(data, dict):
        entries = []
        for key, value in data.items():
            entries.append((str(key), from_python(value, max_depth, _depth + 1)))
        return obj(entries)
    items = []
    for item in data:
        items.append(from_python(item, max_depth, _depth + 1))
    return array(items)
