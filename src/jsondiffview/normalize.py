"""Structural normalization of JSON values.

Rewrites a value into a canonical form so that documents which differ only
in ways the user chose to ignore serialize identically:

- sort_keys: object members are emitted in ascending key order
- ignore_array_order: array elements are ordered by their own compact
  canonical serialization, compared by code point

Both rules apply at every nesting depth. Array ordering compares text, so
numbers order as strings (``10`` before ``2``).
"""

from __future__ import annotations

from dataclasses import dataclass

from jsondiffview.canonical import compact_serialization
from jsondiffview.values import JsonValue, ValueKind, array, obj


@dataclass(frozen=True)
class NormalizationOptions:
    """Equivalence rules applied before diffing."""

    sort_keys: bool = False
    ignore_array_order: bool = False

    def to_dict(self) -> dict[str, bool]:
        """Convert to dictionary."""
        return {"sort_keys": self.sort_keys, "ignore_array_order": self.ignore_array_order}


PRESERVE_ORDER = NormalizationOptions()


def normalize(value: JsonValue, options: NormalizationOptions) -> JsonValue:
    """Normalize a value to canonical form.

    Args:
        value: Parsed value
        options: Which orderings to canonicalize

    Returns:
        Normalized value; idempotent for fixed options

    Example:
        >>> from jsondiffview.parser import parse
        >>> from jsondiffview.canonical import compact_serialization
        >>> compact_serialization(normalize(parse('{"b":1,"a":[3,1]}'), NormalizationOptions(True, True)))
        '{"a":[1,3],"b":1}'
    """
    kind = value.kind

    if kind in (ValueKind.NULL, ValueKind.BOOLEAN, ValueKind.NUMBER, ValueKind.STRING):
        return value

    if kind is ValueKind.ARRAY:
        items = [normalize(item, options) for item in value.payload]
        if options.ignore_array_order:
            # Elements are ordered by normalized content, so equal elements
            # written differently land in the same position
            items.sort(key=compact_serialization)
        return array(items)

    if kind is ValueKind.OBJECT:
        entries = [(key, normalize(member, options)) for key, member in value.payload]
        if options.sort_keys:
            entries.sort(key=lambda entry: entry[0])
        return obj(entries)

    raise TypeError(f"Unknown value kind: {kind!r}")
