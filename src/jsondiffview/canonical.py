"""Canonical JSON serialization.

Provides deterministic text output for structured values.

Design decisions:
- Pretty form: fixed indent width, ": " after keys, one member per line
- Compact form: "," and ":" separators, used as the array ordering key
- Key order: preserved (normalization decides order, not the serializer)
- Strings: JSON escapes, non-ASCII kept literal
- Floats: integral values below 1e21 print as integers, others use the
  shortest round-tripping digits, in positional notation from 1e-6 up and
  with a bare exponent below that (1e-05 -> 0.00001, 1e-07 -> 1e-7)
"""

from __future__ import annotations

import json
import math

from jsondiffview.values import JsonValue, ValueKind

DEFAULT_INDENT = 2


def _format_number(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        # parse() never produces these; keep the output valid JSON anyway
        return "null"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    if 1e-6 <= abs(value) < 1e-4:
        # repr switches to exponents at 1e-4, JavaScript only below 1e-6
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-int(exponent) - 1)}{digits}"
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def _format_scalar(value: JsonValue) -> str:
    if value.kind is ValueKind.NULL:
        return "null"
    if value.kind is ValueKind.BOOLEAN:
        return "true" if value.payload else "false"
    if value.kind is ValueKind.NUMBER:
        return _format_number(value.payload)
    if value.kind is ValueKind.STRING:
        return json.dumps(value.payload, ensure_ascii=False)
    raise TypeError(f"Not a scalar: {value.kind.value}")


def _write_pretty(value: JsonValue, indent: int, level: int, out: list[str]) -> None:
    if value.kind is ValueKind.ARRAY:
        if not value.payload:
            out.append("[]")
            return
        inner = " " * (indent * (level + 1))
        out.append("[\n")
        for i, item in enumerate(value.payload):
            out.append(inner)
            _write_pretty(item, indent, level + 1, out)
            out.append(",\n" if i < len(value.payload) - 1 else "\n")
        out.append(" " * (indent * level) + "]")
        return

    if value.kind is ValueKind.OBJECT:
        if not value.payload:
            out.append("{}")
            return
        inner = " " * (indent * (level + 1))
        out.append("{\n")
        for i, (key, member) in enumerate(value.payload):
            out.append(f"{inner}{json.dumps(key, ensure_ascii=False)}: ")
            _write_pretty(member, indent, level + 1, out)
            out.append(",\n" if i < len(value.payload) - 1 else "\n")
        out.append(" " * (indent * level) + "}")
        return

    out.append(_format_scalar(value))


def serialize_canonical(value: JsonValue, indent: int = DEFAULT_INDENT) -> str:
    """Render a value as pretty-printed canonical JSON.

    Structurally identical values always produce byte-identical text.

    Args:
        value: Value to render (normally already normalized)
        indent: Spaces per nesting level

    Returns:
        Multi-line JSON text without a trailing newline

    Example:
        >>> from jsondiffview.parser import parse
        >>> print(serialize_canonical(parse('{"a":[1,2]}')))
        {
          "a": [
            1,
            2
          ]
        }
    """
    out: list[str] = []
    _write_pretty(value, indent, 0, out)
    return "".join(out)


def compact_serialization(value: JsonValue) -> str:
    """Render a value on a single line with no insignificant whitespace."""
    if value.kind is ValueKind.ARRAY:
        return "[" + ",".join(compact_serialization(item) for item in value.payload) + "]"
    if value.kind is ValueKind.OBJECT:
        members = (
            f"{json.dumps(key, ensure_ascii=False)}:{compact_serialization(member)}"
            for key, member in value.payload
        )
        return "{" + ",".join(members) + "}"
    return _format_scalar(value)
