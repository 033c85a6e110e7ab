"""Tests for parsing untrusted text."""

from __future__ import annotations

import json

import pytest

from jsondiffview.config import DiffConfig
from jsondiffview.errors import ParseFailure
from jsondiffview.parser import is_failure, parse
from jsondiffview.values import NULL, JsonValue, ValueKind, from_python


class TestParseSuccess:
    """Tests for valid documents."""

    @pytest.mark.parametrize(
        ("text", "kind", "payload"),
        [
            ("null", ValueKind.NULL, None),
            ("true", ValueKind.BOOLEAN, True),
            ("false", ValueKind.BOOLEAN, False),
            ("42", ValueKind.NUMBER, 42),
            ("-1.5", ValueKind.NUMBER, -1.5),
            ('"hi"', ValueKind.STRING, "hi"),
        ],
    )
    def test_scalars(self, text, kind, payload):
        """Each JSON scalar maps to its tag."""
        value = parse(text)
        assert value.kind is kind
        assert value.payload == payload

    def test_surrounding_whitespace_is_ignored(self):
        """Leading and trailing whitespace is trimmed before decoding."""
        assert parse('  \n\t{"a": 1}\n  ') == parse('{"a": 1}')

    def test_object_keeps_insertion_order(self):
        """Object entries come back in document order."""
        value = parse('{"z": 1, "a": 2, "m": 3}')
        assert value.kind is ValueKind.OBJECT
        assert [key for key, _ in value.entries] == ["z", "a", "m"]

    def test_nested_structure(self):
        """Nested arrays and objects are converted recursively."""
        value = parse('{"tags": ["a", {"b": null}]}')
        tags = value.entries[0][1]
        assert tags.kind is ValueKind.ARRAY
        assert tags.items[0] == JsonValue(ValueKind.STRING, "a")
        assert tags.items[1].entries == (("b", NULL),)

    def test_duplicate_keys_last_write_wins(self):
        """Duplicate keys keep the last value at the first position."""
        value = parse('{"a": 1, "b": 2, "a": 3}')
        assert value.to_python() == {"a": 3, "b": 2}
        assert [key for key, _ in value.entries] == ["a", "b"]

    def test_values_are_immutable(self):
        """Parsed values cannot be mutated."""
        value = parse("[1, 2]")
        assert isinstance(value.items, tuple)
        with pytest.raises(AttributeError):
            value.kind = ValueKind.NULL

    def test_round_trip_to_python(self):
        """to_python reproduces the decoded data."""
        text = '{"a": [1, 2.5, "x", null, true], "b": {"c": {}}}'
        assert parse(text).to_python() == json.loads(text)


class TestParseFailure:
    """Tests for rejected input."""

    def test_malformed_text_returns_failure(self):
        """Malformed input yields a ParseFailure, not an exception."""
        result = parse("not json")
        assert isinstance(result, ParseFailure)
        assert is_failure(result)

    def test_failure_keeps_decoder_message(self):
        """The decoder's message is carried verbatim."""
        with pytest.raises(json.JSONDecodeError) as excinfo:
            json.loads("{\"a\": }")
        assert parse("{\"a\": }").message == str(excinfo.value)

    def test_empty_string_is_not_json(self):
        """Empty and whitespace-only input fail to parse."""
        assert isinstance(parse(""), ParseFailure)
        assert isinstance(parse("   \n"), ParseFailure)

    def test_trailing_garbage_rejected(self):
        """Exactly one document is accepted."""
        result = parse('{"a": 1} {"b": 2}')
        assert isinstance(result, ParseFailure)
        assert "Extra data" in result.message

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", "[1, NaN]"])
    def test_non_standard_constants_rejected(self, text):
        """NaN and Infinity are not JSON."""
        result = parse(text)
        assert isinstance(result, ParseFailure)
        assert "Invalid JSON literal" in result.message

    def test_overflowing_number_rejected(self):
        """Numbers that overflow to infinity are rejected."""
        result = parse("1e400")
        assert isinstance(result, ParseFailure)
        assert "out of range" in result.message

    def test_depth_limit(self):
        """Nesting deeper than max_depth fails to parse."""
        config = DiffConfig(max_depth=3)
        assert not is_failure(parse("[[[1]]]", config))
        result = parse("[[[[1]]]]", config)
        assert isinstance(result, ParseFailure)
        assert "depth" in result.message

    def test_empty_containers_count_toward_depth(self):
        config = DiffConfig(max_depth=3)
        assert not is_failure(parse("[[{}]]", config))
        assert isinstance(parse("[[[[]]]]", config), ParseFailure)

    def test_nesting_past_largest_limit_fails_cleanly(self):
        """Documents deeper than any allowed limit are rejected, not raised."""
        result = parse("[" * 950 + "]" * 950, DiffConfig(max_depth=200))
        assert isinstance(result, ParseFailure)
        assert "200" in result.message

    def test_very_deep_nesting_does_not_raise(self):
        """Input that exhausts the decoder's recursion still fails cleanly."""
        text = "[" * 100000 + "]" * 100000
        assert isinstance(parse(text), ParseFailure)

    def test_size_limit(self):
        """Input over max_input_bytes fails to parse."""
        config = DiffConfig(max_input_bytes=10)
        result = parse('{"key": "a long value"}', config)
        assert isinstance(result, ParseFailure)
        assert "exceeds maximum" in result.message

    def test_failure_has_no_side(self):
        """A bare parse does not attribute the failure to a side."""
        assert parse("{").side is None


class TestFromPython:
    """Tests for conversion of decoded data."""

    def test_bool_is_not_number(self):
        """Booleans keep their own tag."""
        assert from_python(True).kind is ValueKind.BOOLEAN

    def test_unsupported_type_raises(self):
        """Non-JSON data is rejected."""
        with pytest.raises(TypeError):
            from_python({1, 2})
