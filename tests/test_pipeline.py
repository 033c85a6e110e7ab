"""End-to-end tests for the comparison pipeline."""

from __future__ import annotations

import json

import pytest

from jsondiffview import __version__
from jsondiffview.config import DiffConfig
from jsondiffview.errors import ParseFailure
from jsondiffview.formatter import RenderedLine
from jsondiffview.line_diff import HunkKind
from jsondiffview.normalize import NormalizationOptions
from jsondiffview.pipeline import (
    DiffResult,
    compare,
    format_document,
    result_text,
    swap_documents,
)

SORT_KEYS = NormalizationOptions(sort_keys=True)
IGNORE_ORDER = NormalizationOptions(ignore_array_order=True)
NONE = NormalizationOptions()


def changed_lines(result: DiffResult) -> list[RenderedLine]:
    return [line for line in result.lines if line.kind is not HunkKind.UNCHANGED]


class TestScenarios:
    """Reference comparisons."""

    def test_key_order_ignored_when_sorting(self):
        """Reordered keys produce no changes with sort_keys."""
        result = compare('{"a":1,"b":2}', '{"b":2,"a":1}', SORT_KEYS)
        assert isinstance(result, DiffResult)
        assert result.before_canonical == result.after_canonical
        assert changed_lines(result) == []
        assert result.identical

    def test_key_order_visible_without_sorting(self):
        result = compare('{"a":1,"b":2}', '{"b":2,"a":1}', NONE)
        assert not result.identical

    def test_array_order_ignored(self):
        """Reordered arrays produce no changes with ignore_array_order."""
        result = compare('{"tags":["b","a"]}', '{"tags":["a","b"]}', IGNORE_ORDER)
        assert changed_lines(result) == []

    def test_array_order_respected(self):
        """Without ignore_array_order, reordering shows up."""
        result = compare('{"tags":["b","a"]}', '{"tags":["a","b"]}', NONE)
        assert len(changed_lines(result)) >= 1

    def test_after_failure_reported(self):
        """A malformed after side yields its decoder message."""
        with pytest.raises(json.JSONDecodeError) as excinfo:
            json.loads("not json")
        result = compare('{"a":1}', "not json", SORT_KEYS)
        assert isinstance(result, ParseFailure)
        assert result.side == "after"
        assert result.message == str(excinfo.value)

    def test_value_change(self):
        """One changed value: one removed and one added line, braces unchanged."""
        result = compare('{"a":1}', '{"a":2}', SORT_KEYS)
        assert result.lines == [
            RenderedLine(HunkKind.UNCHANGED, "{"),
            RenderedLine(HunkKind.REMOVED, '  "a": 1'),
            RenderedLine(HunkKind.ADDED, '  "a": 2'),
            RenderedLine(HunkKind.UNCHANGED, "}"),
        ]
        assert result.text == '  {\n-   "a": 1\n+   "a": 2\n  }'

    def test_empty_strings_fail(self):
        """Empty input is not valid JSON on either side."""
        result = compare("", "", SORT_KEYS)
        assert isinstance(result, ParseFailure)
        assert result.side == "before"


class TestFailurePrecedence:
    """A failure on either side replaces the diff."""

    @pytest.mark.parametrize(
        ("before", "after", "side"),
        [
            ("{", '{"a": 1}', "before"),
            ('{"a": 1}', "{", "after"),
            ("{", "[", "before"),
        ],
    )
    def test_either_side_fails(self, before, after, side):
        result = compare(before, after)
        assert isinstance(result, ParseFailure)
        assert result.side == side

    def test_result_text_for_failure(self):
        result = compare("{", "{}")
        assert result_text(result).startswith("JSON parse error: ")

    def test_whitespace_around_documents_ignored(self):
        result = compare('\n {"a": 1} \n', '{"a": 1}')
        assert result.identical


class TestOptions:
    """Options and configuration flow through the pipeline."""

    def test_defaults_come_from_config(self):
        """Without explicit options, the config decides."""
        config = DiffConfig(sort_keys=False, ignore_array_order=True)
        result = compare('{"a":[2,1],"b":0}', '{"b":0,"a":[1,2]}', config=config)
        assert not result.identical
        assert result.options == NormalizationOptions(sort_keys=False, ignore_array_order=True)

    def test_both_options(self):
        before = '{"items":[{"id":2,"tags":["y","x"]},{"id":1}],"name":"n"}'
        after = '{"name":"n","items":[{"id":1},{"tags":["x","y"],"id":2}]}'
        result = compare(before, after, NormalizationOptions(sort_keys=True, ignore_array_order=True))
        assert result.identical

    def test_indent_from_config(self):
        result = compare('{"a":1}', '{"a":1}', config=DiffConfig(indent=4))
        assert result.before_canonical == '{\n    "a": 1\n}'

    def test_nested_change_localized(self):
        """Only the changed member is marked."""
        before = json.dumps({"a": {"x": 1, "y": 2}, "b": [1, 2, 3]})
        after = json.dumps({"a": {"x": 1, "y": 3}, "b": [1, 2, 3]})
        result = compare(before, after, SORT_KEYS)
        assert [line.prefixed for line in changed_lines(result)] == ['-     "y": 2', '+     "y": 3']

    def test_to_dict(self):
        data = compare('{"a":1}', '{"a":2}').to_dict()
        assert data["ok"] is True
        assert data["stats"] == {"added": 1, "removed": 1, "unchanged": 2}
        assert data["lines"][1] == {"kind": "removed", "content": '  "a": 1'}

    def test_recomputation_is_pure(self):
        """Repeated runs give equal results."""
        args = ('{"b":[3,1],"a":1}', '{"a":1,"b":[1,3,4]}', NormalizationOptions(True, True))
        assert compare(*args) == compare(*args)


class TestHostActions:
    """Format and swap."""

    def test_format_document(self):
        assert format_document('{"b":1,"a":[1,2]}') == '{\n  "b": 1,\n  "a": [\n    1,\n    2\n  ]\n}'

    def test_format_does_not_normalize(self):
        """Format keeps key and array order regardless of options."""
        formatted = format_document('{"z":[2,1],"a":0}', DiffConfig(sort_keys=True, ignore_array_order=True))
        assert formatted.index('"z"') < formatted.index('"a"')
        assert formatted.index("2") < formatted.index("1")

    def test_format_leaves_invalid_text_untouched(self):
        assert format_document("{not json") == "{not json"

    def test_swap_documents(self):
        assert swap_documents("one", "two") == ("two", "one")

    def test_swap_is_verbatim(self):
        """Swapping does not parse or alter either text."""
        assert swap_documents("{bad", ' {"a":1} ') == (' {"a":1} ', "{bad")


def test_version_exposed():
    assert __version__


def nested_document(depth: int, leaf: str) -> str:
    """Alternate objects and arrays to the given container depth."""
    opening = "".join('{"k":' if level % 2 == 0 else "[" for level in range(depth))
    closing = "".join("}" if level % 2 == 0 else "]" for level in reversed(range(depth)))
    return opening + leaf + closing


class TestNestingLimits:
    """Deep documents either compare or fail to parse; they never raise."""

    @pytest.mark.parametrize("options", [NONE, NormalizationOptions(sort_keys=True, ignore_array_order=True)])
    def test_at_default_max_depth(self, options):
        depth = DiffConfig().max_depth
        result = compare(nested_document(depth, "1"), nested_document(depth, "2"), options)
        assert isinstance(result, DiffResult)
        assert result.stats.added == 1
        assert result.stats.removed == 1

    @pytest.mark.parametrize("options", [NONE, NormalizationOptions(sort_keys=True, ignore_array_order=True)])
    def test_past_default_max_depth(self, options):
        depth = DiffConfig().max_depth + 1
        result = compare(nested_document(depth, "1"), nested_document(depth, "2"), options)
        assert isinstance(result, ParseFailure)
        assert result.side == "before"
        assert "depth" in result.message

    def test_at_largest_allowed_max_depth(self):
        config = DiffConfig(max_depth=200, ignore_array_order=True)
        result = compare(nested_document(200, "1"), nested_document(200, "1"), config=config)
        assert result.identical
