"""JSON Diff Viewer core.

Parses two JSON documents, normalizes them under user-selected equivalence
rules and produces a deterministic line diff.

Example:
    >>> from jsondiffview import compare, NormalizationOptions
    >>> result = compare('{"a": 1, "b": 2}', '{"b": 2, "a": 1}', NormalizationOptions(sort_keys=True))
    >>> result.identical
    True
"""

__version__ = "0.3.0"

from jsondiffview.canonical import compact_serialization, serialize_canonical
from jsondiffview.config import DiffConfig
from jsondiffview.errors import ConfigError, JsonDiffError, ParseFailure
from jsondiffview.formatter import (
    DiffStats,
    RenderedLine,
    format_as_lines,
    format_as_text,
    format_failure,
    summarize,
)
from jsondiffview.line_diff import EditScript, Hunk, HunkKind, diff_lines, reconstruct
from jsondiffview.normalize import NormalizationOptions, normalize
from jsondiffview.parser import parse
from jsondiffview.pipeline import (
    ComparisonResult,
    DiffResult,
    compare,
    format_document,
    result_text,
    swap_documents,
)
from jsondiffview.session import DiffSession, LatestResult
from jsondiffview.values import JsonValue, ValueKind

__all__ = [
    # Values
    "JsonValue",
    "ValueKind",
    # Core stages
    "parse",
    "normalize",
    "NormalizationOptions",
    "serialize_canonical",
    "compact_serialization",
    "diff_lines",
    "reconstruct",
    "Hunk",
    "HunkKind",
    "EditScript",
    "format_as_lines",
    "format_as_text",
    "format_failure",
    "summarize",
    "RenderedLine",
    "DiffStats",
    # Pipeline
    "compare",
    "format_document",
    "swap_documents",
    "result_text",
    "DiffResult",
    "ComparisonResult",
    "DiffSession",
    "LatestResult",
    # Configuration and errors
    "DiffConfig",
    "ParseFailure",
    "JsonDiffError",
    "ConfigError",
]
