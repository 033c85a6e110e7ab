"""End-to-end comparison of two JSON documents.

parse -> normalize -> serialize_canonical -> diff_lines -> format

Every call recomputes from scratch; nothing is cached between runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from jsondiffview.canonical import serialize_canonical
from jsondiffview.config import DEFAULT_CONFIG, DiffConfig
from jsondiffview.errors import ParseFailure
from jsondiffview.formatter import (
    DiffStats,
    RenderedLine,
    format_as_lines,
    format_as_text,
    format_failure,
    summarize,
)
from jsondiffview.line_diff import EditScript, diff_lines
from jsondiffview.normalize import NormalizationOptions, normalize
from jsondiffview.parser import parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffResult:
    """Successful comparison of two documents.

    Attributes:
        script: Hunks relating the canonical texts
        before_canonical: Normalized, serialized "before" document
        after_canonical: Normalized, serialized "after" document
        options: Normalization applied to both sides
    """

    script: EditScript
    before_canonical: str
    after_canonical: str
    options: NormalizationOptions = field(default_factory=NormalizationOptions)

    @property
    def lines(self) -> list[RenderedLine]:
        return format_as_lines(self.script)

    @property
    def text(self) -> str:
        return format_as_text(self.script)

    @property
    def stats(self) -> DiffStats:
        return summarize(self.script)

    @property
    def identical(self) -> bool:
        return not self.stats.has_changes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "ok": True,
            "options": self.options.to_dict(),
            "lines": [line.to_dict() for line in self.lines],
            "text": self.text,
            "stats": self.stats.to_dict(),
        }


ComparisonResult = DiffResult | ParseFailure


def compare(
    before_text: str,
    after_text: str,
    options: NormalizationOptions | None = None,
    config: DiffConfig | None = None,
) -> ComparisonResult:
    """Compare two raw JSON texts.

    Args:
        before_text: Original document text
        after_text: New document text
        options: Normalization options (defaults to the config's options)
        config: Parser limits and output indent (uses defaults if None)

    Returns:
        DiffResult, or the ParseFailure of the first side that failed
        ("before" wins when both fail)
    """
    config = config or DEFAULT_CONFIG
    options = options or config.options

    before = parse(before_text, config)
    after = parse(after_text, config)

    if isinstance(before, ParseFailure):
        logger.info("Before document failed to parse: %s", before.message)
        return before.for_side("before")
    if isinstance(after, ParseFailure):
        logger.info("After document failed to parse: %s", after.message)
        return after.for_side("after")

    before_canonical = serialize_canonical(normalize(before, options), indent=config.indent)
    after_canonical = serialize_canonical(normalize(after, options), indent=config.indent)
    script = diff_lines(before_canonical, after_canonical)

    logger.debug(
        "Compared documents (sort_keys=%s, ignore_array_order=%s): %d hunks",
        options.sort_keys,
        options.ignore_array_order,
        len(script),
    )
    return DiffResult(
        script=script,
        before_canonical=before_canonical,
        after_canonical=after_canonical,
        options=options,
    )


def result_text(result: ComparisonResult) -> str:
    """Export text for either outcome: the prefixed diff or the parse error."""
    if isinstance(result, ParseFailure):
        return format_failure(result)
    return result.text


def format_document(text: str, config: DiffConfig | None = None) -> str:
    """Pretty-print one document without reordering anything.

    Text that does not parse is returned unchanged.
    """
    config = config or DEFAULT_CONFIG
    value = parse(text, config)
    if isinstance(value, ParseFailure):
        logger.debug("Format skipped, document does not parse: %s", value.message)
        return text
    return serialize_canonical(value, indent=config.indent)


def swap_documents(before_text: str, after_text: str) -> tuple[str, str]:
    """Exchange the two sides verbatim."""
    return after_text, before_text
