"""Rendering of edit scripts as prefixed lines.

``format_as_lines`` feeds display widgets; ``format_as_text`` produces the
export text. Both split hunks the same way, so they always agree on line
boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass

from jsondiffview.errors import ParseFailure
from jsondiffview.line_diff import EditScript, HunkKind

PREFIXES: dict[HunkKind, str] = {
    HunkKind.ADDED: "+ ",
    HunkKind.REMOVED: "- ",
    HunkKind.UNCHANGED: "  ",
}

PARSE_ERROR_PREFIX = "JSON parse error: "


@dataclass(frozen=True)
class RenderedLine:
    """One display line of a diff."""

    kind: HunkKind
    content: str

    @property
    def prefixed(self) -> str:
        return PREFIXES[self.kind] + self.content

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"kind": self.kind.value, "content": self.content}


@dataclass(frozen=True)
class DiffStats:
    """Line counts of a rendered diff."""

    added: int = 0
    removed: int = 0
    unchanged: int = 0

    @property
    def has_changes(self) -> bool:
        return self.added > 0 or self.removed > 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {"added": self.added, "removed": self.removed, "unchanged": self.unchanged}


def format_as_lines(script: EditScript) -> list[RenderedLine]:
    """Flatten an edit script into display lines.

    Each hunk is split on line breaks; the empty fragment left by a hunk's
    trailing line break is dropped so no blank line is invented.

    Example:
        >>> from jsondiffview.line_diff import diff_lines
        >>> [line.prefixed for line in format_as_lines(diff_lines("a\\nb", "a\\nc"))]
        ['  a', '- b', '+ c']
    """
    lines: list[RenderedLine] = []
    for hunk in script:
        fragments = hunk.text.split("\n")
        if fragments[-1] == "":
            fragments.pop()
        lines.extend(RenderedLine(hunk.kind, fragment) for fragment in fragments)
    return lines


def format_as_text(script: EditScript) -> str:
    """Render an edit script as prefixed lines joined by newlines."""
    return "\n".join(line.prefixed for line in format_as_lines(script))


def format_failure(failure: ParseFailure) -> str:
    """Export text shown in place of a diff when parsing fails."""
    return f"{PARSE_ERROR_PREFIX}{failure.message}"


def summarize(script: EditScript) -> DiffStats:
    """Count rendered lines per kind."""
    counts = {kind: 0 for kind in HunkKind}
    for line in format_as_lines(script):
        counts[line.kind] += 1
    return DiffStats(
        added=counts[HunkKind.ADDED],
        removed=counts[HunkKind.REMOVED],
        unchanged=counts[HunkKind.UNCHANGED],
    )
