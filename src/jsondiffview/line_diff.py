"""Line-level differencing of canonical texts.

Computes a shortest edit script with Myers' O(ND) algorithm ("An O(ND)
Difference Algorithm and Its Variations", 1986) and groups it into hunks.
The search stops at MAX_EDIT_DISTANCE; past it, the region between the
common prefix and suffix is reported as one removal followed by one addition.

Guarantees:
- removed + unchanged hunks concatenate to the "before" text
- added + unchanged hunks concatenate to the "after" text
- lines only match when byte-identical
- within a changed region, removed lines precede added lines
- the same input pair always yields the same script
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HunkKind(str, Enum):
    """How a run of text relates the two sides."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class Hunk:
    """A maximal run of lines sharing one kind.

    Attributes:
        kind: unchanged, added or removed
        text: The lines, each with its line break (the last may lack one)
    """

    kind: HunkKind
    text: str

    @property
    def line_count(self) -> int:
        """Number of lines in this hunk."""
        return len(split_lines(self.text))

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"kind": self.kind.value, "text": self.text}


EditScript = tuple[Hunk, ...]

_EQUAL = 0
_DELETE = 1
_INSERT = 2

# Bounds search time and trace memory (about D**2 list slots)
MAX_EDIT_DISTANCE = 1000


def split_lines(text: str) -> list[str]:
    """Split text into lines that keep their trailing newline.

    >>> split_lines("a\\nb\\n")
    ['a\\n', 'b\\n']
    >>> split_lines("a\\nb")
    ['a\\n', 'b']
    """
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def _shortest_edit(a: list[str], b: list[str], max_distance: int = MAX_EDIT_DISTANCE) -> list[int] | None:
    """Return the Myers shortest edit script as a list of operations.

    ``frontier[k + offset]`` is the furthest x reached on diagonal k. Before
    round d the diagonals -d-1..d+1 are snapshotted so the path can be rebuilt
    by walking back. Returns None when the edit distance exceeds max_distance.
    """
    n, m = len(a), len(b)
    limit = min(n + m, max_distance)
    offset = limit + 1
    frontier = [0] * (2 * limit + 3)
    trace: list[list[int]] = []

    for d in range(limit + 1):
        trace.append(frontier[offset - d - 1:offset + d + 2])
        for k in range(-d, d + 1, 2):
            i = k + offset
            if k == -d or (k != d and frontier[i - 1] < frontier[i + 1]):
                x = frontier[i + 1]
            else:
                x = frontier[i - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            frontier[i] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m)

    return None


def _backtrack(trace: list[list[int]], n: int, m: int) -> list[int]:
    ops: list[int] = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        # trace[d][j] holds diagonal j - d - 1
        snapshot = trace[d]
        base = d + 1
        k = x - y
        if k == -d or (k != d and snapshot[base + k - 1] < snapshot[base + k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = snapshot[base + prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            ops.append(_EQUAL)
            x -= 1
            y -= 1

        if d > 0:
            ops.append(_INSERT if x == prev_x else _DELETE)
        x, y = prev_x, prev_y

    ops.reverse()
    return ops


def _edit_ops(a: list[str], b: list[str]) -> list[int]:
    # Common prefix and suffix never need searching
    prefix = 0
    while prefix < len(a) and prefix < len(b) and a[prefix] == b[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < len(a) - prefix
        and suffix < len(b) - prefix
        and a[len(a) - 1 - suffix] == b[len(b) - 1 - suffix]
    ):
        suffix += 1

    middle_a = a[prefix:len(a) - suffix]
    middle_b = b[prefix:len(b) - suffix]

    middle = None
    if middle_a and middle_b and not set(middle_a).isdisjoint(middle_b):
        middle = _shortest_edit(middle_a, middle_b)
    if middle is None:
        # One side empty, nothing shared, or too far apart to search
        middle = [_DELETE] * len(middle_a) + [_INSERT] * len(middle_b)

    return [_EQUAL] * prefix + middle + [_EQUAL] * suffix


def diff_lines(before: str, after: str) -> EditScript:
    """Compute the line edit script turning ``before`` into ``after``.

    Args:
        before: Canonical text of the original document
        after: Canonical text of the new document

    Returns:
        Ordered hunks; empty when both texts are empty

    Example:
        >>> [(h.kind.value, h.text) for h in diff_lines("a\\nb", "a\\nc")]
        [('unchanged', 'a\\n'), ('removed', 'b'), ('added', 'c')]
    """
    a = split_lines(before)
    b = split_lines(after)

    hunks: list[Hunk] = []
    unchanged: list[str] = []
    removed: list[str] = []
    added: list[str] = []

    def flush_changes() -> None:
        if removed:
            hunks.append(Hunk(HunkKind.REMOVED, "".join(removed)))
            removed.clear()
        if added:
            hunks.append(Hunk(HunkKind.ADDED, "".join(added)))
            added.clear()

    def flush_unchanged() -> None:
        if unchanged:
            hunks.append(Hunk(HunkKind.UNCHANGED, "".join(unchanged)))
            unchanged.clear()

    x = y = 0
    for op in _edit_ops(a, b):
        if op == _EQUAL:
            flush_changes()
            unchanged.append(a[x])
            x += 1
            y += 1
        elif op == _DELETE:
            flush_unchanged()
            removed.append(a[x])
            x += 1
        else:
            flush_unchanged()
            added.append(b[y])
            y += 1

    flush_changes()
    flush_unchanged()
    return tuple(hunks)


def reconstruct(script: EditScript, side: str) -> str:
    """Rebuild one side's text from a script.

    Args:
        script: Output of diff_lines
        side: "before" (removed + unchanged) or "after" (added + unchanged)
    """
    if side == "before":
        keep = {HunkKind.UNCHANGED, HunkKind.REMOVED}
    elif side == "after":
        keep = {HunkKind.UNCHANGED, HunkKind.ADDED}
    else:
        raise ValueError(f"side must be 'before' or 'after', got {side!r}")
    return "".join(hunk.text for hunk in script if hunk.kind in keep)
