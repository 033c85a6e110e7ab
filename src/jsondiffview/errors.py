"""Error types.

Parse failures are result values, not exceptions: the pipeline returns a
``ParseFailure`` and the host renders it in place of a diff. Exceptions are
reserved for misuse of the package itself (bad configuration, unreadable
config files).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class JsonDiffError(Exception):
    """Base error for jsondiffview."""


class ConfigError(JsonDiffError):
    """Invalid configuration value or unreadable configuration file."""


@dataclass(frozen=True)
class ParseFailure:
    """Text that could not be decoded as a single JSON document.

    Attributes:
        message: The decoder's message, unchanged
        side: "before" or "after" when produced by the pipeline, else None
    """

    message: str
    side: str | None = None

    def for_side(self, side: str) -> ParseFailure:
        """Copy of this failure attributed to one side of a comparison."""
        return ParseFailure(message=self.message, side=side)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"side": self.side, "message": self.message}
