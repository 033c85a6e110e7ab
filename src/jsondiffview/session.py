"""Interactive comparison state for hosts.

``DiffSession`` holds what a viewer shows: two raw texts and the two
toggles. Every change recomputes the comparison through the pipeline.

``LatestResult`` orders results from overlapping computations: each run takes
a ticket when issued and only publishes if no later-issued run has published
first, so a slow stale run never replaces a newer result.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from jsondiffview.config import DEFAULT_CONFIG, DiffConfig
from jsondiffview.normalize import NormalizationOptions
from jsondiffview.pipeline import ComparisonResult, compare, format_document, result_text, swap_documents

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatestResult(Generic[T]):
    """Thread-safe holder applying last-issued-wins ordering."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._published_ticket = 0
        self._value: T | None = None

    def issue(self) -> int:
        """Reserve a ticket for a run that is about to start."""
        with self._lock:
            self._issued += 1
            return self._issued

    def publish(self, ticket: int, value: T) -> bool:
        """Offer a finished run's value.

        Returns:
            True if accepted; False if a later-issued run already published
        """
        with self._lock:
            if ticket > self._issued:
                raise ValueError(f"Ticket {ticket} was never issued")
            if ticket <= self._published_ticket:
                logger.debug("Discarding stale result %d (current %d)", ticket, self._published_ticket)
                return False
            self._published_ticket = ticket
            self._value = value
            return True

    @property
    def value(self) -> T | None:
        with self._lock:
            return self._value

    @property
    def ticket(self) -> int:
        """Ticket of the currently published value (0 if none)."""
        with self._lock:
            return self._published_ticket


@dataclass(frozen=True)
class SessionState:
    """Inputs of a viewer."""

    before: str = ""
    after: str = ""
    sort_keys: bool = True
    ignore_array_order: bool = False

    @property
    def options(self) -> NormalizationOptions:
        return NormalizationOptions(sort_keys=self.sort_keys, ignore_array_order=self.ignore_array_order)


class DiffSession:
    """Viewer state plus the most recently completed comparison."""

    def __init__(self, before: str = "", after: str = "", config: DiffConfig | None = None):
        self.config = config or DEFAULT_CONFIG
        self._state = SessionState(
            before=before,
            after=after,
            sort_keys=self.config.sort_keys,
            ignore_array_order=self.config.ignore_array_order,
        )
        self._state_lock = threading.Lock()
        self._latest: LatestResult[ComparisonResult] = LatestResult()
        self.refresh()

    @property
    def state(self) -> SessionState:
        with self._state_lock:
            return self._state

    @property
    def result(self) -> ComparisonResult:
        value = self._latest.value
        if value is None:
            raise RuntimeError("No comparison has completed yet")
        return value

    @property
    def text(self) -> str:
        """Export text of the current result."""
        return result_text(self.result)

    def update(self, **changes: object) -> ComparisonResult:
        """Change inputs or toggles and recompute.

        Accepts any of: before, after, sort_keys, ignore_array_order.
        """
        with self._state_lock:
            self._state = replace(self._state, **changes)
        return self.refresh()

    def set_before(self, text: str) -> ComparisonResult:
        return self.update(before=text)

    def set_after(self, text: str) -> ComparisonResult:
        return self.update(after=text)

    def swap(self) -> ComparisonResult:
        """Exchange the two texts verbatim."""
        with self._state_lock:
            before, after = swap_documents(self._state.before, self._state.after)
            self._state = replace(self._state, before=before, after=after)
        return self.refresh()

    def format(self) -> ComparisonResult:
        """Pretty-print each side that parses; leave the other untouched."""
        with self._state_lock:
            self._state = replace(
                self._state,
                before=format_document(self._state.before, self.config),
                after=format_document(self._state.after, self.config),
            )
        return self.refresh()

    def refresh(self) -> ComparisonResult:
        """Recompute from the current state and publish if still the latest."""
        with self._state_lock:
            ticket = self._latest.issue()
            state = self._state
        result = compare(state.before, state.after, state.options, self.config)
        self._latest.publish(ticket, result)
        return self.result
