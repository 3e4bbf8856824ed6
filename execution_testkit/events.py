"""Lazily filtered views over recorded execution events."""

import logging
from collections.abc import Callable, Iterator, Sequence
from typing import Self

from execution_testkit.executions import Executions
from execution_testkit.models.event import (
    EventType,
    ExecutionEvent,
    Status,
    by_kind,
    by_status,
)

log = logging.getLogger(__name__)

type EventPredicate = Callable[[ExecutionEvent], bool]


def _accept_all(event: ExecutionEvent) -> bool:
    return True


class Events:
    """Re-queryable projection over a sequence of events.

    A view holds a reference to its backing sequence plus a membership
    predicate. Filters compose predicates into a new view; terminal
    operations (``count``, ``list``, iteration) rescan the backing
    sequence on every call, so repeated queries always agree.
    """

    __slots__ = ("_events", "_category", "_predicate")

    def __init__(
        self,
        events: Sequence[ExecutionEvent],
        category: str,
        predicate: EventPredicate = _accept_all,
    ) -> None:
        self._events = events
        self._category = category
        self._predicate = predicate

    @property
    def category(self) -> str:
        return self._category

    # --- Filters -----------------------------------------------------------

    def filter(self, predicate: EventPredicate) -> Self:
        """Return a view further restricted to events matching ``predicate``."""
        current = self._predicate
        return type(self)(
            self._events,
            self._category,
            lambda event: current(event) and predicate(event),
        )

    def filter_by_kind(self, kind: EventType) -> Self:
        return self.filter(by_kind(kind))

    def started(self) -> Self:
        return self.filter_by_kind(EventType.STARTED)

    def skipped(self) -> Self:
        return self.filter_by_kind(EventType.SKIPPED)

    def finished(self) -> Self:
        return self.filter_by_kind(EventType.FINISHED)

    def dynamic_test_registered(self) -> Self:
        return self.filter_by_kind(EventType.DYNAMIC_TEST_REGISTERED)

    def reporting_entry_published(self) -> Self:
        return self.filter_by_kind(EventType.REPORTING_ENTRY_PUBLISHED)

    def succeeded(self) -> Self:
        return self.finished().filter(by_status(Status.SUCCESSFUL))

    def failed(self) -> Self:
        return self.finished().filter(by_status(Status.FAILED))

    def aborted(self) -> Self:
        return self.finished().filter(by_status(Status.ABORTED))

    # --- Terminal operations -------------------------------------------------

    def __iter__(self) -> Iterator[ExecutionEvent]:
        predicate = self._predicate
        return (event for event in self._events if predicate(event))

    def count(self) -> int:
        return sum(1 for _ in self)

    def list(self) -> Sequence[ExecutionEvent]:
        """Snapshot the events currently in view."""
        return tuple(self)

    def executions(self) -> Executions:
        """Pair the events in view into executions."""
        return Executions(self.list(), self._category)

    def debug(self, level: int = logging.INFO) -> Self:
        """Log every event in view and return the view unchanged."""
        log.log(level, "%s Events:", self._category)
        for event in self:
            log.log(
                level,
                "  %s %s %r payload=%r",
                event.timestamp.isoformat(),
                event.kind,
                event.entity,
                event.payload,
            )
        return self

    def __repr__(self) -> str:
        return f"Events(category={self._category!r})"
