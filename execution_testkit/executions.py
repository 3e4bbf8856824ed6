"""Executions reconstructed by pairing STARTED events with terminal events."""

import logging
from collections.abc import Callable, Iterator, Sequence
from typing import Self

from execution_testkit.models.event import EventType, ExecutionEvent, Status
from execution_testkit.models.execution import Execution

log = logging.getLogger(__name__)

type ExecutionPredicate = Callable[[Execution], bool]

TERMINAL_EVENT_KINDS = frozenset({EventType.FINISHED, EventType.SKIPPED})


def pair_executions(events: Sequence[ExecutionEvent]) -> Iterator[Execution]:
    """Yield one execution per terminal event, in terminal-event order.

    Each terminal event closes the most recently opened STARTED event for the
    same entity (entities are matched by identity). A terminal event with
    nothing open yields an execution without a start. STARTED events that
    never terminate yield nothing.
    """
    pending: dict[int, list[ExecutionEvent]] = {}

    for event in events:
        key = id(event.entity)
        if event.kind is EventType.STARTED:
            pending.setdefault(key, []).append(event)
        elif event.kind in TERMINAL_EVENT_KINDS:
            stack = pending.get(key)
            start = stack.pop() if stack else None
            if stack is not None and not stack:
                del pending[key]
            yield Execution(
                entity=event.entity, start_event=start, terminal_event=event
            )


def _accept_all(execution: Execution) -> bool:
    return True


class Executions:
    """Re-queryable view over the executions found in a sequence of events.

    Pairing is recomputed on every terminal operation; nothing is cached.
    """

    __slots__ = ("_events", "_category", "_predicate")

    def __init__(
        self,
        events: Sequence[ExecutionEvent],
        category: str,
        predicate: ExecutionPredicate = _accept_all,
    ) -> None:
        self._events = events
        self._category = category
        self._predicate = predicate

    @property
    def category(self) -> str:
        return self._category

    # --- Filters -----------------------------------------------------------

    def filter(self, predicate: ExecutionPredicate) -> Self:
        current = self._predicate
        return type(self)(
            self._events,
            self._category,
            lambda execution: current(execution) and predicate(execution),
        )

    def started(self) -> Self:
        """Executions that have a recorded start."""
        return self.filter(lambda execution: execution.start_event is not None)

    def skipped(self) -> Self:
        return self.filter(lambda execution: execution.skipped)

    def finished(self) -> Self:
        return self.filter(lambda execution: execution.result is not None)

    def succeeded(self) -> Self:
        return self._with_status(Status.SUCCESSFUL)

    def failed(self) -> Self:
        return self._with_status(Status.FAILED)

    def aborted(self) -> Self:
        return self._with_status(Status.ABORTED)

    def _with_status(self, status: Status) -> Self:
        return self.filter(lambda execution: execution.status is status)

    # --- Terminal operations -------------------------------------------------

    def __iter__(self) -> Iterator[Execution]:
        predicate = self._predicate
        return (
            execution
            for execution in pair_executions(self._events)
            if predicate(execution)
        )

    def count(self) -> int:
        return sum(1 for _ in self)

    def list(self) -> Sequence[Execution]:
        """Snapshot the executions currently in view."""
        return tuple(self)

    def debug(self, level: int = logging.INFO) -> Self:
        """Log every execution in view and return the view unchanged."""
        log.log(level, "%s Executions:", self._category)
        for execution in self:
            log.log(
                level,
                "  %r start=%s end=%s duration=%s terminal=%s",
                execution.entity,
                execution.start_instant,
                execution.end_instant,
                execution.duration,
                execution.terminal_event.kind,
            )
        return self

    def __repr__(self) -> str:
        return f"Executions(category={self._category!r})"
