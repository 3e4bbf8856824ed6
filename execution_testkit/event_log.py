"""Immutable ordered log of recorded execution events."""

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import overload

from execution_testkit.errors import InvalidInputError
from execution_testkit.models.descriptor import ClassifiedEntity
from execution_testkit.models.event import ExecutionEvent


def is_container(entity: ClassifiedEntity) -> bool:
    """Classify an entity as a container."""
    return entity.is_container()


def is_test(entity: ClassifiedEntity) -> bool:
    """Classify an entity as a test."""
    return entity.is_test()


class EventLog(Sequence[ExecutionEvent]):
    """Ordered, read-only sequence of events for one test run.

    The log never changes after construction, so any number of views may
    scan it concurrently without synchronization.
    """

    __slots__ = ("_events",)

    def __init__(self, events: Iterable[ExecutionEvent] | None) -> None:
        if events is None:
            raise InvalidInputError("ExecutionEvent list must not be None")
        snapshot = tuple(events)
        if any(event is None for event in snapshot):
            raise InvalidInputError(
                "ExecutionEvent list must not contain None elements"
            )
        self._events = snapshot

    @property
    def events(self) -> tuple[ExecutionEvent, ...]:
        return self._events

    @overload
    def __getitem__(self, index: int) -> ExecutionEvent: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[ExecutionEvent]: ...

    def __getitem__(
        self, index: int | slice
    ) -> ExecutionEvent | Sequence[ExecutionEvent]:
        return self._events[index]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[ExecutionEvent]:
        return iter(self._events)

    def __repr__(self) -> str:
        return f"EventLog({len(self._events)} events)"


def partition(
    log: Sequence[ExecutionEvent],
    predicate: Callable[[ClassifiedEntity], bool],
) -> tuple[ExecutionEvent, ...]:
    """Return the events whose entity satisfies ``predicate``, in log order."""
    return tuple(event for event in log if predicate(event.entity))
