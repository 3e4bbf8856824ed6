"""Engine listener that records execution events for later querying."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone

from execution_testkit.models.descriptor import ClassifiedEntity
from execution_testkit.models.event import (
    ExecutionEvent,
    ReportEntry,
    TestExecutionResult,
)
from execution_testkit.results import ExecutionResults

log = logging.getLogger(__name__)


def utc_clock() -> datetime:
    return datetime.now(timezone.utc)


class EventRecorder:
    """Collects events reported by an engine, possibly from several threads.

    Args:
        clock: Source of event timestamps (default: current UTC time)

    """

    def __init__(self, clock: Callable[[], datetime] = utc_clock) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._events: list[ExecutionEvent] = []

    def execution_started(self, entity: ClassifiedEntity) -> None:
        self._record(ExecutionEvent.started(entity, self._clock()))

    def execution_skipped(self, entity: ClassifiedEntity, reason: str) -> None:
        self._record(ExecutionEvent.skipped(entity, reason, self._clock()))

    def execution_finished(
        self, entity: ClassifiedEntity, result: TestExecutionResult
    ) -> None:
        self._record(ExecutionEvent.finished(entity, result, self._clock()))

    def dynamic_test_registered(self, entity: ClassifiedEntity) -> None:
        self._record(ExecutionEvent.dynamic_test_registered(entity, self._clock()))

    def reporting_entry_published(
        self, entity: ClassifiedEntity, entry: ReportEntry
    ) -> None:
        self._record(
            ExecutionEvent.reporting_entry_published(entity, entry, self._clock())
        )

    def get_execution_results(self) -> ExecutionResults:
        """Snapshot everything recorded so far into queryable results."""
        with self._lock:
            snapshot = tuple(self._events)
        return ExecutionResults(snapshot)

    def _record(self, event: ExecutionEvent) -> None:
        with self._lock:
            self._events.append(event)
        log.debug("Recorded %s event for %r", event.kind, event.entity)
