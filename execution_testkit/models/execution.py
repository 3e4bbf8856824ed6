"""Models for executions reconstructed from paired events."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from execution_testkit.models.descriptor import ClassifiedEntity
from execution_testkit.models.event import (
    EventType,
    ExecutionEvent,
    Status,
    TestExecutionResult,
)


@dataclass(frozen=True, kw_only=True)
class Execution:
    """One start/terminal pairing for a single occurrence of an entity.

    ``start_event`` is None when the terminal event had no matching STARTED
    event, e.g. a container that was skipped without ever starting.
    """

    entity: ClassifiedEntity
    start_event: ExecutionEvent | None
    terminal_event: ExecutionEvent

    @property
    def start_instant(self) -> datetime | None:
        return self.start_event.timestamp if self.start_event is not None else None

    @property
    def end_instant(self) -> datetime:
        return self.terminal_event.timestamp

    @property
    def duration(self) -> timedelta | None:
        if self.start_event is None:
            return None
        return self.terminal_event.timestamp - self.start_event.timestamp

    @property
    def skipped(self) -> bool:
        return self.terminal_event.kind is EventType.SKIPPED

    @property
    def skip_reason(self) -> str | None:
        return self.terminal_event.payload_as(str)

    @property
    def result(self) -> TestExecutionResult | None:
        return self.terminal_event.payload_as(TestExecutionResult)

    @property
    def status(self) -> Status | None:
        """Outcome of a finished execution, None if it was skipped."""
        result = self.result
        return result.status if result is not None else None
