"""Models for recorded execution events."""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from enum import StrEnum
from typing import Self

from pydantic import Field, field_validator, model_validator

from execution_testkit.models.base import Model
from execution_testkit.models.descriptor import ClassifiedEntity


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EventType(StrEnum):
    """Lifecycle phase an event was recorded for."""

    STARTED = "started"
    SKIPPED = "skipped"
    FINISHED = "finished"
    DYNAMIC_TEST_REGISTERED = "dynamic_test_registered"
    REPORTING_ENTRY_PUBLISHED = "reporting_entry_published"


class Status(StrEnum):
    """Outcome of a finished execution."""

    SUCCESSFUL = "successful"
    ABORTED = "aborted"
    FAILED = "failed"


class TestExecutionResult(Model):
    """Outcome carried by a FINISHED event."""

    __test__ = False

    status: Status = Field(..., description="How the execution ended")
    throwable: BaseException | None = Field(
        default=None, description="Cause of an abort or failure, if any"
    )

    @classmethod
    def successful(cls) -> Self:
        return cls(status=Status.SUCCESSFUL)

    @classmethod
    def aborted(cls, throwable: BaseException | None = None) -> Self:
        return cls(status=Status.ABORTED, throwable=throwable)

    @classmethod
    def failed(cls, throwable: BaseException | None = None) -> Self:
        return cls(status=Status.FAILED, throwable=throwable)


class ReportEntry(Model):
    """Key-value data published by a test while it runs."""

    timestamp: datetime = Field(default_factory=_utc_now)
    key_values: Mapping[str, str] = Field(..., description="Published entries")

    @field_validator("key_values")
    @classmethod
    def check_not_empty(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        if not value:
            raise ValueError("Report entry must contain at least one key-value pair")
        return value

    @classmethod
    def from_mapping(cls, key_values: Mapping[str, str]) -> Self:
        return cls(key_values=dict(key_values))


type Payload = str | TestExecutionResult | ReportEntry

PAYLOAD_TYPES: Mapping[EventType, type[Payload] | None] = {
    EventType.STARTED: None,
    EventType.SKIPPED: str,
    EventType.FINISHED: TestExecutionResult,
    EventType.DYNAMIC_TEST_REGISTERED: None,
    EventType.REPORTING_ENTRY_PUBLISHED: ReportEntry,
}


class ExecutionEvent(Model):
    """A single lifecycle event recorded for a container or test.

    The payload type is fully determined by the event kind; see
    ``PAYLOAD_TYPES``. Events are immutable and reference their entity
    rather than copying it.
    """

    kind: EventType = Field(..., description="Lifecycle phase")
    entity: ClassifiedEntity = Field(..., description="Container or test")
    timestamp: datetime = Field(default_factory=_utc_now)
    payload: str | TestExecutionResult | ReportEntry | None = None

    @model_validator(mode="after")
    def check_payload_matches_kind(self) -> Self:
        expected = PAYLOAD_TYPES[self.kind]
        if expected is None:
            if self.payload is not None:
                raise ValueError(f"{self.kind} events carry no payload")
        elif not isinstance(self.payload, expected):
            raise ValueError(
                f"{self.kind} events require a {expected.__name__} payload, "
                f"got {type(self.payload).__name__}"
            )
        return self

    @classmethod
    def started(
        cls, entity: ClassifiedEntity, timestamp: datetime | None = None
    ) -> Self:
        return cls._create(EventType.STARTED, entity, timestamp, None)

    @classmethod
    def skipped(
        cls,
        entity: ClassifiedEntity,
        reason: str,
        timestamp: datetime | None = None,
    ) -> Self:
        return cls._create(EventType.SKIPPED, entity, timestamp, reason)

    @classmethod
    def finished(
        cls,
        entity: ClassifiedEntity,
        result: TestExecutionResult,
        timestamp: datetime | None = None,
    ) -> Self:
        return cls._create(EventType.FINISHED, entity, timestamp, result)

    @classmethod
    def dynamic_test_registered(
        cls, entity: ClassifiedEntity, timestamp: datetime | None = None
    ) -> Self:
        return cls._create(EventType.DYNAMIC_TEST_REGISTERED, entity, timestamp, None)

    @classmethod
    def reporting_entry_published(
        cls,
        entity: ClassifiedEntity,
        entry: ReportEntry,
        timestamp: datetime | None = None,
    ) -> Self:
        return cls._create(
            EventType.REPORTING_ENTRY_PUBLISHED, entity, timestamp, entry
        )

    @classmethod
    def _create(
        cls,
        kind: EventType,
        entity: ClassifiedEntity,
        timestamp: datetime | None,
        payload: Payload | None,
    ) -> Self:
        return cls(
            kind=kind,
            entity=entity,
            timestamp=timestamp if timestamp is not None else _utc_now(),
            payload=payload,
        )

    def payload_as[P: Payload](self, payload_type: type[P]) -> P | None:
        """Return the payload if it is an instance of ``payload_type``."""
        if isinstance(self.payload, payload_type):
            return self.payload
        return None

    def require_payload[P: Payload](self, payload_type: type[P]) -> P:
        """Return the payload as ``payload_type``.

        Raises:
            ValueError: If the event carries no payload of that type

        """
        if (payload := self.payload_as(payload_type)) is None:
            raise ValueError(
                f"{self.kind} event has no {payload_type.__name__} payload"
            )
        return payload


def by_kind(kind: EventType) -> Callable[[ExecutionEvent], bool]:
    """Match events of the given kind."""
    return lambda event: event.kind is kind


def by_entity(
    predicate: Callable[[ClassifiedEntity], bool],
) -> Callable[[ExecutionEvent], bool]:
    """Match events whose entity satisfies ``predicate``."""
    return lambda event: predicate(event.entity)


def by_payload[P: Payload](
    payload_type: type[P], predicate: Callable[[P], bool]
) -> Callable[[ExecutionEvent], bool]:
    """Match events carrying a ``payload_type`` payload that satisfies ``predicate``."""

    def matches(event: ExecutionEvent) -> bool:
        payload = event.payload_as(payload_type)
        return payload is not None and predicate(payload)

    return matches


def by_status(status: Status) -> Callable[[ExecutionEvent], bool]:
    """Match FINISHED events with the given outcome."""
    return by_payload(TestExecutionResult, lambda result: result.status is status)
