"""Aggregated results of one recorded test run."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from execution_testkit.event_log import EventLog, is_container, is_test, partition
from execution_testkit.events import Events
from execution_testkit.executions import Executions
from execution_testkit.models.descriptor import ClassifiedEntity
from execution_testkit.models.event import ExecutionEvent

log = logging.getLogger(__name__)

ALL_CATEGORY = "All"
CONTAINER_CATEGORY = "Container"
TEST_CATEGORY = "Test"


class EventCounts(ABC):
    """Convenience counts and lists derived from ``events()``."""

    __slots__ = ()

    @abstractmethod
    def events(self) -> Events:
        """Return the view the counts are derived from."""

    def skipped_count(self) -> int:
        return self.events().skipped().count()

    def started_count(self) -> int:
        return self.events().started().count()

    def finished_count(self) -> int:
        return self.events().finished().count()

    def successful_count(self) -> int:
        return self.events().succeeded().count()

    def failed_count(self) -> int:
        return self.events().failed().count()

    def aborted_count(self) -> int:
        return self.events().aborted().count()

    def dynamic_test_registration_count(self) -> int:
        return self.events().dynamic_test_registered().count()

    def reporting_entry_publication_count(self) -> int:
        return self.events().reporting_entry_published().count()

    def successful_events(self) -> Sequence[ExecutionEvent]:
        return self.events().succeeded().list()

    def failed_events(self) -> Sequence[ExecutionEvent]:
        return self.events().failed().list()


@dataclass(frozen=True, kw_only=True)
class FilteredResults(EventCounts):
    """Events and executions for the entities a classifier selects."""

    category: str
    execution_events: tuple[ExecutionEvent, ...]

    @classmethod
    def from_log(
        cls,
        event_log: EventLog,
        classifier: Callable[[ClassifiedEntity], bool],
        category: str,
    ) -> "FilteredResults":
        return cls(
            category=category, execution_events=partition(event_log, classifier)
        )

    def events(self) -> Events:
        return Events(self.execution_events, self.category)

    def executions(self) -> Executions:
        return Executions(self.execution_events, self.category)


class ExecutionResults(EventCounts):
    """Entry point for querying a recorded test run.

    Holds the full event log plus container and test partitions computed
    once at construction. Every accessor is a pure query over that log:
    nothing raises, and absence is reported as zero or empty. Unprefixed
    counts cover all events; ``containers_*`` and ``tests_*`` counts cover
    the matching partition.

    Args:
        events: Recorded events in chronological order

    Raises:
        InvalidInputError: If ``events`` is None or contains None

    """

    __slots__ = ("_log", "_containers", "_tests")

    def __init__(self, events: Iterable[ExecutionEvent] | None) -> None:
        self._log = EventLog(events)
        self._tests = FilteredResults.from_log(self._log, is_test, TEST_CATEGORY)
        self._containers = FilteredResults.from_log(
            self._log, is_container, CONTAINER_CATEGORY
        )
        log.debug(
            "Execution results built: events=%d containers=%d tests=%d",
            len(self._log),
            len(self._containers.execution_events),
            len(self._tests.execution_events),
        )

    # --- Views ---------------------------------------------------------------

    def events(self) -> Events:
        return Events(self._log.events, ALL_CATEGORY)

    def executions(self) -> Executions:
        return Executions(self._log.events, ALL_CATEGORY)

    def containers(self) -> FilteredResults:
        """Results for entities whose ``is_container()`` is true."""
        return self._containers

    def tests(self) -> FilteredResults:
        """Results for entities whose ``is_test()`` is true."""
        return self._tests

    def execution_events(self) -> Sequence[ExecutionEvent]:
        return self._log.events

    # --- Container events ----------------------------------------------------

    def containers_skipped_count(self) -> int:
        return self._containers.skipped_count()

    def containers_started_count(self) -> int:
        return self._containers.started_count()

    def containers_finished_count(self) -> int:
        return self._containers.finished_count()

    def containers_successful_count(self) -> int:
        return self._containers.successful_count()

    def containers_failed_count(self) -> int:
        return self._containers.failed_count()

    def containers_aborted_count(self) -> int:
        return self._containers.aborted_count()

    def containers_successful_events(self) -> Sequence[ExecutionEvent]:
        return self._containers.successful_events()

    def containers_failed_events(self) -> Sequence[ExecutionEvent]:
        return self._containers.failed_events()

    # --- Test events ---------------------------------------------------------

    def tests_skipped_count(self) -> int:
        return self._tests.skipped_count()

    def tests_started_count(self) -> int:
        return self._tests.started_count()

    def tests_finished_count(self) -> int:
        return self._tests.finished_count()

    def tests_successful_count(self) -> int:
        return self._tests.successful_count()

    def tests_failed_count(self) -> int:
        return self._tests.failed_count()

    def tests_aborted_count(self) -> int:
        return self._tests.aborted_count()

    def tests_successful_events(self) -> Sequence[ExecutionEvent]:
        return self._tests.successful_events()

    def tests_failed_events(self) -> Sequence[ExecutionEvent]:
        return self._tests.failed_events()

    def __repr__(self) -> str:
        return f"ExecutionResults({len(self._log)} events)"
