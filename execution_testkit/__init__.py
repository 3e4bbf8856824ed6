"""Query layer over recorded test-execution lifecycle events."""

from execution_testkit.errors import InvalidInputError
from execution_testkit.event_log import EventLog, is_container, is_test, partition
from execution_testkit.events import Events
from execution_testkit.executions import Executions
from execution_testkit.models.descriptor import ClassifiedEntity, TestDescriptor
from execution_testkit.models.event import (
    EventType,
    ExecutionEvent,
    ReportEntry,
    Status,
    TestExecutionResult,
)
from execution_testkit.models.execution import Execution
from execution_testkit.recorder import EventRecorder
from execution_testkit.results import ExecutionResults, FilteredResults

__all__ = [
    "ClassifiedEntity",
    "EventLog",
    "EventRecorder",
    "EventType",
    "Events",
    "Execution",
    "ExecutionEvent",
    "ExecutionResults",
    "Executions",
    "FilteredResults",
    "InvalidInputError",
    "ReportEntry",
    "Status",
    "TestDescriptor",
    "TestExecutionResult",
    "is_container",
    "is_test",
    "partition",
]
