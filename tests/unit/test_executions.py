"""Tests for pairing events into executions."""

import logging
from collections.abc import Iterator
from datetime import datetime, timedelta

import pytest

from execution_testkit.executions import Executions, pair_executions
from execution_testkit.models.event import ExecutionEvent, Status, TestExecutionResult
from execution_testkit.testing.factories import (
    ContainerDescriptorFactory,
    DescriptorFactory,
)


def test_pairs_start_with_finish(clock: Iterator[datetime]) -> None:
    """Pairs a STARTED event with the FINISHED event for the same entity."""
    entity = DescriptorFactory.build()
    started = ExecutionEvent.started(entity, next(clock))
    finished = ExecutionEvent.finished(
        entity, TestExecutionResult.successful(), next(clock)
    )

    (execution,) = pair_executions([started, finished])

    assert execution.entity is entity
    assert execution.start_event is started
    assert execution.terminal_event is finished
    assert execution.duration == timedelta(seconds=1)


def test_reentrant_starts_use_stack_discipline(clock: Iterator[datetime]) -> None:
    """Each terminal event closes the most recently opened start."""
    entity = DescriptorFactory.build()
    outer_start = ExecutionEvent.started(entity, next(clock))
    inner_start = ExecutionEvent.started(entity, next(clock))
    inner_finish = ExecutionEvent.finished(
        entity, TestExecutionResult.successful(), next(clock)
    )
    outer_finish = ExecutionEvent.finished(
        entity, TestExecutionResult.successful(), next(clock)
    )

    first, second = pair_executions(
        [outer_start, inner_start, inner_finish, outer_finish]
    )

    assert first.start_event is inner_start
    assert first.terminal_event is inner_finish
    assert first.duration == timedelta(seconds=1)
    assert second.start_event is outer_start
    assert second.terminal_event is outer_finish
    assert second.duration == timedelta(seconds=3)


def test_orphan_skip_has_no_start(clock: Iterator[datetime]) -> None:
    """A SKIPPED event without a prior start yields a start-less execution."""
    entity = ContainerDescriptorFactory.build()
    skipped = ExecutionEvent.skipped(entity, "disabled", next(clock))

    (execution,) = pair_executions([skipped])

    assert execution.entity is entity
    assert execution.start_event is None
    assert execution.duration is None
    assert execution.skip_reason == "disabled"


def test_orphan_finish_has_no_start(clock: Iterator[datetime]) -> None:
    """A FINISHED event without a prior start does not raise."""
    entity = DescriptorFactory.build()
    finished = ExecutionEvent.finished(
        entity, TestExecutionResult.failed(), next(clock)
    )

    (execution,) = pair_executions([finished])

    assert execution.start_event is None
    assert execution.status is Status.FAILED


def test_skip_after_start_closes_start(clock: Iterator[datetime]) -> None:
    """A SKIPPED event closes a pending start for the same entity."""
    entity = DescriptorFactory.build()
    started = ExecutionEvent.started(entity, next(clock))
    skipped = ExecutionEvent.skipped(entity, "assumption", next(clock))

    (execution,) = pair_executions([started, skipped])

    assert execution.start_event is started
    assert execution.skipped


def test_unterminated_start_yields_nothing(clock: Iterator[datetime]) -> None:
    """A start that never terminates produces no execution."""
    entity = DescriptorFactory.build()

    assert list(pair_executions([ExecutionEvent.started(entity, next(clock))])) == []


def test_restart_after_finish_is_independent(clock: Iterator[datetime]) -> None:
    """An entity that runs twice yields two independent executions."""
    entity = DescriptorFactory.build()
    events = [
        ExecutionEvent.started(entity, next(clock)),
        ExecutionEvent.finished(entity, TestExecutionResult.failed(), next(clock)),
        ExecutionEvent.started(entity, next(clock)),
        ExecutionEvent.finished(entity, TestExecutionResult.successful(), next(clock)),
    ]

    first, second = pair_executions(events)

    assert first.start_event is events[0]
    assert first.status is Status.FAILED
    assert second.start_event is events[2]
    assert second.status is Status.SUCCESSFUL


def test_matches_entities_by_identity(clock: Iterator[datetime]) -> None:
    """Entities with equal attributes are still paired separately."""
    first = DescriptorFactory.build(unique_id="[test:a]", display_name="a")
    twin = DescriptorFactory.build(unique_id="[test:a]", display_name="a")
    started = ExecutionEvent.started(first, next(clock))
    twin_finished = ExecutionEvent.finished(
        twin, TestExecutionResult.successful(), next(clock)
    )

    (execution,) = pair_executions([started, twin_finished])

    assert execution.entity is twin
    assert execution.start_event is None


def test_interleaved_entities(clock: Iterator[datetime]) -> None:
    """Pairs interleaved container and test events by entity."""
    container = ContainerDescriptorFactory.build()
    test = DescriptorFactory.build()
    events = [
        ExecutionEvent.started(container, next(clock)),
        ExecutionEvent.started(test, next(clock)),
        ExecutionEvent.finished(test, TestExecutionResult.successful(), next(clock)),
        ExecutionEvent.finished(
            container, TestExecutionResult.successful(), next(clock)
        ),
    ]

    test_execution, container_execution = pair_executions(events)

    assert test_execution.start_event is events[1]
    assert container_execution.start_event is events[0]
    assert container_execution.duration == timedelta(seconds=3)


@pytest.fixture
def executions(clock: Iterator[datetime]) -> Executions:
    """View over one execution of each outcome plus a skip."""
    passing = DescriptorFactory.build()
    failing = DescriptorFactory.build()
    aborting = DescriptorFactory.build()
    skipped = DescriptorFactory.build()
    return Executions(
        (
            ExecutionEvent.started(passing, next(clock)),
            ExecutionEvent.finished(
                passing, TestExecutionResult.successful(), next(clock)
            ),
            ExecutionEvent.started(failing, next(clock)),
            ExecutionEvent.finished(failing, TestExecutionResult.failed(), next(clock)),
            ExecutionEvent.started(aborting, next(clock)),
            ExecutionEvent.finished(
                aborting, TestExecutionResult.aborted(), next(clock)
            ),
            ExecutionEvent.skipped(skipped, "disabled", next(clock)),
        ),
        "Test",
    )


def test_view_filters(executions: Executions) -> None:
    """Execution filters select by start, skip and outcome."""
    assert executions.count() == 4
    assert executions.started().count() == 3
    assert executions.skipped().count() == 1
    assert executions.finished().count() == 3
    assert executions.succeeded().count() == 1
    assert executions.failed().count() == 1
    assert executions.aborted().count() == 1


def test_view_is_recomputed_consistently(executions: Executions) -> None:
    """Repeated terminal calls produce equal results."""
    assert executions.list() == executions.list()
    assert executions.failed().list() == executions.failed().list()


def test_custom_filter(executions: Executions) -> None:
    """filter() composes with built-in filters."""
    long_running = executions.started().filter(
        lambda execution: execution.duration is not None
        and execution.duration >= timedelta(seconds=1)
    )

    assert long_running.count() == 3
    assert long_running.skipped().count() == 0


def test_debug_logs_executions(
    executions: Executions, caplog: pytest.LogCaptureFixture
) -> None:
    """debug() logs each execution and returns the view."""
    with caplog.at_level(logging.DEBUG):
        result = executions.skipped().debug(logging.DEBUG)

    assert result is not None
    assert "Test Executions:" in caplog.text
    assert "duration=None" in caplog.text
