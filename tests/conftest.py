"""Shared fixtures for building recorded event logs."""

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture
def clock() -> Iterator[datetime]:
    """Strictly increasing UTC timestamps one second apart."""
    start = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
    return (start + timedelta(seconds=offset) for offset in range(10_000))
