"""Memoizing decorator over a configuration source."""

import logging
import threading
from collections.abc import Callable
from typing import Any, cast

from execution_testkit.config.configuration import (
    DEACTIVATE_CONDITIONS_PATTERN_PROPERTY_NAME,
    DEFAULT_EXECUTION_MODE_PROPERTY_NAME,
    DEFAULT_TEST_INSTANCE_LIFECYCLE_PROPERTY_NAME,
    EXTENSIONS_AUTODETECTION_ENABLED_PROPERTY_NAME,
    PARALLEL_EXECUTION_ENABLED_PROPERTY_NAME,
    Configuration,
    ExecutionMode,
    Lifecycle,
)

log = logging.getLogger(__name__)

_MISSING = object()


class CachingConfiguration:
    """Configuration that computes each named option once and reuses it.

    Values are computed outside the lock and committed under it, so
    concurrent first readers may each call the delegate, but only the first
    committed value is ever stored and returned. A delegate that raises
    leaves the option uncached. Raw parameter lookups are not cached.
    """

    def __init__(self, delegate: Configuration) -> None:
        self._delegate = delegate
        self._lock = threading.Lock()
        self._cache: dict[str, Any] = {}

    def get_raw_configuration_parameter(self, key: str) -> str | None:
        return self._delegate.get_raw_configuration_parameter(key)

    def is_parallel_execution_enabled(self) -> bool:
        return self._compute_if_absent(
            PARALLEL_EXECUTION_ENABLED_PROPERTY_NAME,
            self._delegate.is_parallel_execution_enabled,
        )

    def is_extension_auto_detection_enabled(self) -> bool:
        return self._compute_if_absent(
            EXTENSIONS_AUTODETECTION_ENABLED_PROPERTY_NAME,
            self._delegate.is_extension_auto_detection_enabled,
        )

    def get_default_execution_mode(self) -> ExecutionMode:
        return self._compute_if_absent(
            DEFAULT_EXECUTION_MODE_PROPERTY_NAME,
            self._delegate.get_default_execution_mode,
        )

    def get_default_test_instance_lifecycle(self) -> Lifecycle:
        return self._compute_if_absent(
            DEFAULT_TEST_INSTANCE_LIFECYCLE_PROPERTY_NAME,
            self._delegate.get_default_test_instance_lifecycle,
        )

    def get_deactivate_execution_conditions_pattern(self) -> str | None:
        return self._compute_if_absent(
            DEACTIVATE_CONDITIONS_PATTERN_PROPERTY_NAME,
            self._delegate.get_deactivate_execution_conditions_pattern,
        )

    def _compute_if_absent[T](self, key: str, compute: Callable[[], T]) -> T:
        if (cached := self._cache.get(key, _MISSING)) is not _MISSING:
            return cast(T, cached)

        value = compute()

        with self._lock:
            if (cached := self._cache.get(key, _MISSING)) is not _MISSING:
                return cast(T, cached)
            self._cache[key] = value

        log.debug("Cached configuration parameter %s=%r", key, value)
        return value
