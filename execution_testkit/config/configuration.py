"""Configuration source interface and its default key-value implementation."""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

log = logging.getLogger(__name__)

PARALLEL_EXECUTION_ENABLED_PROPERTY_NAME = "testkit.execution.parallel.enabled"
EXTENSIONS_AUTODETECTION_ENABLED_PROPERTY_NAME = (
    "testkit.extensions.autodetection.enabled"
)
DEFAULT_EXECUTION_MODE_PROPERTY_NAME = "testkit.execution.parallel.mode.default"
DEFAULT_TEST_INSTANCE_LIFECYCLE_PROPERTY_NAME = (
    "testkit.testinstance.lifecycle.default"
)
DEACTIVATE_CONDITIONS_PATTERN_PROPERTY_NAME = "testkit.conditions.deactivate"


class ExecutionMode(Enum):
    """Whether tests run on the caller's thread or concurrently."""

    SAME_THREAD = "same_thread"
    CONCURRENT = "concurrent"


class Lifecycle(Enum):
    """How often a test class is instantiated."""

    PER_METHOD = "per_method"
    PER_CLASS = "per_class"


class Configuration(Protocol):
    """Named lookups over an engine's configuration parameters.

    Every lookup is a pure function of the underlying parameters.
    """

    def get_raw_configuration_parameter(self, key: str) -> str | None: ...

    def is_parallel_execution_enabled(self) -> bool: ...

    def is_extension_auto_detection_enabled(self) -> bool: ...

    def get_default_execution_mode(self) -> ExecutionMode: ...

    def get_default_test_instance_lifecycle(self) -> Lifecycle: ...

    def get_deactivate_execution_conditions_pattern(self) -> str | None: ...


_BOOL_ADAPTER = TypeAdapter(bool)


class DefaultConfiguration:
    """Configuration backed by a mapping of raw string parameters.

    Unset or blank parameters fall back to defaults. Values that cannot be
    parsed are logged and also fall back to defaults.
    """

    def __init__(self, parameters: Mapping[str, str]) -> None:
        self._parameters = dict(parameters)

    def get_raw_configuration_parameter(self, key: str) -> str | None:
        value = self._parameters.get(key)
        if value is None or not value.strip():
            return None
        return value.strip()

    def is_parallel_execution_enabled(self) -> bool:
        return self._get_bool(PARALLEL_EXECUTION_ENABLED_PROPERTY_NAME, default=False)

    def is_extension_auto_detection_enabled(self) -> bool:
        return self._get_bool(
            EXTENSIONS_AUTODETECTION_ENABLED_PROPERTY_NAME, default=False
        )

    def get_default_execution_mode(self) -> ExecutionMode:
        return self._get_enum(
            DEFAULT_EXECUTION_MODE_PROPERTY_NAME, ExecutionMode.SAME_THREAD
        )

    def get_default_test_instance_lifecycle(self) -> Lifecycle:
        return self._get_enum(
            DEFAULT_TEST_INSTANCE_LIFECYCLE_PROPERTY_NAME, Lifecycle.PER_METHOD
        )

    def get_deactivate_execution_conditions_pattern(self) -> str | None:
        return self.get_raw_configuration_parameter(
            DEACTIVATE_CONDITIONS_PATTERN_PROPERTY_NAME
        )

    def _get_bool(self, key: str, *, default: bool) -> bool:
        if (value := self.get_raw_configuration_parameter(key)) is None:
            return default
        try:
            return _BOOL_ADAPTER.validate_python(value.lower())
        except ValidationError:
            log.warning(
                "Invalid boolean for configuration parameter %s: %r; using %s",
                key,
                value,
                default,
            )
            return default

    def _get_enum[E: Enum](self, key: str, default: E) -> E:
        if (value := self.get_raw_configuration_parameter(key)) is None:
            return default
        enum_cls = type(default)
        try:
            return enum_cls[value.upper()]
        except KeyError:
            log.warning(
                "Invalid %s for configuration parameter %s: %r; using %s",
                enum_cls.__name__,
                key,
                value,
                default.name,
            )
            return default
