"""Configuration lookups consumed by the test engine."""

from execution_testkit.config.caching import CachingConfiguration
from execution_testkit.config.configuration import (
    Configuration,
    DefaultConfiguration,
    ExecutionMode,
    Lifecycle,
)
from execution_testkit.config.loader import load_configuration_parameters

__all__ = [
    "CachingConfiguration",
    "Configuration",
    "DefaultConfiguration",
    "ExecutionMode",
    "Lifecycle",
    "load_configuration_parameters",
]
