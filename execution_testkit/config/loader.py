"""Loader for configuration parameter files."""

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import Field, ValidationError

from execution_testkit.models.base import Model

type ScalarValue = str | bool | int | float


class ConfigurationFile(Model):
    """Schema of a configuration parameters file."""

    version: str = Field(default="1.0", description="File schema version")
    parameters: Mapping[str, ScalarValue] = Field(
        default_factory=dict, description="Dotted parameter keys to values"
    )


def _render(value: ScalarValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_configuration_parameters(path: Path) -> Mapping[str, str]:
    """Load raw configuration parameters from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Parameter keys mapped to their string values

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, not valid YAML, or does not match
            the expected schema

    """
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty configuration file: {path}")

    try:
        config_file = ConfigurationFile.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration schema in {path}: {e}") from e

    return {key: _render(value) for key, value in config_file.parameters.items()}
