"""Configuration for the device UI runtime.

A device is described by a YAML layout file with two sections: runtime
settings and the ordered list of components registered at startup.

    runtime:
      snapshot_interval: 0.25
      max_message_bytes: 2048
    components:
      - type: Slider
        id: s1
        min: 0
        max: 100
        value: 50

Runtime settings can be overridden from the environment.
"""

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .models.component import Component
from .registry.in_memory import InMemoryRegistry


ENV_SNAPSHOT_INTERVAL = "DEVICE_UI_SNAPSHOT_INTERVAL"
ENV_MAX_MESSAGE_BYTES = "DEVICE_UI_MAX_MESSAGE_BYTES"
ENV_REPORT_UNKNOWN_IDS = "DEVICE_UI_REPORT_UNKNOWN_IDS"
ENV_LOG_LEVEL = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}


class RuntimeConfig(BaseModel):
    """
    Static configuration of the protocol layer and snapshot cadence.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    snapshot_interval: float = Field(
        default=0.1,
        gt=0,
        description="Seconds between two outbound snapshots.",
    )

    max_message_bytes: int = Field(
        default=4096,
        ge=16,
        description="Capacity of the outbound buffer for one line, newline included.",
    )

    report_unknown_ids: bool = Field(
        default=False,
        description="Whether updates to unknown ids are answered with an error line.",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level.",
    )


class DeviceConfig(BaseModel):
    """
    A complete device description: runtime settings plus component layout.
    """

    model_config = ConfigDict(extra="forbid")

    runtime: RuntimeConfig = Field(
        default_factory=RuntimeConfig,
        description="Runtime settings.",
    )

    components: list[Component] = Field(
        default_factory=list,
        description="Components to register at startup, in render order.",
    )


def env_overrides(environ: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """Collects runtime settings set through environment variables."""
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    if env.get(ENV_SNAPSHOT_INTERVAL):
        overrides["snapshot_interval"] = env[ENV_SNAPSHOT_INTERVAL]
    if env.get(ENV_MAX_MESSAGE_BYTES):
        overrides["max_message_bytes"] = env[ENV_MAX_MESSAGE_BYTES]
    if env.get(ENV_REPORT_UNKNOWN_IDS):
        overrides["report_unknown_ids"] = (
            env[ENV_REPORT_UNKNOWN_IDS].strip().lower() in _TRUTHY
        )
    if env.get(ENV_LOG_LEVEL):
        overrides["log_level"] = env[ENV_LOG_LEVEL].upper()
    return overrides


def read_layout(path: Union[str, Path]) -> dict[str, Any]:
    """Reads a layout file into a plain mapping.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Layout file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Layout file {path} must contain a mapping")
    return data


def load_device_config(
    path: Union[str, Path],
    environ: Optional[dict[str, str]] = None,
    **overrides: Any,
) -> DeviceConfig:
    """Loads and validates a device layout.

    Precedence, lowest first: file values, environment variables, explicit
    keyword overrides (None values are skipped).

    Args:
        path: Path to the YAML layout file.
        environ: Environment to read overrides from. Defaults to os.environ.
        **overrides: RuntimeConfig fields set by the caller, e.g. CLI flags.

    Raises:
        ConfigError: If the file cannot be read or does not validate.
    """
    data = read_layout(path)
    runtime = dict(data.get("runtime") or {})
    runtime.update(env_overrides(environ))
    runtime.update({k: v for k, v in overrides.items() if v is not None})
    data["runtime"] = runtime

    try:
        return DeviceConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid layout {path}: {e}") from e


def build_registry(config: DeviceConfig) -> InMemoryRegistry:
    """Registers every layout component in file order.

    Raises:
        DuplicateComponentID: If two components share an id.
    """
    return InMemoryRegistry(config.components)


def layout_json_schema() -> dict[str, Any]:
    return DeviceConfig.model_json_schema()
