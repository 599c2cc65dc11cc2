"""Configuration management for the heartbeat launcher."""

import os
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_HEARTBEAT_INTERVAL = 3

# Command-line flag for each configuration field, in the order they are
# rebuilt for re-invocation.
FLAG_NAMES: Dict[str, str] = {
    "control_dir": "controldir",
    "result_path": "result",
    "log_path": "log",
    "cookie_name": "cookiename",
    "cookie_value": "cookieval",
    "script_path": "script",
    "interpreter": "shell",
    "output_path": "output",
    "debug": "debug",
    "daemon": "daemon",
}

REQUIRED_FIELDS: List[str] = [
    "control_dir",
    "result_path",
    "log_path",
    "cookie_name",
    "cookie_value",
    "script_path",
]


class ConfigurationError(Exception):
    """Exception raised for configuration validation errors."""

    pass


class LaunchConfig(BaseModel):
    """Configuration for one supervised script run.

    Attributes:
        control_dir: Directory that must exist before the heartbeat starts
        result_path: Where the exit status of the script is written
        log_path: File whose mtime is the liveness signal
        cookie_name: Environment variable name injected into the script
        cookie_value: Environment variable value injected into the script
        script_path: Program to execute
        interpreter: Optional shell the script is passed to (run with ``-xe``)
        output_path: Optional file receiving only the script's stdout
        debug: Write main/launcher/heartbeat diagnostics to the log
        daemon: Re-invoke detached instead of running in the foreground
        heartbeat_interval: Seconds between two touches of the log file
    """

    model_config = ConfigDict(frozen=True)

    control_dir: str = Field(min_length=1)
    result_path: str = Field(min_length=1)
    log_path: str = Field(min_length=1)
    cookie_name: str = Field(min_length=1)
    cookie_value: str
    script_path: str = Field(min_length=1)
    interpreter: Optional[str] = None
    output_path: Optional[str] = None
    debug: bool = False
    daemon: bool = False
    heartbeat_interval: float = Field(default=DEFAULT_HEARTBEAT_INTERVAL, gt=0)

    @field_validator("cookie_name")
    @classmethod
    def _cookie_name_is_env_name(cls, value: str) -> str:
        if "=" in value or "\0" in value:
            raise ValueError("cookie name must not contain '=' or NUL")
        return value

    @field_validator("interpreter", "output_path")
    @classmethod
    def _empty_means_unset(cls, value: Optional[str]) -> Optional[str]:
        if value == "":
            return None
        return value

    def to_argv(self, include_daemon: bool = False) -> List[str]:
        """Rebuild the command-line flags that produce this configuration.

        The heartbeat interval is not a flag; it travels through the
        environment, which a re-invoked process inherits.
        """
        argv = []
        for field_name, flag in FLAG_NAMES.items():
            value = getattr(self, field_name)
            if field_name in ("debug", "daemon"):
                if value and (field_name != "daemon" or include_daemon):
                    argv.append(f"-{flag}")
            elif value is not None:
                argv.append(f"-{flag}={value}")
        return argv


def _get_env_int(name: str, default: int, min_val: int = 0, max_val: int = 100) -> int:
    """Get integer from environment with validation."""
    value = os.getenv(name)
    if not value:
        return default

    try:
        parsed = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{value}'")
    if not (min_val <= parsed <= max_val):
        raise ConfigurationError(
            f"{name} must be between {min_val} and {max_val}, got {parsed}"
        )
    return parsed


def missing_required(values: Dict[str, Optional[str]]) -> List[str]:
    """Return the flag names of required fields absent from ``values``."""
    return [
        FLAG_NAMES[field_name]
        for field_name in REQUIRED_FIELDS
        if values.get(field_name) is None
    ]


def build_config(values: Dict[str, object]) -> LaunchConfig:
    """Validate parsed flag values and environment overrides into a LaunchConfig.

    Args:
        values: Mapping of LaunchConfig field names to parsed flag values

    Returns:
        LaunchConfig: Validated configuration

    Raises:
        ConfigurationError: If a required flag is missing or a value is invalid
    """
    missing = missing_required(values)  # type: ignore[arg-type]
    if missing:
        raise ConfigurationError(
            "The following required flags are missing: "
            + ", ".join(f"-{flag}" for flag in missing)
        )

    try:
        interval = _get_env_int(
            "HEARTBEAT_INTERVAL_SECONDS",
            DEFAULT_HEARTBEAT_INTERVAL,
            min_val=1,
            max_val=3600,
        )
        return LaunchConfig(heartbeat_interval=interval, **values)
    except ValidationError as e:
        errors = "; ".join(
            f"-{FLAG_NAMES.get(str(err['loc'][0]), err['loc'][0])}: {err['msg']}"
            for err in e.errors()
        )
        logger.error(f"Configuration validation failed: {errors}")
        raise ConfigurationError(f"Invalid configuration: {errors}") from e
    except ConfigurationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise
