"""
Configuration for the connectivity watcher.

Operator-facing settings (process name, destinations, thresholds) arrive from
the command line, with environment variables supplying their defaults.
Timing constants and log sink settings are environment driven only so tests
and deployments can shorten or relocate them without code changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Optional, Sequence, Tuple

from repeater_watcher.config import ConfigurationError, env_int, env_list, env_seconds, env_str
from repeater_watcher.config.runtime_helpers import ListNormalizer

DEFAULT_PROCESS = "OpenVPNConnect"
DEFAULT_INTERVAL_SECONDS = 15
DEFAULT_MAX_FAILURES = 5
DEFAULT_TIMEOUT_SECONDS = 3
DEFAULT_AUX_SKIP_PERIODS = 3
DEFAULT_DESTINATIONS: Tuple[str, ...] = (
    "1.1.1.1",
    "8.8.8.8",
    "208.67.222.222",
)

DEFAULT_RESTART_DELAY_SECONDS = 5.0
DEFAULT_STARTUP_GRACE_SECONDS = 5.0
DEFAULT_ERROR_COOLDOWN_SECONDS = 30.0

DEFAULT_LOG_DIRECTORY = "logs"
DEFAULT_LOG_FILE_NAME = "RepeaterWatcher.log"
DEFAULT_LOG_FILE_COUNT = 7
DEFAULT_LOG_FILE_MAX_BYTES = 10 * 1024 * 1024

ENV_PREFIX = "REPEATER_WATCHER_"


def _env_name(suffix: str) -> str:
    return f"{ENV_PREFIX}{suffix}"


@dataclass(frozen=True)
class AuxiliarySchedule:
    """Helper executable launched every ``skip_periods`` rounds."""

    executable_path: Path
    arguments: str = ""
    skip_periods: int = DEFAULT_AUX_SKIP_PERIODS

    def __post_init__(self) -> None:
        if self.skip_periods < 1:
            raise ConfigurationError.invalid_value("skip_periods", self.skip_periods, "Must be at least 1")


@dataclass(frozen=True)
class WatcherTimings:
    """
    Fixed delays used by the monitor.

    Attributes:
        restart_delay_seconds: Pause between killing the managed process and relaunching it
        startup_grace_seconds: Pause after a successful relaunch before probing resumes
        error_cooldown_seconds: Pause after an unexpected error escapes a round
    """

    restart_delay_seconds: float = field(
        default_factory=partial(env_seconds, _env_name("RESTART_DELAY_SECONDS"), DEFAULT_RESTART_DELAY_SECONDS)
    )
    startup_grace_seconds: float = field(
        default_factory=partial(env_seconds, _env_name("STARTUP_GRACE_SECONDS"), DEFAULT_STARTUP_GRACE_SECONDS)
    )
    error_cooldown_seconds: float = field(
        default_factory=partial(env_seconds, _env_name("ERROR_COOLDOWN_SECONDS"), DEFAULT_ERROR_COOLDOWN_SECONDS)
    )


@dataclass(frozen=True)
class LogSettings:
    """Where and how large the rolling log files are."""

    directory: Path = field(default_factory=lambda: Path(env_str(_env_name("LOG_DIR"), DEFAULT_LOG_DIRECTORY)))
    file_name: str = DEFAULT_LOG_FILE_NAME
    file_count: int = DEFAULT_LOG_FILE_COUNT
    max_bytes: int = DEFAULT_LOG_FILE_MAX_BYTES

    @property
    def path(self) -> Path:
        return self.directory / self.file_name


@dataclass(frozen=True)
class WatcherConfig:
    """Everything the monitor loop needs to run."""

    restart_arguments: Tuple[str, ...]
    process_name: str = DEFAULT_PROCESS
    destinations: Tuple[str, ...] = DEFAULT_DESTINATIONS
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS
    max_failures: int = DEFAULT_MAX_FAILURES
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    auxiliary: Optional[AuxiliarySchedule] = None
    max_rounds: Optional[int] = None
    privileged: bool = False
    timings: WatcherTimings = field(default_factory=WatcherTimings)

    @property
    def command_line(self) -> str:
        """Restart arguments as the single command line handed to the relaunched process."""
        return build_command_line(self.restart_arguments)

    def validate(self) -> "WatcherConfig":
        """Raise ConfigurationError for values the monitor cannot run with."""
        if not self.restart_arguments:
            raise ConfigurationError.missing_value("restart_arguments", "at least one argument is required")
        if not self.process_name or not self.process_name.strip():
            raise ConfigurationError.missing_value("process_name")
        if not self.destinations:
            raise ConfigurationError.missing_value("destinations", "at least one destination is required")
        if self.interval_seconds < 0:
            raise ConfigurationError.invalid_value("interval_seconds", self.interval_seconds, "Must be non-negative")
        if self.max_failures < 1:
            raise ConfigurationError.invalid_value("max_failures", self.max_failures, "Must be at least 1")
        if self.timeout_seconds <= 0:
            raise ConfigurationError.invalid_value("timeout_seconds", self.timeout_seconds, "Must be positive")
        if self.max_rounds is not None and self.max_rounds < 1:
            raise ConfigurationError.invalid_value("max_rounds", self.max_rounds, "Must be at least 1 when set")
        return self


def build_command_line(arguments: Sequence[str]) -> str:
    """Join restart arguments with single spaces, verbatim."""
    return " ".join(arguments)


def normalize_destinations(destinations: Sequence[str]) -> Tuple[str, ...]:
    """Strip blanks and drop duplicate destinations, keeping the given order."""
    cleaned = [item.strip() for item in destinations if item and item.strip()]
    return ListNormalizer.deduplicate_preserving_order(cleaned)


def default_process_name() -> str:
    return env_str(_env_name("PROCESS"), DEFAULT_PROCESS) or DEFAULT_PROCESS


def default_destinations() -> Tuple[str, ...]:
    return env_list(_env_name("DESTINATIONS"), or_value=DEFAULT_DESTINATIONS) or DEFAULT_DESTINATIONS


def default_interval_seconds() -> int:
    return env_int(_env_name("INTERVAL"), DEFAULT_INTERVAL_SECONDS)


def default_max_failures() -> int:
    return env_int(_env_name("FAILURES"), DEFAULT_MAX_FAILURES)


def default_timeout_seconds() -> int:
    return env_int(_env_name("TIMEOUT"), DEFAULT_TIMEOUT_SECONDS)


__all__ = [
    "AuxiliarySchedule",
    "DEFAULT_AUX_SKIP_PERIODS",
    "DEFAULT_DESTINATIONS",
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_MAX_FAILURES",
    "DEFAULT_PROCESS",
    "DEFAULT_TIMEOUT_SECONDS",
    "LogSettings",
    "WatcherConfig",
    "WatcherTimings",
    "build_command_line",
    "default_destinations",
    "default_interval_seconds",
    "default_max_failures",
    "default_process_name",
    "default_timeout_seconds",
    "normalize_destinations",
]
