"""Tests for watcher configuration objects."""

from __future__ import annotations

from pathlib import Path

import pytest

from repeater_watcher.config import ConfigurationError
from repeater_watcher.watcher_config import (
    DEFAULT_DESTINATIONS,
    AuxiliarySchedule,
    LogSettings,
    WatcherConfig,
    WatcherTimings,
    build_command_line,
    default_destinations,
    normalize_destinations,
)


def test_command_line_joins_with_single_spaces():
    assert build_command_line(["--connect", "profile.ovpn"]) == "--connect profile.ovpn"

    config = WatcherConfig(restart_arguments=("--connect", "profile.ovpn"))
    assert config.command_line == "--connect profile.ovpn"


def test_defaults_match_documented_values():
    config = WatcherConfig(restart_arguments=("x",)).validate()

    assert config.process_name == "OpenVPNConnect"
    assert config.destinations == ("1.1.1.1", "8.8.8.8", "208.67.222.222")
    assert (config.interval_seconds, config.max_failures, config.timeout_seconds) == (15, 5, 3)
    assert config.auxiliary is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"restart_arguments": ()},
        {"destinations": ()},
        {"process_name": " "},
        {"interval_seconds": -1},
        {"max_failures": 0},
        {"timeout_seconds": 0},
        {"max_rounds": 0},
    ],
)
def test_validate_rejects_unusable_values(overrides):
    values = {"restart_arguments": ("x",)}
    values.update(overrides)

    with pytest.raises(ConfigurationError):
        WatcherConfig(**values).validate()


def test_auxiliary_schedule_requires_positive_skip():
    with pytest.raises(ConfigurationError):
        AuxiliarySchedule(executable_path=Path("helper"), skip_periods=0)


def test_timings_read_environment(monkeypatch):
    monkeypatch.setenv("REPEATER_WATCHER_ERROR_COOLDOWN_SECONDS", "12.5")
    monkeypatch.setenv("REPEATER_WATCHER_RESTART_DELAY_SECONDS", "1")

    timings = WatcherTimings()

    assert timings.error_cooldown_seconds == 12.5
    assert timings.restart_delay_seconds == 1.0


def test_timings_default_without_environment(monkeypatch):
    for name in ("RESTART_DELAY_SECONDS", "STARTUP_GRACE_SECONDS", "ERROR_COOLDOWN_SECONDS"):
        monkeypatch.delenv(f"REPEATER_WATCHER_{name}", raising=False)

    timings = WatcherTimings()

    assert (timings.restart_delay_seconds, timings.startup_grace_seconds, timings.error_cooldown_seconds) == (5.0, 5.0, 30.0)


def test_log_settings_default_path(monkeypatch):
    monkeypatch.delenv("REPEATER_WATCHER_LOG_DIR", raising=False)

    settings = LogSettings()

    assert settings.path == Path("logs") / "RepeaterWatcher.log"
    assert settings.file_count == 7
    assert settings.max_bytes == 10 * 1024 * 1024


def test_normalize_destinations_dedupes_in_order():
    assert normalize_destinations(["8.8.8.8", " 1.1.1.1 ", "8.8.8.8", ""]) == ("8.8.8.8", "1.1.1.1")


def test_default_destinations_from_environment(monkeypatch):
    monkeypatch.setenv("REPEATER_WATCHER_DESTINATIONS", "9.9.9.9,1.0.0.1")
    assert default_destinations() == ("9.9.9.9", "1.0.0.1")

    monkeypatch.delenv("REPEATER_WATCHER_DESTINATIONS")
    assert default_destinations() == DEFAULT_DESTINATIONS
