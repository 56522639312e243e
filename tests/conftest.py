"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from repeater_watcher.config import reset_default_values

# No real waits between kill and relaunch or after errors
os.environ.setdefault("REPEATER_WATCHER_RESTART_DELAY_SECONDS", "0")
os.environ.setdefault("REPEATER_WATCHER_STARTUP_GRACE_SECONDS", "0")
os.environ.setdefault("REPEATER_WATCHER_ERROR_COOLDOWN_SECONDS", "0")


@pytest.fixture(autouse=True)
def isolated_env_defaults(monkeypatch, tmp_path):
    """Run every test from an empty directory with a fake home so no .env leaks in."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    reset_default_values()
    yield
    reset_default_values()
