"""Tests for reduced-priority auxiliary launches."""

from __future__ import annotations

import os

import psutil
import pytest

from repeater_watcher.auxiliary_runner_helpers import lower_child_priority, lowered_priority, lowered_priority_value

BELOW_NORMAL = 16384
NORMAL = 32


class FakeNiceProcess:
    def __init__(self, original, *, restore_error=None):
        self.value = original
        self.history = []
        self.restore_error = restore_error

    def nice(self, value=None):
        if value is None:
            return self.value
        if self.history and self.restore_error is not None:
            raise self.restore_error
        self.history.append(value)
        self.value = value
        return None


@pytest.fixture
def below_normal_class(monkeypatch):
    monkeypatch.setattr(psutil, "BELOW_NORMAL_PRIORITY_CLASS", BELOW_NORMAL, raising=False)


def test_posix_value_adds_ten_and_caps():
    assert lowered_priority_value(0, windows=False) == 10
    assert lowered_priority_value(15, windows=False) == 19


def test_windows_value_is_below_normal_class(below_normal_class):
    assert lowered_priority_value(NORMAL, windows=True) == BELOW_NORMAL


class TestPosixScope:
    def test_caller_priority_is_never_touched(self):
        proc = FakeNiceProcess(0)

        with lowered_priority(proc, windows=False):
            inside = proc.value

        assert inside == 0
        assert proc.history == []

    def test_hook_nices_the_child(self):
        child = FakeNiceProcess(5)

        with lowered_priority(FakeNiceProcess(5), windows=False) as adjust_child:
            assert adjust_child is lower_child_priority

        lower_child_priority(123, process_factory=lambda pid: child)

        assert child.value == 15

    @pytest.mark.skipif(os.name == "nt", reason="niceness is POSIX only")
    def test_watcher_priority_unchanged_after_real_scope(self):
        before = psutil.Process().nice()

        with lowered_priority():
            pass

        assert psutil.Process().nice() == before


def test_child_that_already_exited_is_logged(caplog):
    def gone(pid):
        raise psutil.NoSuchProcess(pid)

    lower_child_priority(99, process_factory=gone)

    assert any("Could not lower priority of auxiliary process 99" in r.message for r in caplog.records)


class TestWindowsScope:
    def test_priority_lowered_inside_and_restored_after(self, below_normal_class):
        proc = FakeNiceProcess(NORMAL)

        with lowered_priority(proc, windows=True) as adjust_child:
            inside = proc.value
            adjust_child(123)

        assert inside == BELOW_NORMAL
        assert proc.value == NORMAL

    def test_priority_restored_when_body_raises(self, below_normal_class):
        proc = FakeNiceProcess(NORMAL)

        with pytest.raises(OSError):
            with lowered_priority(proc, windows=True):
                raise OSError("launch failed")

        assert proc.value == NORMAL

    def test_refused_restore_is_logged_not_raised(self, below_normal_class, caplog):
        proc = FakeNiceProcess(NORMAL, restore_error=psutil.AccessDenied(1))

        with lowered_priority(proc, windows=True):
            pass

        assert any("Could not restore process priority" in r.message for r in caplog.records)
