"""Mutable counters owned by the monitor loop."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MonitorState:
    """
    Counters touched only from the monitor loop's control path.

    Attributes:
        consecutive_failures: Back-to-back rounds in which every probe failed
        period_index: Completed rounds since the loop started, drives the auxiliary schedule
        restarts: Restart actions fired since the loop started
    """

    consecutive_failures: int = 0
    period_index: int = 0
    restarts: int = 0

    def reset(self) -> None:
        self.consecutive_failures = 0
        self.period_index = 0
        self.restarts = 0
