"""Consecutive all-failed round counting."""

from __future__ import annotations

import logging

from .monitor_state import MonitorState
from .prober_helpers import RoundOutcome

logger = logging.getLogger(__name__)


class FailureTracker:
    """Decides, round by round, whether the managed process must be restarted."""

    def __init__(self, max_failures: int, state: MonitorState) -> None:
        if max_failures < 1:
            raise ValueError(f"max_failures must be at least 1 (got {max_failures})")
        self.max_failures = max_failures
        self._state = state

    @property
    def consecutive_failures(self) -> int:
        return self._state.consecutive_failures

    def record(self, outcome: RoundOutcome) -> bool:
        """
        Apply one round's outcome.

        Returns True when the threshold was reached; the counter is already
        back at zero by then, whatever the recovery action goes on to do.
        """
        if not outcome.all_failed:
            if self._state.consecutive_failures > 0:
                logger.info("At least one ping test succeeded. Resetting consecutive failure count.")
                self._state.consecutive_failures = 0
            return False

        # Only a round where nothing answered counts
        self._state.consecutive_failures += 1
        logger.warning("Consecutive failures now stands at %d", self._state.consecutive_failures)

        if self._state.consecutive_failures < self.max_failures:
            return False

        self._state.consecutive_failures = 0
        logger.error("Consecutive failures limit %d has been reached.", self.max_failures)
        return True
