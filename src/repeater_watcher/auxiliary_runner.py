"""Periodic launch of the low-priority auxiliary helper."""

from __future__ import annotations

import logging
from typing import Any, Callable, ContextManager, Optional

from .auxiliary_runner_helpers import PRIORITY_ERRORS, lowered_priority
from .process_supervisor_helpers import LAUNCH_ERRORS, build_launch_command, launch_process, split_argument_string
from .process_supervisor_helpers.process_launcher import PopenFactory
from .watcher_config import AuxiliarySchedule

logger = logging.getLogger(__name__)

AUXILIARY_ERRORS = LAUNCH_ERRORS + PRIORITY_ERRORS


class AuxiliaryRunner:
    """Launches the auxiliary executable on every ``skip_periods``-th round."""

    def __init__(
        self,
        *,
        popen: Optional[PopenFactory] = None,
        priority_scope: Callable[[], ContextManager[Any]] = lowered_priority,
    ) -> None:
        self._popen = popen
        self._priority_scope = priority_scope

    def maybe_run(self, schedule: Optional[AuxiliarySchedule], period_index: int) -> bool:
        """
        Launch the auxiliary process if this period is due.

        Returns True only when a process was started. Failures are logged
        and swallowed so the monitor loop is never interrupted.
        """
        if schedule is None:
            return False

        if not schedule.executable_path.is_file():
            logger.warning("Auxiliary process specified %s can not be found", schedule.executable_path)
            return False

        if period_index % schedule.skip_periods != 0:
            return False

        logger.info("Auxiliary process %s found and running this period.", schedule.executable_path.name)
        try:
            command = build_launch_command(str(schedule.executable_path.resolve()), split_argument_string(schedule.arguments))
            with self._priority_scope() as adjust_child:
                started = launch_process(command, popen=self._popen)
                if started is not None:
                    adjust_child(started.pid)
        except AUXILIARY_ERRORS as exc:
            logger.error(
                "Auxiliary process at %s could not be started. Exception %s",
                schedule.executable_path.name,
                exc,
            )
            return False

        if started is None:
            logger.error("Auxiliary process at %s could not be started", schedule.executable_path.name)
            return False

        logger.info("Auxiliary started with ID %s", getattr(started, "pid", None))
        return True


__all__ = ["AuxiliaryRunner"]
