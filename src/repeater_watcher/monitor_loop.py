"""
The watcher's main loop.

One round probes every destination, updates the consecutive-failure count,
restarts the managed process when the threshold is reached, gives the
auxiliary helper its turn and then sleeps. The loop owns all mutable state
through MonitorState; nothing else writes to it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .auxiliary_runner import AuxiliaryRunner
from .failure_tracker import FailureTracker
from .monitor_state import MonitorState
from .prober import Prober
from .process_supervisor import ProcessSupervisor
from .watcher_config import WatcherConfig

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CANCELLED = 1


def _seconds_word(value: float) -> str:
    return "second" if value == 1 else "seconds"


class MonitorLoop:
    """Drives probe, decide, restart, auxiliary and sleep until cancelled."""

    def __init__(
        self,
        config: WatcherConfig,
        *,
        prober: Optional[Prober] = None,
        supervisor: Optional[ProcessSupervisor] = None,
        auxiliary_runner: Optional[AuxiliaryRunner] = None,
        state: Optional[MonitorState] = None,
    ) -> None:
        self.config = config
        self.state = state if state is not None else MonitorState()
        self.prober = prober if prober is not None else Prober(privileged=config.privileged)
        self.supervisor = (
            supervisor
            if supervisor is not None
            else ProcessSupervisor(restart_delay_seconds=config.timings.restart_delay_seconds)
        )
        self.auxiliary_runner = auxiliary_runner if auxiliary_runner is not None else AuxiliaryRunner()
        self.failure_tracker = FailureTracker(config.max_failures, self.state)

    async def run(self, max_rounds: Optional[int] = None) -> int:
        """
        Run rounds until cancelled or ``max_rounds`` have completed.

        Returns:
            EXIT_CANCELLED when the task was cancelled, EXIT_OK when the round limit was reached
        """
        limit = max_rounds if max_rounds is not None else self.config.max_rounds
        self.state.reset()
        logger.info("Monitor loop started")

        try:
            while limit is None or self.state.period_index < limit:
                await self._run_guarded_round()
                self.state.period_index += 1
        except asyncio.CancelledError:
            logger.error("Monitor loop has been cancelled.")
            return EXIT_CANCELLED

        logger.info("Monitor loop finished after %d rounds", self.state.period_index)
        return EXIT_OK

    async def _run_guarded_round(self) -> None:
        cooldown = self.config.timings.error_cooldown_seconds
        try:
            await self.run_round()
        except Exception:
            # Crash barrier: a bad round must never stop the watcher
            logger.exception("An unexpected error occurred. Sleeping for %s %s.", cooldown, _seconds_word(cooldown))
            await asyncio.sleep(cooldown)

    async def run_round(self) -> None:
        """Probe, decide, maybe restart, maybe run the auxiliary, then sleep."""
        config = self.config
        outcome = await self.prober.probe(config.destinations, config.timeout_seconds)

        if self.failure_tracker.record(outcome):
            await self._recover()

        interval = config.interval_seconds
        logger.info("Sleeping for %s %s", interval, _seconds_word(interval))

        self.auxiliary_runner.maybe_run(config.auxiliary, self.state.period_index)

        await asyncio.sleep(interval)

    async def _recover(self) -> None:
        self.state.restarts += 1
        restarted = await self.supervisor.restart(self.config.process_name, self.config.restart_arguments)
        if not restarted:
            logger.error("Restart of %s failed; monitoring continues", self.config.process_name)
            return

        grace = self.config.timings.startup_grace_seconds
        logger.info("Giving process time to start up before monitoring is resumed...")
        await asyncio.sleep(grace)


__all__ = ["EXIT_CANCELLED", "EXIT_OK", "MonitorLoop"]
