"""
Managed process restart.

Restarting means: find every running instance by name, decide which
executable to relaunch by plurality vote over their image paths, kill them
all, wait for the OS to release resources and start exactly one new
instance with the configured arguments.

Usage:
    supervisor = ProcessSupervisor(restart_delay_seconds=5)
    ok = await supervisor.restart("OpenVPNConnect", ["--connect", "profile.ovpn"])
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Sequence

from .process_supervisor_helpers import (
    LAUNCH_ERRORS,
    ManagedProcessHandle,
    ProcessTerminationError,
    build_launch_command,
    find_processes_by_name,
    kill_processes,
    launch_process,
    select_image_path,
)
from .process_supervisor_helpers.process_launcher import LaunchCommand, PopenFactory
from .watcher_config import DEFAULT_RESTART_DELAY_SECONDS

logger = logging.getLogger(__name__)

ProcessFinder = Callable[[str], List[ManagedProcessHandle]]


class ProcessSupervisor:
    """Kill-and-relaunch recovery for a single named process."""

    def __init__(
        self,
        *,
        restart_delay_seconds: float = DEFAULT_RESTART_DELAY_SECONDS,
        finder: Optional[ProcessFinder] = None,
        popen: Optional[PopenFactory] = None,
    ) -> None:
        self.restart_delay_seconds = restart_delay_seconds
        self._finder = finder if finder is not None else find_processes_by_name
        self._popen = popen

    async def restart(self, process_name: str, args: Sequence[str]) -> bool:
        """
        Restart every instance of ``process_name`` as one new instance.

        Returns:
            True when nothing was running or the relaunch started, False when
            no image path could be resolved, a kill was refused or the launch failed
        """
        handles = self._finder(process_name)

        if not handles:
            logger.warning("No processes matching name %s found. No processes will be closed or killed", process_name)
            return True

        noun = "process" if len(handles) == 1 else "processes"
        logger.warning("There are %d matching %s found", len(handles), noun)

        image_path = select_image_path(handles)
        if image_path is None:
            logger.error(
                "No image path found for processes matching name %s. The process will not be killed or restarted.",
                process_name,
            )
            return False

        # Nothing is killed unless a relaunch command exists for it
        try:
            command = build_launch_command(image_path, args)
        except LAUNCH_ERRORS as exc:
            logger.error("Could not prepare relaunch of %s, not killing it: %s", process_name, exc)
            return False

        try:
            kill_processes(handles)
        except ProcessTerminationError as exc:
            logger.error("Could not kill %s, not restarting: %s", process_name, exc)
            return False

        logger.info("Restarting process at %s in %s seconds", image_path, self.restart_delay_seconds)
        await asyncio.sleep(self.restart_delay_seconds)

        return self._launch(image_path, command)

    def _launch(self, image_path: str, command: LaunchCommand) -> bool:
        try:
            started = launch_process(command, popen=self._popen)
        except LAUNCH_ERRORS as exc:
            logger.error(
                "Process could not be started using executable at %s. An exception occurred %s",
                image_path,
                exc,
            )
            return False

        if started is None:
            logger.error("Process could not be started using executable at %s", image_path)
            return False

        logger.info("Started process %s successfully. Process ID is %s", image_path, getattr(started, "pid", None))
        return True


__all__ = ["ProcessSupervisor"]
