"""Kill managed process instances without a grace period."""

from __future__ import annotations

import logging
from typing import List, Sequence

import psutil

from .process_models import ManagedProcessHandle

logger = logging.getLogger(__name__)


class ProcessTerminationError(RuntimeError):
    """Raised when a matched process could not be killed."""


def kill_processes(handles: Sequence[ManagedProcessHandle]) -> List[int]:
    """
    Kill every handle outright.

    A process that already exited counts as handled. Access denied aborts
    with ProcessTerminationError so the caller does not launch a duplicate.

    Returns:
        PIDs that were signalled or found already gone
    """
    handled: List[int] = []
    for handle in handles:
        logger.warning("Performing kill of process %s", handle.pid)
        try:
            handle.process.kill()
        except psutil.NoSuchProcess:
            logger.debug("Process %s exited before it could be killed", handle.pid)
        except psutil.AccessDenied as exc:
            raise ProcessTerminationError(f"Access denied while killing process {handle.pid} ({handle.name})") from exc
        handled.append(handle.pid)
    return handled
