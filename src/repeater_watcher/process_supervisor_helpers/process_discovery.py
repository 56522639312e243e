"""Locate running processes by image name."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Iterable, List, Optional

import psutil

from .process_models import ManagedProcessHandle

logger = logging.getLogger(__name__)

ProcessIter = Callable[..., Iterable[Any]]

_EXECUTABLE_SUFFIX = ".exe"


def normalize_process_name(name: Optional[str]) -> str:
    """Case-fold a process name and drop a trailing ``.exe``."""
    if not name:
        return ""
    lowered = name.strip().lower()
    if lowered.endswith(_EXECUTABLE_SUFFIX):
        lowered = lowered[: -len(_EXECUTABLE_SUFFIX)]
    return lowered


def find_processes_by_name(
    process_name: str,
    *,
    exclude_pid: Optional[int] = None,
    process_iter: Optional[ProcessIter] = None,
) -> List[ManagedProcessHandle]:
    """
    Return every running process whose image name matches ``process_name``.

    Processes that vanish or deny access mid-scan are skipped. The calling
    process is excluded by default.
    """
    target = normalize_process_name(process_name)
    iterate = process_iter if process_iter is not None else psutil.process_iter
    skip_pid = os.getpid() if exclude_pid is None else exclude_pid

    matches: List[ManagedProcessHandle] = []
    for proc in iterate(["pid", "name", "exe"]):
        try:
            info = proc.info
            pid = info.get("pid")
            name = info.get("name")
            if pid is None or pid == skip_pid:
                continue
            if normalize_process_name(name) != target:
                continue
            matches.append(ManagedProcessHandle(pid=pid, name=name, image_path=info.get("exe") or None, process=proc))
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue

    logger.debug("Found %d processes named %s", len(matches), process_name)
    return matches
