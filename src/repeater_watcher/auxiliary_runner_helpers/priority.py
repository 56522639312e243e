"""
Reduced scheduling priority for auxiliary launches.

Windows children inherit a below-normal priority class from their parent,
so the watcher drops to that class for the duration of the launch and
returns to its own class afterwards. POSIX niceness can only be lowered
back with privileges, so there the watcher keeps its priority and the
freshly started child is niced instead.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

import psutil

logger = logging.getLogger(__name__)

POSIX_NICE_INCREMENT = 10
POSIX_MAX_NICE = 19

PRIORITY_ERRORS = (psutil.AccessDenied, psutil.NoSuchProcess, OSError)

ChildPriorityHook = Callable[[int], None]
ProcessFactory = Callable[[int], Any]


def _is_windows(windows: Optional[bool]) -> bool:
    return os.name == "nt" if windows is None else windows


def lowered_priority_value(original: Any, *, windows: Optional[bool] = None) -> Any:
    """Priority one step below ``original``: a priority class on Windows, a niceness elsewhere."""
    if _is_windows(windows):
        return psutil.BELOW_NORMAL_PRIORITY_CLASS
    return min(int(original) + POSIX_NICE_INCREMENT, POSIX_MAX_NICE)


def lower_child_priority(pid: int, *, process_factory: Optional[ProcessFactory] = None) -> None:
    """Nice a child one step below the niceness it inherited; a refusal is logged."""
    factory = process_factory if process_factory is not None else psutil.Process
    try:
        child = factory(pid)
        child.nice(lowered_priority_value(child.nice(), windows=False))
    except PRIORITY_ERRORS as exc:
        logger.warning("Could not lower priority of auxiliary process %s: %s", pid, exc)


def _children_inherit(pid: int) -> None:
    return None


@contextmanager
def lowered_priority(process: Optional[Any] = None, *, windows: Optional[bool] = None) -> Iterator[ChildPriorityHook]:
    """
    Scope for launching a child at reduced priority.

    Yields a hook to call with the pid of every child started inside the
    block. On Windows the caller (default: this process) runs below normal
    inside the block and its original class is restored on every exit path;
    a restore the OS refuses is logged, never raised. On POSIX the caller is
    left untouched and the hook nices the child.
    """
    if not _is_windows(windows):
        yield lower_child_priority
        return

    target = process if process is not None else psutil.Process()
    original = target.nice()
    target.nice(lowered_priority_value(original, windows=True))
    try:
        yield _children_inherit
    finally:
        try:
            target.nice(original)
        except PRIORITY_ERRORS as exc:
            logger.warning("Could not restore process priority to %s: %s", original, exc)
