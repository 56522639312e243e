"""Start detached processes from an image path and its arguments."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import Any, Callable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

LAUNCH_ERRORS = (OSError, ValueError, subprocess.SubprocessError)

PopenFactory = Callable[..., Any]
LaunchCommand = Union[str, List[str]]


def _is_windows(windows: Optional[bool]) -> bool:
    return os.name == "nt" if windows is None else windows


def build_launch_command(image_path: str, arguments: Sequence[str], *, windows: Optional[bool] = None) -> LaunchCommand:
    """
    Combine an executable and its arguments into a Popen command.

    Windows receives one command line: the quoted image followed by the
    arguments joined with single spaces, untouched. Elsewhere every argument
    becomes its own argv entry exactly as given.
    """
    if not image_path:
        raise ValueError("Cannot build a launch command without an image path")

    if _is_windows(windows):
        quoted_image = subprocess.list2cmdline([image_path])
        command_line = " ".join(arguments)
        return f"{quoted_image} {command_line}" if command_line else quoted_image
    return [image_path, *arguments]


def split_argument_string(arguments: str, *, windows: Optional[bool] = None) -> List[str]:
    """
    Break an operator supplied argument string into launch arguments.

    Windows keeps the string whole so it reaches the child verbatim;
    elsewhere it is split with shell quoting rules.
    """
    if not arguments:
        return []
    if _is_windows(windows):
        return [arguments]
    return shlex.split(arguments)


def launch_process(command: LaunchCommand, *, popen: Optional[PopenFactory] = None) -> Any:
    """Launch ``command`` so it outlives the watcher; returns the Popen handle."""
    factory = popen if popen is not None else subprocess.Popen
    logger.debug("Launching %r", command)
    return factory(command, stdin=subprocess.DEVNULL, start_new_session=True)
