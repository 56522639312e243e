"""Helpers for discovering, killing and relaunching the managed process."""

from .image_path import select_image_path
from .process_discovery import find_processes_by_name, normalize_process_name
from .process_launcher import LAUNCH_ERRORS, build_launch_command, launch_process, split_argument_string
from .process_models import ManagedProcessHandle
from .process_terminator import ProcessTerminationError, kill_processes

__all__ = [
    "LAUNCH_ERRORS",
    "ManagedProcessHandle",
    "ProcessTerminationError",
    "build_launch_command",
    "find_processes_by_name",
    "kill_processes",
    "launch_process",
    "normalize_process_name",
    "select_image_path",
    "split_argument_string",
]
