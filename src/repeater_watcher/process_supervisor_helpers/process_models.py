from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ManagedProcessHandle:
    """A running instance of the managed process, discovered for one restart attempt."""

    pid: int
    name: str
    image_path: Optional[str]
    process: Any
