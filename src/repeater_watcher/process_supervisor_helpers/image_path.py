"""Pick the executable to relaunch from the running instances."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional

from .process_models import ManagedProcessHandle


def select_image_path(handles: Iterable[ManagedProcessHandle]) -> Optional[str]:
    """
    Plurality vote over the resolved image paths.

    Instances without a path do not vote. Ties go to the lexicographically
    smallest path so the choice never depends on process table order.
    Returns None when no instance resolved a path.
    """
    votes = Counter(handle.image_path for handle in handles if handle.image_path and handle.image_path.strip())
    if not votes:
        return None
    path, _count = min(votes.items(), key=lambda item: (-item[1], item[0]))
    return path
