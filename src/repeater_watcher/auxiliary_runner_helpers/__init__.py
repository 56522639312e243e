"""Helpers for the auxiliary process runner."""

from .priority import PRIORITY_ERRORS, lower_child_priority, lowered_priority, lowered_priority_value

__all__ = ["PRIORITY_ERRORS", "lower_child_priority", "lowered_priority", "lowered_priority_value"]
