"""Normalization for comma separated settings such as destination lists."""

from __future__ import annotations

from typing import Iterable, Sequence


class ListNormalizer:
    """Splits delimited values and removes blanks and duplicates."""

    @staticmethod
    def split_and_normalize(raw_value: str, separator: str, strip_items: bool) -> list[str]:
        """Split ``raw_value`` on ``separator``; an empty separator keeps it whole."""
        parts: Iterable[str] = raw_value.split(separator) if separator else [raw_value]
        if not strip_items:
            return list(parts)
        return [item.strip() for item in parts if item.strip()]

    @staticmethod
    def deduplicate_preserving_order(items: Sequence[str]) -> tuple[str, ...]:
        """Remove duplicates, keeping the first occurrence of each item."""
        return tuple(dict.fromkeys(items))
