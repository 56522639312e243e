"""Value types produced by a probing round."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class ProbeStatus(Enum):
    """Outcome of a single reachability check."""

    SUCCESS = "Success"
    TIMED_OUT = "TimedOut"
    UNREACHABLE = "Unreachable"
    NAME_LOOKUP_FAILED = "NameLookupFailed"
    ERROR = "Error"


@dataclass(frozen=True)
class ProbeResult:
    destination: str
    reachable: bool
    status: ProbeStatus
    round_trip_ms: Optional[float] = None

    @classmethod
    def success(cls, destination: str, round_trip_ms: Optional[float]) -> "ProbeResult":
        return cls(destination=destination, reachable=True, status=ProbeStatus.SUCCESS, round_trip_ms=round_trip_ms)

    @classmethod
    def failure(cls, destination: str, status: ProbeStatus) -> "ProbeResult":
        return cls(destination=destination, reachable=False, status=status)


@dataclass(frozen=True)
class RoundOutcome:
    """Aggregated counts over every destination probed in one round."""

    success_count: int
    failure_count: int
    results: Tuple[ProbeResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[ProbeResult]) -> "RoundOutcome":
        collected = tuple(results)
        successes = sum(1 for result in collected if result.reachable)
        return cls(success_count=successes, failure_count=len(collected) - successes, results=collected)

    @property
    def all_failed(self) -> bool:
        return self.success_count == 0
