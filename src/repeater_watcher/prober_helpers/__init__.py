"""Helpers for the reachability prober."""

from .probe_models import ProbeResult, ProbeStatus, RoundOutcome
from .summary import describe_result, log_round_summary

__all__ = [
    "ProbeResult",
    "ProbeStatus",
    "RoundOutcome",
    "describe_result",
    "log_round_summary",
]
