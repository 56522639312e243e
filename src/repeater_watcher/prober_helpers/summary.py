"""Log lines describing probe results."""

from __future__ import annotations

import logging

from .probe_models import ProbeResult, RoundOutcome


def _pings(count: int) -> str:
    return "ping" if count == 1 else "pings"


def _verb(count: int) -> str:
    return "was" if count == 1 else "were"


def describe_result(result: ProbeResult) -> str:
    """Render ``<address> - <status>[ - Round Trip: <rtt>ms]``."""
    text = f"{result.destination} - {result.status.value}"
    if result.reachable and result.round_trip_ms is not None:
        text += f" - Round Trip: {result.round_trip_ms:.0f}ms"
    return text


def log_round_summary(logger: logging.Logger, outcome: RoundOutcome) -> None:
    """Info when everything answered, warning when mixed, error when nothing did."""
    successes = outcome.success_count
    failures = outcome.failure_count

    if failures == 0:
        logger.info("%d %s %s successful", successes, _pings(successes), _verb(successes))
        return

    level = logging.ERROR if outcome.all_failed else logging.WARNING
    logger.log(
        level,
        "%d %s %s successful, but %d %s failed",
        successes,
        _pings(successes),
        _verb(successes),
        failures,
        _pings(failures),
    )
