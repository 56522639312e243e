"""
Concurrent ICMP reachability probing.

Every destination gets its own echo request; the round waits for all of them
and folds the answers into a RoundOutcome. A destination that times out,
fails name resolution or answers with an ICMP error is a failed probe, not
an exception. Only a failure to obtain an ICMP socket at all propagates.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, Optional

import icmplib

from .prober_helpers import ProbeResult, ProbeStatus, RoundOutcome, describe_result, log_round_summary

logger = logging.getLogger(__name__)

PingFunc = Callable[..., Awaitable[Any]]

# Raised when the OS will not hand out an ICMP socket; every probe would fail alike.
CATASTROPHIC_PROBE_ERRORS = (icmplib.ICMPSocketError,)
PROBE_FAILURE_ERRORS = (icmplib.ICMPLibError, OSError)


class Prober:
    """Fan out one probe per destination and fan the results back in."""

    def __init__(self, *, ping_func: Optional[PingFunc] = None, privileged: bool = False) -> None:
        self._ping = ping_func if ping_func is not None else icmplib.async_ping
        self._privileged = privileged

    async def probe(self, destinations: Iterable[str], timeout: float) -> RoundOutcome:
        """Probe every destination concurrently and aggregate the outcome."""
        targets = list(destinations)
        host_word = "host" if len(targets) == 1 else "hosts"
        logger.info("Performing ping checks to %d %s...", len(targets), host_word)

        tasks = [asyncio.ensure_future(self.probe_one(target, timeout)) for target in targets]
        try:
            results = await asyncio.gather(*tasks)
        except CATASTROPHIC_PROBE_ERRORS:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        outcome = RoundOutcome.from_results(results)
        log_round_summary(logger, outcome)
        return outcome

    async def probe_one(self, destination: str, timeout: float) -> ProbeResult:
        """Send a single echo request; never raises for an unreachable destination."""
        result = await self._probe_one(destination, timeout)
        logger.info(describe_result(result))
        return result

    async def _probe_one(self, destination: str, timeout: float) -> ProbeResult:
        try:
            host = await asyncio.wait_for(
                self._ping(destination, count=1, timeout=timeout, privileged=self._privileged),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, icmplib.TimeoutExceeded):
            return ProbeResult.failure(destination, ProbeStatus.TIMED_OUT)
        except CATASTROPHIC_PROBE_ERRORS:
            raise
        except icmplib.NameLookupError:
            logger.debug("Name lookup failed for %s", destination)
            return ProbeResult.failure(destination, ProbeStatus.NAME_LOOKUP_FAILED)
        except icmplib.ICMPError as exc:
            logger.debug("ICMP error from %s: %s", destination, exc)
            return ProbeResult.failure(destination, ProbeStatus.UNREACHABLE)
        except PROBE_FAILURE_ERRORS as exc:
            logger.debug("Probe to %s failed: %s", destination, exc)
            return ProbeResult.failure(destination, ProbeStatus.ERROR)

        if getattr(host, "is_alive", False):
            return ProbeResult.success(destination, getattr(host, "avg_rtt", None))
        return ProbeResult.failure(destination, ProbeStatus.TIMED_OUT)


__all__ = ["CATASTROPHIC_PROBE_ERRORS", "PingFunc", "Prober"]
