from __future__ import annotations

"""Run the watcher's async entry point with consistent shutdown handling."""

import asyncio
import logging
import signal
from typing import Any, Callable, Coroutine, Optional

ServiceFactory = Callable[[], Coroutine[Any, Any, int]]

EXIT_INTERRUPTED = 1

_SHUTDOWN_SIGNALS = tuple(sig for sig in (getattr(signal, "SIGINT", None), getattr(signal, "SIGTERM", None)) if sig is not None)


def _install_cancel_handlers(task: asyncio.Task, logger: logging.Logger) -> None:
    """Cancel ``task`` on SIGINT/SIGTERM where the event loop supports it."""
    loop = asyncio.get_running_loop()
    for sig in _SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, task.cancel)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C surfaces as KeyboardInterrupt
            logger.debug("Signal handler for %s not supported on this platform", sig)
        except (RuntimeError, ValueError):
            # Raised when signals are configured outside the main thread
            logger.debug("Could not install signal handler for %s", sig)


def run_async_service(
    factory: ServiceFactory,
    *,
    service_name: str,
    logger_name: Optional[str] = None,
    shutdown_message: Optional[str] = None,
) -> int:
    """Run an async service and return its exit code.

    Args:
        factory: Callable returning the coroutine to execute; its int result is the exit code.
        service_name: Identifier used in shutdown messages.
        logger_name: Optional logger name override.
        shutdown_message: Optional custom message when interrupted.
    """
    logger = logging.getLogger(logger_name or f"repeater_watcher.{service_name}")

    async def _main() -> int:
        task = asyncio.current_task()
        if task is not None:
            _install_cancel_handlers(task, logger)
        return await factory()

    try:
        return asyncio.run(_main())
    except (KeyboardInterrupt, asyncio.CancelledError):
        if shutdown_message:
            logger.error(shutdown_message)
        else:
            logger.error("%s service interrupted by user", service_name)
        return EXIT_INTERRUPTED


__all__ = ["EXIT_INTERRUPTED", "ServiceFactory", "run_async_service"]
