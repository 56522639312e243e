import asyncio
import logging
import signal
from unittest.mock import MagicMock

from repeater_watcher import service_runner


def test_run_async_service_returns_factory_result():
    async def factory():
        return 0

    assert service_runner.run_async_service(factory, service_name="test_service") == 0


def test_run_async_service_handles_keyboard_interrupt(caplog):
    async def factory():
        raise KeyboardInterrupt()

    with caplog.at_level(logging.INFO):
        result = service_runner.run_async_service(factory, service_name="test_service")

    assert result == service_runner.EXIT_INTERRUPTED
    assert any("interrupted by user" in record.message for record in caplog.records)


def test_run_async_service_maps_cancellation_to_exit_code():
    async def factory():
        asyncio.current_task().cancel()
        await asyncio.sleep(1)
        return 0

    assert service_runner.run_async_service(factory, service_name="test_service") == service_runner.EXIT_INTERRUPTED


def test_run_async_service_uses_custom_shutdown_message(caplog):
    async def factory():
        raise KeyboardInterrupt()

    with caplog.at_level(logging.INFO):
        service_runner.run_async_service(factory, service_name="svc", shutdown_message="Monitor loop has been cancelled.")

    assert any(record.message == "Monitor loop has been cancelled." for record in caplog.records)


def test_install_cancel_handlers_registers_shutdown_signals(monkeypatch):
    loop = MagicMock()
    monkeypatch.setattr(service_runner.asyncio, "get_running_loop", lambda: loop)
    task = MagicMock()

    service_runner._install_cancel_handlers(task, logging.getLogger("test"))

    registered = [call.args for call in loop.add_signal_handler.call_args_list]
    assert (signal.SIGINT, task.cancel) in registered
    if hasattr(signal, "SIGTERM"):
        assert (signal.SIGTERM, task.cancel) in registered


def test_install_cancel_handlers_tolerates_unsupported_loops(monkeypatch):
    loop = MagicMock()
    loop.add_signal_handler.side_effect = NotImplementedError()
    monkeypatch.setattr(service_runner.asyncio, "get_running_loop", lambda: loop)

    service_runner._install_cancel_handlers(MagicMock(), logging.getLogger("test"))
