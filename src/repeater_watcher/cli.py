"""Command line entry point for the repeater watcher.

Usage:
    repeater-watcher -p OpenVPNConnect -- --connect profile.ovpn
    python -m repeater_watcher -d 1.1.1.1 9.9.9.9 -f 3 -- --connect profile.ovpn

Arguments after ``--`` are passed verbatim to the restarted process.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ConfigurationError
from .logging_config import setup_logging
from .monitor_loop import MonitorLoop
from .service_runner import run_async_service
from .watcher_config import (
    DEFAULT_AUX_SKIP_PERIODS,
    AuxiliarySchedule,
    LogSettings,
    WatcherConfig,
    WatcherTimings,
    default_destinations,
    default_interval_seconds,
    default_max_failures,
    default_process_name,
    default_timeout_seconds,
    normalize_destinations,
)

logger = logging.getLogger(__name__)

EXIT_CONFIGURATION_ERROR = 2

HEADER_ART = "\n".join(
    [
        r" _____                       _         __          __   _       _               ",
        r"|  __ \                     | |        \ \        / /  | |     | |              ",
        r"| |__) |___ _ __   ___  __ _| |_ ___ _ _\ \  /\  / /_ _| |_ ___| |__   ___ _ __ ",
        r"|  _  // _ \ '_ \ / _ \/ _` | __/ _ \ '__\ \/  \/ / _` | __/ __| '_ \ / _ \ '__|",
        r"| | \ \  __/ |_) |  __/ (_| | ||  __/ |   \  /\  / (_| | || (__| | | |  __/ |   ",
        r"|_|  \_\___| .__/ \___|\__,_|\__\___|_|    \/  \/ \__,_|\__\___|_| |_|\___|_|   ",
        r"            | |                                                                  ",
        r"            |_|                 ",
    ]
)

DESCRIPTION = (
    "Repeater watcher performs ICMP ping commands at set intervals and kills and restarts "
    "a process if failures reach a specified threshold."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repeater-watcher",
        description=DESCRIPTION,
        epilog="Place '--' before restart arguments that start with a dash.",
    )
    parser.add_argument(
        "restart_arguments",
        nargs="+",
        help="The arguments which will be passed to the restarted process.",
    )
    parser.add_argument("-p", "--process", default=default_process_name(), help="The process to kill and restart.")
    parser.add_argument(
        "-d",
        "--destinations",
        nargs="+",
        default=list(default_destinations()),
        help="One or more destination IP or addresses to ping.",
    )
    parser.add_argument(
        "-i", "--interval", type=float, default=default_interval_seconds(), help="The number of seconds between tests."
    )
    parser.add_argument(
        "-f",
        "--failures",
        type=int,
        default=default_max_failures(),
        help="The number of consecutive failures before restarting.",
    )
    parser.add_argument(
        "-t", "--timeout", type=float, default=default_timeout_seconds(), help="The ping timeout in seconds."
    )
    parser.add_argument("-a", "--aux", type=Path, default=None, help="The path to an auxiliary process to run each period.")
    parser.add_argument(
        "-s",
        "--skip",
        type=int,
        default=DEFAULT_AUX_SKIP_PERIODS,
        help="The number of intervals to skip before running the aux process.",
    )
    parser.add_argument("-x", "--auxargs", default="", help="An argument string for the auxiliary process.")
    parser.add_argument("--rounds", type=int, default=0, help="Stop after this many rounds (0 runs forever).")
    parser.add_argument(
        "--privileged",
        action="store_true",
        help="Use raw ICMP sockets (requires root or administrator rights).",
    )
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for the rotating log file.")
    return parser


def build_config(args: argparse.Namespace) -> WatcherConfig:
    """Turn parsed arguments into a validated WatcherConfig."""
    auxiliary = None
    if args.aux is not None:
        auxiliary = AuxiliarySchedule(executable_path=args.aux, arguments=args.auxargs or "", skip_periods=args.skip)
    elif args.skip < 1:
        raise ConfigurationError.invalid_value("skip", args.skip, "Must be at least 1")

    config = WatcherConfig(
        restart_arguments=tuple(args.restart_arguments),
        process_name=args.process,
        destinations=normalize_destinations(args.destinations),
        interval_seconds=args.interval,
        max_failures=args.failures,
        timeout_seconds=args.timeout,
        auxiliary=auxiliary,
        max_rounds=args.rounds or None,
        privileged=args.privileged,
        timings=WatcherTimings(),
    )
    return config.validate()


def build_log_settings(args: argparse.Namespace) -> LogSettings:
    if args.log_dir is not None:
        return LogSettings(directory=args.log_dir)
    return LogSettings()


def log_configuration(config: WatcherConfig) -> None:
    logger.info("Watching process %s with restart command line %r", config.process_name, config.command_line)
    logger.info(
        "Destinations %s, interval %ss, timeout %ss, restart after %d consecutive failures",
        ", ".join(config.destinations),
        config.interval_seconds,
        config.timeout_seconds,
        config.max_failures,
    )
    if config.auxiliary is not None:
        logger.info(
            "Auxiliary process %s every %d periods",
            config.auxiliary.executable_path,
            config.auxiliary.skip_periods,
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, configure logging and run the monitor loop."""
    arguments: Optional[List[str]] = list(argv) if argv is not None else None
    try:
        parser = build_parser()
        args = parser.parse_args(arguments)
        config = build_config(args)
        log_settings = build_log_settings(args)
    except ConfigurationError as exc:
        sys.stderr.write(f"Configuration error: {exc}\n")
        return EXIT_CONFIGURATION_ERROR

    print(HEADER_ART)
    setup_logging(log_settings)
    logger.info("RepeaterWatcher by M0XDR")
    log_configuration(config)

    monitor = MonitorLoop(config)
    return run_async_service(monitor.run, service_name="watcher", shutdown_message="Monitor loop has been cancelled.")


__all__ = ["HEADER_ART", "build_config", "build_parser", "main"]
