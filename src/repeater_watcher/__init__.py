"""Connectivity watchdog that restarts a managed process when the network drops."""

__version__ = "1.0.0"
