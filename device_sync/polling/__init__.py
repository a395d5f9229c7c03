"""
Property polling module.

Handles scheduled polling of connected devices.
"""
from .scheduler import AsyncioScheduler, CancelToken, Scheduler, TickCallback
from .registry import PollingEntry, PollingRegistry
from .manager import PollingManager, SnapshotPollingManager, SwitchPollingManager

__all__ = [
    "AsyncioScheduler",
    "CancelToken",
    "Scheduler",
    "TickCallback",
    "PollingEntry",
    "PollingRegistry",
    "PollingManager",
    "SnapshotPollingManager",
    "SwitchPollingManager",
]
