"""
Device simulators for device sync testing.

Provides in-memory protocol clients, a virtual clock scheduler and a
recording event sink, so the sync layer can be exercised without hardware
or real timers.
"""
from .device_clients import (
    FakeClient,
    FakeDomeClient,
    FakeObservingConditionsClient,
    FakeSwitchClient,
)
from .recording_sink import RecordingSink
from .virtual_scheduler import VirtualScheduler, VirtualTimer

__all__ = [
    "FakeClient",
    "FakeDomeClient",
    "FakeObservingConditionsClient",
    "FakeSwitchClient",
    "RecordingSink",
    "VirtualScheduler",
    "VirtualTimer",
]
