"""
Test data factories for device sync.

Provides factory classes for generating device records and payloads.
"""
from .device_factory import (
    DeviceRecordFactory,
    DomeRecordFactory,
    ObservingConditionsRecordFactory,
    SwitchRecordFactory,
    SwitchDetailFactory,
)
from .payload_factory import ConditionsFactory, DomeStateFactory

__all__ = [
    "DeviceRecordFactory",
    "DomeRecordFactory",
    "ObservingConditionsRecordFactory",
    "SwitchRecordFactory",
    "SwitchDetailFactory",
    "ConditionsFactory",
    "DomeStateFactory",
]
