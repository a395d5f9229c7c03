"""
Device records module.

Provides device record types and the device cache they live in.
"""
from .models import DeviceCategory, DeviceRecord, SwitchDetail, SwitchValue
from .cache import DeviceCache, InMemoryDeviceCache

__all__ = [
    "DeviceCategory",
    "DeviceRecord",
    "SwitchDetail",
    "SwitchValue",
    "DeviceCache",
    "InMemoryDeviceCache",
]
