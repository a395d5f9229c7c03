"""
Observatory device sync.

Keeps a cache of dome, switch and observing conditions devices in sync with
the remote devices: runs user commands, polls properties while devices are
connected, and emits structured events for every change or failure.
"""
from .config import DeviceSyncSettings, get_device_sync_settings
from .devices import DeviceCategory, DeviceRecord, InMemoryDeviceCache, SwitchDetail
from .events import ApiError, EventBus, MethodCalled, PropertyChanged
from .exceptions import DeviceSyncError, RemoteCallError, ResolutionError
from .lifecycle import ConnectionLifecycle
from .logging_config import configure_logging
from .service import DeviceSyncService

__version__ = "0.1.0"

__all__ = [
    "DeviceSyncSettings",
    "get_device_sync_settings",
    "DeviceCategory",
    "DeviceRecord",
    "InMemoryDeviceCache",
    "SwitchDetail",
    "ApiError",
    "EventBus",
    "MethodCalled",
    "PropertyChanged",
    "DeviceSyncError",
    "RemoteCallError",
    "ResolutionError",
    "ConnectionLifecycle",
    "configure_logging",
    "DeviceSyncService",
]
