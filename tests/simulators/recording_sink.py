"""
Event sink that records emitted events.
"""
from typing import Any, List, Optional, Tuple, Type, TypeVar

from device_sync.devices.cache import DeviceCache
from device_sync.devices.models import DeviceRecord
from device_sync.events.types import DeviceEvent

E = TypeVar("E")


class RecordingSink:
    """
    Records events in emission order.

    When given a cache, also records the device record as it was at the
    moment each event was emitted.
    """

    def __init__(self, cache: Optional[DeviceCache] = None):
        self.cache = cache
        self.events: List[DeviceEvent] = []
        self.snapshots: List[Tuple[DeviceEvent, Optional[DeviceRecord]]] = []

    def emit(self, event: DeviceEvent) -> None:
        self.events.append(event)
        if self.cache is not None:
            self.snapshots.append((event, self.cache.get_by_id(event.device_id)))

    def of_type(self, event_type: Type[E]) -> List[E]:
        return [e for e in self.events if isinstance(e, event_type)]

    def properties(self) -> List[Tuple[str, Any]]:
        """(property, value) of every PropertyChanged event."""
        return [(e.property, e.value) for e in self.events if e.type == "devicePropertyChanged"]

    def clear(self) -> None:
        self.events.clear()
        self.snapshots.clear()
