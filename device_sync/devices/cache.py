"""
Device cache for tracking device records.

Defines the interface the sync layer expects from the device registry and
an in-memory implementation of it.
"""
import dataclasses
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol

from .models import DeviceCategory, DeviceRecord

logger = logging.getLogger(__name__)


class DeviceCache(Protocol):
    """Read and update access to device records."""

    def get_by_id(self, device_id: str) -> Optional[DeviceRecord]:
        ...

    def update(self, device_id: str, fields: Mapping[str, Any]) -> bool:
        ...


class InMemoryDeviceCache:
    """
    Device records kept in a dictionary keyed by device id.

    Responsibilities:
    - Track registered device records
    - Replace record fields on update requests
    - Provide lookup and iteration by category
    """

    def __init__(self):
        """Initialize an empty cache."""
        self._devices: Dict[str, DeviceRecord] = {}
        self._updatable = DeviceRecord.cached_fields()

    def add(self, record: DeviceRecord) -> None:
        """
        Add or replace a device record.

        Args:
            record: Device record to store.
        """
        if record.id in self._devices:
            logger.warning(f"Device {record.id} already registered, replacing record")
        self._devices[record.id] = record
        logger.info(f"Added device {record.id} (category={record.category})")

    def remove(self, device_id: str) -> Optional[DeviceRecord]:
        """
        Remove a device record.

        Args:
            device_id: Device ID to remove.

        Returns:
            The removed record, or None if not found.
        """
        record = self._devices.pop(device_id, None)
        if record:
            logger.info(f"Removed device {device_id}")
        return record

    def get_by_id(self, device_id: str) -> Optional[DeviceRecord]:
        """
        Get device record by ID.

        Args:
            device_id: Device ID.

        Returns:
            DeviceRecord or None if not found.
        """
        return self._devices.get(device_id)

    def update(self, device_id: str, fields: Mapping[str, Any]) -> bool:
        """
        Replace fields of a device record.

        Unknown field names are logged and ignored.

        Args:
            device_id: Device ID.
            fields: Field values to replace.

        Returns:
            True if the device existed.
        """
        record = self._devices.get(device_id)
        if record is None:
            logger.debug(f"Ignoring update for unknown device {device_id}")
            return False

        changes = {}
        for name, value in fields.items():
            if name in self._updatable:
                changes[name] = value
            else:
                logger.warning(f"Ignoring unknown field '{name}' for device {device_id}")

        if changes:
            self._devices[device_id] = dataclasses.replace(record, **changes)
        return True

    def iter_devices(self) -> List[DeviceRecord]:
        """
        Iterate all devices.

        Returns:
            List of DeviceRecord objects.
        """
        return list(self._devices.values())

    def iter_devices_by_category(self, category: DeviceCategory) -> List[DeviceRecord]:
        """
        Iterate devices of a specific category.

        Args:
            category: Device category to filter.

        Returns:
            List of DeviceRecord objects of that category.
        """
        return [d for d in self._devices.values() if d.category == category]

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[DeviceRecord]:
        return iter(list(self._devices.values()))
