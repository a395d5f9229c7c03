"""
Per-device polling state.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from .scheduler import CancelToken


@dataclass
class PollingEntry:
    """Polling flag and timer token for one device."""
    is_polling: bool
    token: Optional[CancelToken] = None


class PollingRegistry:
    """
    Polling flags and timer tokens keyed by device id.

    Holds at most one live timer token per device: arming a device that
    already has a token cancels the old one first.
    """

    def __init__(self):
        self._entries: Dict[str, PollingEntry] = {}

    def arm(self, device_id: str, token: CancelToken) -> None:
        """
        Record a new timer for a device and mark it as polling.

        Args:
            device_id: Device ID.
            token: Token of the newly scheduled timer.
        """
        previous = self._entries.get(device_id)
        if previous is not None and previous.token is not None:
            previous.token.cancel()
        self._entries[device_id] = PollingEntry(is_polling=True, token=token)

    def disarm(self, device_id: str) -> bool:
        """
        Cancel a device's timer and clear its polling flag.

        Args:
            device_id: Device ID.

        Returns:
            True if the device was polling.
        """
        entry = self._entries.pop(device_id, None)
        if entry is None:
            return False
        if entry.token is not None:
            entry.token.cancel()
        return True

    def is_polling(self, device_id: str) -> bool:
        entry = self._entries.get(device_id)
        return entry is not None and entry.is_polling

    def has_timer(self, device_id: str) -> bool:
        entry = self._entries.get(device_id)
        return entry is not None and entry.token is not None and not entry.token.cancelled

    def device_ids(self) -> List[str]:
        """Get the ids of all polling devices."""
        return [device_id for device_id, entry in self._entries.items() if entry.is_polling]

    def clear(self) -> None:
        """Disarm every device."""
        for device_id in list(self._entries):
            self.disarm(device_id)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
