"""
Connection lifecycle handling for one device category.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from .devices.cache import DeviceCache
from .devices.models import DeviceCategory
from .polling.manager import PollingManager

logger = logging.getLogger(__name__)

# Cached payload reset when a device of each category disconnects
CLEARED_FIELDS: Dict[DeviceCategory, Dict[str, Any]] = {
    DeviceCategory.DOME: {"dome_status": None, "dome_slaved": None},
    DeviceCategory.OBSERVING_CONDITIONS: {"conditions": None},
    DeviceCategory.SWITCH: {"max_switch": None, "switches": None},
}


class ConnectionLifecycle:
    """
    Reacts to devices connecting and disconnecting.

    On connect: populate the cache once, then start polling.
    On disconnect: stop polling, then clear the category payload.
    """

    def __init__(
        self,
        cache: DeviceCache,
        fetch: Callable[[str], Awaitable[Any]],
        poller: PollingManager,
        cleared_fields: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize the lifecycle handler.

        Args:
            cache: Device cache.
            fetch: Query action populating the initial state.
            poller: Polling manager for this category.
            cleared_fields: Fields reset on disconnect; defaults per category.
        """
        self.cache = cache
        self.fetch = fetch
        self.poller = poller
        if cleared_fields is None:
            cleared_fields = CLEARED_FIELDS.get(poller.category, {})
        self.cleared_fields = dict(cleared_fields)

    @property
    def category(self) -> DeviceCategory:
        return self.poller.category

    async def on_connected(self, device_id: str) -> None:
        """
        Handle a device that has just connected.

        Args:
            device_id: Device ID.
        """
        logger.debug(
            f"{self.category.value} {device_id} connected, fetching state and starting poll"
        )
        await self.fetch(device_id)
        self.poller.start(device_id)

    def on_disconnected(self, device_id: str) -> None:
        """
        Handle a device that has disconnected or been removed.

        Args:
            device_id: Device ID.
        """
        logger.debug(
            f"{self.category.value} {device_id} disconnected, stopping poll and clearing state"
        )
        self.poller.stop(device_id)
        if self.cleared_fields:
            self.cache.update(device_id, self.cleared_fields)
