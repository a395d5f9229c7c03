"""
Per-device property polling.

Each manager polls devices of one category. A device is either Stopped
(no entry in the registry) or Polling (timer armed). Ticks check the
polling flag on entry, so a stop that races an in-flight tick suppresses
every later tick.
"""
import asyncio
import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, List, Tuple

from ..actions.switch import SwitchActions
from ..clients.capabilities import C, SwitchCapability
from ..clients.resolver import ClientResolver
from ..devices.cache import DeviceCache
from ..devices.models import DeviceCategory, DeviceRecord, SwitchValue
from ..events.types import PropertyChanged
from .registry import PollingRegistry
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

INTERVAL_PROPERTIES = ("pollIntervalMs", "propertyPollIntervalMs")


class PollingManager(ABC, Generic[C]):
    """
    Manages property polling for the devices of one category.

    Features:
    - Idempotent start (an armed timer is cancelled before a new one)
    - Per-device interval from record properties, category default otherwise
    - Self-termination when the device disappears or disconnects
    """

    def __init__(
        self,
        cache: DeviceCache,
        resolver: ClientResolver[C],
        scheduler: Scheduler,
        default_interval_ms: int,
        min_interval_ms: int = 1,
    ):
        """
        Initialize the polling manager.

        Args:
            cache: Device cache.
            resolver: Client resolver for this category.
            scheduler: Recurring timer provider.
            default_interval_ms: Interval used when a record sets none.
            min_interval_ms: Lower bound for per-device intervals.
        """
        self.cache = cache
        self.resolver = resolver
        self.scheduler = scheduler
        self.default_interval_ms = default_interval_ms
        self.min_interval_ms = min_interval_ms
        self._registry = PollingRegistry()

    @property
    def category(self) -> DeviceCategory:
        return self.resolver.category

    def start(self, device_id: str) -> bool:
        """
        Start polling a device.

        Args:
            device_id: Device ID.

        Returns:
            True if a timer was armed.
        """
        if device_id in self._registry:
            self.stop(device_id)

        record = self.cache.get_by_id(device_id)
        if record is None or record.category != self.category or not record.connected:
            logger.debug(
                f"Not polling {device_id}: device missing, not a "
                f"{self.category.value} device, or not connected"
            )
            return False

        interval_ms = self.poll_interval_ms(record)
        token = self.scheduler.schedule_every(
            interval_ms,
            lambda: self.poll_once(device_id),
            name=f"poll_{device_id}",
        )
        self._registry.arm(device_id, token)

        logger.info(f"Started polling {device_id} every {interval_ms}ms")
        return True

    def stop(self, device_id: str) -> None:
        """
        Stop polling a device. Safe to call when not polling.

        Args:
            device_id: Device ID.
        """
        if self._registry.disarm(device_id):
            logger.debug(f"Stopped polling {device_id}")

    def stop_all(self) -> None:
        """Stop polling every device."""
        for device_id in self._registry.device_ids():
            self.stop(device_id)

    async def poll_once(self, device_id: str) -> None:
        """
        Run one poll tick for a device.

        Never raises; failures are logged or reported as events.

        Args:
            device_id: Device ID.
        """
        if not self._registry.is_polling(device_id):
            return

        record = self.cache.get_by_id(device_id)
        if record is None or not record.connected:
            logger.info(f"Device {device_id} gone or disconnected, stopping poll")
            self.stop(device_id)
            return

        client = self.resolver.resolve(device_id)
        if client is None:
            return

        try:
            await self._refresh(device_id, record, client)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error polling {device_id}: {e}")

    @abstractmethod
    async def _refresh(self, device_id: str, record: DeviceRecord, client: C) -> None:
        """Refresh the cached properties of one device."""

    def poll_interval_ms(self, record: DeviceRecord) -> int:
        """
        Get the poll interval for a device.

        Args:
            record: Device record.

        Returns:
            Interval in milliseconds.
        """
        for key in INTERVAL_PROPERTIES:
            value = record.properties.get(key) if record.properties else None
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
                return max(int(value), self.min_interval_ms)
        return self.default_interval_ms

    def is_polling(self, device_id: str) -> bool:
        """
        Check if a device is being polled.

        Args:
            device_id: Device ID.

        Returns:
            True if polling is active.
        """
        return self._registry.is_polling(device_id)

    def polling_devices(self) -> List[str]:
        """
        Get list of devices being polled.

        Returns:
            List of device IDs.
        """
        return self._registry.device_ids()


class SnapshotPollingManager(PollingManager[C]):
    """Polls a full property snapshot on every tick, without diffing."""

    def __init__(
        self,
        cache: DeviceCache,
        resolver: ClientResolver[C],
        scheduler: Scheduler,
        fetch: Callable[[str, C], Awaitable[Any]],
        default_interval_ms: int,
        min_interval_ms: int = 1,
    ):
        """
        Initialize the snapshot poller.

        Args:
            fetch: Query action run on every tick with the resolved client.
        """
        super().__init__(cache, resolver, scheduler, default_interval_ms, min_interval_ms)
        self._fetch = fetch

    async def _refresh(self, device_id: str, record: DeviceRecord, client: C) -> None:
        await self._fetch(device_id, client)


class SwitchPollingManager(PollingManager[SwitchCapability]):
    """
    Polls every switch value individually.

    Changed values are written back as one collection update, followed by
    one event per changed switch.
    """

    def __init__(
        self,
        actions: SwitchActions,
        scheduler: Scheduler,
        default_interval_ms: int,
        min_interval_ms: int = 1,
    ):
        """
        Initialize the switch poller.

        Args:
            actions: Switch actions providing the resolver and executor.
        """
        super().__init__(
            actions.executor.cache,
            actions.resolver,
            scheduler,
            default_interval_ms,
            min_interval_ms,
        )
        self.actions = actions

    async def _refresh(
        self,
        device_id: str,
        record: DeviceRecord,
        client: SwitchCapability,
    ) -> None:
        switches = record.switches
        if not isinstance(record.max_switch, int) or not switches:
            logger.warning(
                f"No switch details cached for {device_id}, fetching all details"
            )
            await self.actions.fetch_with(device_id, client)
            return

        updated = list(switches)
        changes: List[Tuple[int, SwitchValue]] = []

        for index, detail in enumerate(switches):
            try:
                value = await client.get_switch_value(index)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Error polling value for switch {index} on {device_id}: {e}")
                continue

            if value != detail.value:
                updated[index] = dataclasses.replace(detail, value=value)
                changes.append((index, value))

        if not changes:
            return

        executor = self.actions.executor
        executor.cache.update(device_id, {"switches": updated})
        for index, value in changes:
            executor.sink.emit(PropertyChanged(device_id, f"switchValue_{index}", value))

