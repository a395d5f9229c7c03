"""
Device sync service.

Wires the cache, the event sink and per-category client factories into
action sets, pollers and connection lifecycles.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .actions.dome import DomeActions
from .actions.executor import ActionExecutor
from .actions.observing_conditions import ObservingConditionsActions
from .actions.switch import SwitchActions
from .clients.capabilities import ClientFactory
from .clients.resolver import ClientResolver
from .config import DeviceSyncSettings, get_device_sync_settings
from .devices.cache import DeviceCache
from .devices.models import DeviceCategory
from .events.bus import EventSink
from .lifecycle import ConnectionLifecycle
from .polling.manager import PollingManager, SnapshotPollingManager, SwitchPollingManager
from .polling.scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)


class DeviceSyncService:
    """
    Keeps cached device state in sync with the remote devices.

    Categories without a client factory are not wired; their action
    attribute is None and their connection events are ignored.
    """

    def __init__(
        self,
        cache: DeviceCache,
        sink: EventSink,
        client_factories: Mapping[DeviceCategory, ClientFactory[Any]],
        scheduler: Optional[Scheduler] = None,
        settings: Optional[DeviceSyncSettings] = None,
    ):
        """
        Initialize the service.

        Args:
            cache: Device cache shared by every category.
            sink: Event sink receiving structured events.
            client_factories: Client factory per device category.
            scheduler: Recurring timer provider; defaults to AsyncioScheduler.
            settings: Settings; defaults to the cached environment settings.
        """
        self.cache = cache
        self.sink = sink
        self.settings = settings or get_device_sync_settings()
        self._owns_scheduler = scheduler is None
        self.scheduler: Scheduler = scheduler or AsyncioScheduler()
        self.executor = ActionExecutor(cache, sink)

        self.dome: Optional[DomeActions] = None
        self.switch: Optional[SwitchActions] = None
        self.observing_conditions: Optional[ObservingConditionsActions] = None

        self._resolvers: Dict[DeviceCategory, ClientResolver[Any]] = {}
        self._lifecycles: Dict[DeviceCategory, ConnectionLifecycle] = {}

        for category, factory in client_factories.items():
            self._wire(DeviceCategory(category), factory)

        logger.info(
            f"Device sync wired for: {', '.join(c.value for c in self._lifecycles) or 'nothing'}"
        )

    def _wire(self, category: DeviceCategory, factory: ClientFactory[Any]) -> None:
        resolver = ClientResolver(
            self.cache,
            category,
            factory,
            cache_clients=self.settings.clients.cache_clients,
        )
        interval = self.settings.default_interval_ms(category)
        min_interval = self.settings.polling.min_interval_ms

        poller: PollingManager[Any]
        if category == DeviceCategory.DOME:
            self.dome = DomeActions(resolver, self.executor)
            fetch = self.dome.fetch_dome_status
            poller = SnapshotPollingManager(
                self.cache, resolver, self.scheduler, self.dome.fetch_with, interval, min_interval
            )
        elif category == DeviceCategory.OBSERVING_CONDITIONS:
            self.observing_conditions = ObservingConditionsActions(resolver, self.executor)
            fetch = self.observing_conditions.fetch_observing_conditions
            poller = SnapshotPollingManager(
                self.cache,
                resolver,
                self.scheduler,
                self.observing_conditions.fetch_with,
                interval,
                min_interval,
            )
        else:
            self.switch = SwitchActions(resolver, self.executor)
            fetch = self.switch.fetch_switch_details
            poller = SwitchPollingManager(self.switch, self.scheduler, interval, min_interval)

        self._resolvers[category] = resolver
        self._lifecycles[category] = ConnectionLifecycle(self.cache, fetch, poller)

    @property
    def categories(self) -> List[DeviceCategory]:
        return list(self._lifecycles)

    def lifecycle_for(self, category: Union[DeviceCategory, str]) -> Optional[ConnectionLifecycle]:
        """
        Get the connection lifecycle for a category.

        Args:
            category: Device category.

        Returns:
            Lifecycle, or None if the category is not wired.
        """
        try:
            return self._lifecycles.get(DeviceCategory(category))
        except ValueError:
            return None

    async def handle_device_connected(self, device_id: str) -> None:
        """
        Populate and start polling a device that just connected.

        Args:
            device_id: Device ID.
        """
        record = self.cache.get_by_id(device_id)
        if record is None:
            logger.warning(f"Connected device {device_id} not found in cache")
            return

        lifecycle = self.lifecycle_for(record.category)
        if lifecycle is None:
            logger.debug(f"No sync wired for {record.category} device {device_id}")
            return

        await lifecycle.on_connected(device_id)

    def handle_device_disconnected(
        self,
        device_id: str,
        category: Optional[Union[DeviceCategory, str]] = None,
    ) -> None:
        """
        Stop polling a device and clear its cached state.

        Args:
            device_id: Device ID.
            category: Device category, for records that are already gone.
        """
        if category is None:
            record = self.cache.get_by_id(device_id)
            if record is None:
                for lifecycle in self._lifecycles.values():
                    lifecycle.on_disconnected(device_id)
                return
            category = record.category

        lifecycle = self.lifecycle_for(category)
        if lifecycle is not None:
            lifecycle.on_disconnected(device_id)

    def forget_device(self, device_id: str) -> None:
        """
        Stop polling a device and drop its cached clients.

        Args:
            device_id: Device ID.
        """
        for category, lifecycle in self._lifecycles.items():
            lifecycle.poller.stop(device_id)
            self._resolvers[category].discard(device_id)

    def is_polling(self, device_id: str) -> bool:
        return any(lc.poller.is_polling(device_id) for lc in self._lifecycles.values())

    async def shutdown(self) -> None:
        """Stop every poller and, if owned, the scheduler."""
        for lifecycle in self._lifecycles.values():
            lifecycle.poller.stop_all()
        for resolver in self._resolvers.values():
            resolver.clear()
        if self._owns_scheduler and isinstance(self.scheduler, AsyncioScheduler):
            await self.scheduler.shutdown()
        logger.info("Device sync shut down")
