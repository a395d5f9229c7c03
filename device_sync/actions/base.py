"""
Shared plumbing for category action sets.
"""
from typing import Generic, Optional

from ..clients.capabilities import C
from ..clients.resolver import ClientResolver
from ..devices.models import DeviceCategory, DeviceRecord
from .executor import ActionExecutor


class DeviceActions(Generic[C]):
    """Base for the actions of one device category."""

    def __init__(self, resolver: ClientResolver[C], executor: ActionExecutor):
        """
        Initialize the action set.

        Args:
            resolver: Client resolver for this category.
            executor: Shared action executor.
        """
        self.resolver = resolver
        self.executor = executor

    @property
    def category(self) -> DeviceCategory:
        return self.resolver.category

    def _client(self, device_id: str) -> Optional[C]:
        return self.resolver.resolve(device_id)

    def _record(self, device_id: str) -> Optional[DeviceRecord]:
        return self.executor.cache.get_by_id(device_id)
