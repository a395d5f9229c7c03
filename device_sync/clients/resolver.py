"""
Client resolution for device ids.

Looks up the device record, validates its category, derives the endpoint
and builds (or reuses) a protocol client bound to it.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Generic, Optional, Tuple

from ..devices.cache import DeviceCache
from ..devices.models import DeviceCategory
from ..exceptions import (
    CategoryMismatchError,
    DeviceNotFoundError,
    IncompleteAddressError,
    ResolutionError,
)
from .address import resolve_device_index, resolve_endpoint
from .capabilities import C, ClientFactory

logger = logging.getLogger(__name__)


@dataclass
class _CachedClient(Generic[C]):
    fingerprint: Tuple[str, int]
    client: C


class ClientResolver(Generic[C]):
    """
    Resolves protocol clients for one device category.

    Clients are cached per device id when caching is enabled; a cached
    client is rebuilt when the endpoint or device index changes.
    """

    def __init__(
        self,
        cache: DeviceCache,
        category: DeviceCategory,
        factory: ClientFactory[C],
        cache_clients: bool = True,
    ):
        """
        Initialize the resolver.

        Args:
            cache: Device cache to read records from.
            category: Category every resolved device must have.
            factory: Builds a client from (endpoint, device_index, record).
            cache_clients: Reuse clients per device id.
        """
        self.cache = cache
        self.category = category
        self._factory = factory
        self._cache_clients = cache_clients
        self._clients: Dict[str, _CachedClient[C]] = {}

    def resolve_or_raise(self, device_id: str) -> C:
        """
        Resolve a client for a device.

        Args:
            device_id: Device ID.

        Returns:
            Protocol client bound to the device endpoint.

        Raises:
            DeviceNotFoundError: If the record does not exist.
            CategoryMismatchError: If the record has another category.
            IncompleteAddressError: If no endpoint can be derived.
        """
        record = self.cache.get_by_id(device_id)
        if record is None:
            raise DeviceNotFoundError(device_id)

        if record.category != self.category:
            raise CategoryMismatchError(device_id, self.category.value, record.category)

        endpoint = resolve_endpoint(record)
        if endpoint is None:
            raise IncompleteAddressError(device_id)

        fingerprint = (endpoint, resolve_device_index(record))

        cached = self._clients.get(device_id)
        if cached is not None and cached.fingerprint == fingerprint:
            return cached.client

        client = self._factory(fingerprint[0], fingerprint[1], record)
        if self._cache_clients:
            self._clients[device_id] = _CachedClient(fingerprint, client)

        logger.debug(
            f"Created {self.category.value} client for {device_id} "
            f"(endpoint={fingerprint[0]}, index={fingerprint[1]})"
        )
        return client

    def resolve(self, device_id: str) -> Optional[C]:
        """
        Resolve a client, returning None when the device cannot be reached.

        Args:
            device_id: Device ID.

        Returns:
            Protocol client or None.
        """
        try:
            return self.resolve_or_raise(device_id)
        except ResolutionError as e:
            logger.warning(f"Cannot resolve {self.category.value} client: {e}")
            return None
        except Exception as e:
            logger.error(
                f"Error constructing {self.category.value} client for {device_id}: {e}"
            )
            return None

    def discard(self, device_id: str) -> None:
        """Drop the cached client for a device."""
        if self._clients.pop(device_id, None) is not None:
            logger.debug(f"Discarded {self.category.value} client for {device_id}")

    def clear(self) -> None:
        """Drop all cached clients."""
        self._clients.clear()

    def is_cached(self, device_id: str) -> bool:
        return device_id in self._clients
