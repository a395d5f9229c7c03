"""
Remote operations each device category exposes.

Concrete protocol clients live outside this package. Every operation is a
coroutine that either returns its result or raises with a human-readable
cause; constructing a client must not raise.
"""
from typing import Any, Callable, Dict, Protocol, TypeVar

from ..devices.models import DeviceRecord, SwitchDetail


class DomeCapability(Protocol):
    """Dome remote operations."""

    async def get_dome_state(self) -> Dict[str, Any]:
        ...

    async def open_shutter(self) -> None:
        ...

    async def close_shutter(self) -> None:
        ...

    async def park(self) -> None:
        ...

    async def find_home(self) -> None:
        ...

    async def abort_slew(self) -> None:
        ...

    async def set_park(self) -> None:
        ...

    async def slew_to_altitude(self, altitude: float) -> None:
        ...

    async def slew_to_azimuth(self, azimuth: float) -> None:
        ...

    async def sync_to_azimuth(self, azimuth: float) -> None:
        ...

    async def set_slaved(self, slaved: bool) -> None:
        ...


class SwitchCapability(Protocol):
    """Switch bank remote operations."""

    async def max_switch(self) -> int:
        ...

    async def get_switch_details(self, switch_id: int) -> SwitchDetail:
        ...

    async def get_switch_value(self, switch_id: int) -> float:
        ...

    async def set_switch(self, switch_id: int, state: bool) -> None:
        ...

    async def set_switch_value(self, switch_id: int, value: float) -> None:
        ...

    async def set_switch_name(self, switch_id: int, name: str) -> None:
        ...

    async def set_async_switch(self, switch_id: int, state: bool) -> None:
        ...

    async def set_async_switch_value(self, switch_id: int, value: float) -> None:
        ...

    async def is_state_change_complete(self, switch_id: int, transaction_id: int) -> bool:
        ...


class ObservingConditionsCapability(Protocol):
    """Observing conditions sensor remote operations."""

    async def get_all_conditions(self) -> Dict[str, Any]:
        ...

    async def set_average_period(self, period: float) -> None:
        ...


C = TypeVar("C")

# (endpoint, device_index, record) -> client
ClientFactory = Callable[[str, int, DeviceRecord], C]
