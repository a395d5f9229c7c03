"""
Dome actions.

Shutter, park and slew commands refresh the full dome status afterwards,
whether or not they succeeded, so the cache follows whatever state the
dome ended up in.
"""
from typing import Any, Dict, Optional

from ..clients.capabilities import DomeCapability
from .base import DeviceActions
from .executor import CommandOutcome, CommandSpec, QuerySpec, RefreshPolicy

DOME_STATUS = QuerySpec(
    property="domeStatus",
    description="fetch dome status",
    to_fields=lambda state: {"dome_status": dict(state)},
)

OPEN_SHUTTER = CommandSpec("openShutter", "openShutter dome", RefreshPolicy.ALWAYS)
CLOSE_SHUTTER = CommandSpec("closeShutter", "closeShutter dome", RefreshPolicy.ALWAYS)
PARK = CommandSpec("parkDome", "parkDome dome", RefreshPolicy.ALWAYS)
FIND_HOME = CommandSpec("findHomeDome", "findHomeDome dome", RefreshPolicy.ALWAYS)
ABORT_SLEW = CommandSpec("abortSlewDome", "abortSlewDome dome", RefreshPolicy.ALWAYS)
SET_PARK = CommandSpec("setPark", "set park position", RefreshPolicy.NONE)
SLEW_TO_ALTITUDE = CommandSpec("slewToAltitude", "slew to altitude", RefreshPolicy.ALWAYS)
SLEW_TO_AZIMUTH = CommandSpec("slewToAzimuth", "slew to azimuth", RefreshPolicy.ALWAYS)
SYNC_TO_AZIMUTH = CommandSpec("syncToAzimuth", "sync to azimuth", RefreshPolicy.ALWAYS)
SET_SLAVED = CommandSpec("setSlaved", "set slaved state", RefreshPolicy.ON_FAILURE)


class DomeActions(DeviceActions[DomeCapability]):
    """Queries and commands for dome devices."""

    async def fetch_dome_status(self, device_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the full dome state and cache it.

        Args:
            device_id: Device ID.

        Returns:
            Dome state, or None if unresolved or failed.
        """
        client = self._client(device_id)
        if client is None:
            return None
        return await self.fetch_with(device_id, client)

    async def fetch_with(self, device_id: str, client: DomeCapability) -> Optional[Dict[str, Any]]:
        return await self.executor.run_query(device_id, DOME_STATUS, client.get_dome_state)

    async def open_shutter(self, device_id: str) -> Optional[CommandOutcome]:
        return await self._execute(device_id, OPEN_SHUTTER, "open_shutter")

    async def close_shutter(self, device_id: str) -> Optional[CommandOutcome]:
        return await self._execute(device_id, CLOSE_SHUTTER, "close_shutter")

    async def park(self, device_id: str) -> Optional[CommandOutcome]:
        return await self._execute(device_id, PARK, "park")

    async def find_home(self, device_id: str) -> Optional[CommandOutcome]:
        return await self._execute(device_id, FIND_HOME, "find_home")

    async def abort_slew(self, device_id: str) -> Optional[CommandOutcome]:
        return await self._execute(device_id, ABORT_SLEW, "abort_slew")

    async def set_park_position(self, device_id: str) -> Optional[CommandOutcome]:
        """Store the current position as the park position; no refresh follows."""
        return await self._execute(device_id, SET_PARK, "set_park")

    async def slew_to_altitude(self, device_id: str, altitude: float) -> Optional[CommandOutcome]:
        return await self._execute(device_id, SLEW_TO_ALTITUDE, "slew_to_altitude", altitude)

    async def slew_to_azimuth(self, device_id: str, azimuth: float) -> Optional[CommandOutcome]:
        return await self._execute(device_id, SLEW_TO_AZIMUTH, "slew_to_azimuth", azimuth)

    async def sync_to_azimuth(self, device_id: str, azimuth: float) -> Optional[CommandOutcome]:
        return await self._execute(device_id, SYNC_TO_AZIMUTH, "sync_to_azimuth", azimuth)

    async def set_slaved(self, device_id: str, slaved: bool) -> Optional[CommandOutcome]:
        """
        Enable or disable dome slaving.

        Only the slaved flag is updated on success; a failure refreshes the
        full status.

        Args:
            device_id: Device ID.
            slaved: New slaved state.
        """
        client = self._client(device_id)
        if client is None:
            return None

        async def apply(_: Any) -> None:
            self.executor.cache.update(device_id, {"dome_slaved": slaved})

        return await self.executor.run_command(
            device_id,
            SET_SLAVED,
            lambda: client.set_slaved(slaved),
            args=(slaved,),
            refresh=lambda: self.fetch_with(device_id, client),
            on_success=apply,
        )

    async def _execute(
        self,
        device_id: str,
        spec: CommandSpec,
        operation: str,
        *args: Any,
    ) -> Optional[CommandOutcome]:
        client = self._client(device_id)
        if client is None:
            return None
        method = getattr(client, operation)
        return await self.executor.run_command(
            device_id,
            spec,
            lambda: method(*args),
            args=args,
            refresh=lambda: self.fetch_with(device_id, client),
        )
