"""
Observing conditions actions.
"""
from typing import Any, Dict, Optional

from ..clients.capabilities import ObservingConditionsCapability
from .base import DeviceActions
from .executor import CommandOutcome, CommandSpec, QuerySpec, RefreshPolicy

OBSERVING_CONDITIONS = QuerySpec(
    property="observingConditions",
    description="fetch observing conditions",
    to_fields=lambda conditions: {"conditions": dict(conditions)},
)

SET_AVERAGE_PERIOD = CommandSpec("setAveragePeriod", "set average period", RefreshPolicy.ALWAYS)


class ObservingConditionsActions(DeviceActions[ObservingConditionsCapability]):
    """Queries and commands for observing conditions sensors."""

    async def fetch_observing_conditions(self, device_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch every sensor reading and cache the snapshot.

        Args:
            device_id: Device ID.

        Returns:
            Conditions snapshot, or None if unresolved or failed.
        """
        client = self._client(device_id)
        if client is None:
            return None
        return await self.fetch_with(device_id, client)

    async def fetch_with(
        self,
        device_id: str,
        client: ObservingConditionsCapability,
    ) -> Optional[Dict[str, Any]]:
        return await self.executor.run_query(
            device_id, OBSERVING_CONDITIONS, client.get_all_conditions
        )

    async def set_average_period(self, device_id: str, period: float) -> Optional[CommandOutcome]:
        """Set the sensor averaging period in hours, then refresh all conditions."""
        client = self._client(device_id)
        if client is None:
            return None
        return await self.executor.run_command(
            device_id,
            SET_AVERAGE_PERIOD,
            lambda: client.set_average_period(period),
            args=(period,),
            refresh=lambda: self.fetch_with(device_id, client),
        )
