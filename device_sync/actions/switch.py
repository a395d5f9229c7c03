"""
Switch bank actions.

Switches are addressed by index. Setting one switch re-reads only that
switch and splices it into the cached collection; if the index is not
cached yet the whole collection is fetched instead.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from ..clients.capabilities import SwitchCapability
from ..devices.models import SwitchDetail, SwitchValue
from ..exceptions import MaxSwitchUnavailable
from .base import DeviceActions
from .executor import CommandOutcome, CommandSpec, QuerySpec, RefreshPolicy

logger = logging.getLogger(__name__)

SwitchDetails = Tuple[int, List[SwitchDetail]]

SWITCH_DETAILS = QuerySpec(
    property="switchDetails",
    description="fetch switch details",
    to_fields=lambda details: {"max_switch": details[0], "switches": details[1]},
    to_value=lambda details: {"maxSwitch": details[0], "switches": details[1]},
)

SET_SWITCH_VALUE = CommandSpec(
    "setSwitchValue", "set switch value", RefreshPolicy.ON_FAILURE, announce=False
)
SET_SWITCH_NAME = CommandSpec(
    "setSwitchName", "set switch name", RefreshPolicy.ON_FAILURE, announce=False
)
SET_ASYNC_SWITCH_STATE = CommandSpec("setAsyncSwitchState", "set async switch state")
SET_ASYNC_SWITCH_VALUE = CommandSpec("setAsyncSwitchValue", "set async switch value")
STATE_CHANGE_COMPLETE = CommandSpec(
    "isStateChangeComplete", "check state change completion", report_result=True
)


class SwitchActions(DeviceActions[SwitchCapability]):
    """Queries and commands for switch bank devices."""

    async def fetch_switch_details(self, device_id: str) -> Optional[SwitchDetails]:
        """
        Fetch the switch count and the details of every switch.

        Args:
            device_id: Device ID.

        Returns:
            Tuple of (max_switch, switches), or None if unresolved or failed.
        """
        client = self._client(device_id)
        if client is None:
            return None
        return await self.fetch_with(device_id, client)

    async def fetch_with(self, device_id: str, client: SwitchCapability) -> Optional[SwitchDetails]:
        return await self.executor.run_query(
            device_id,
            SWITCH_DETAILS,
            lambda: self._collect_details(device_id, client),
        )

    async def _collect_details(self, device_id: str, client: SwitchCapability) -> SwitchDetails:
        max_switch = await client.max_switch()
        if not isinstance(max_switch, int) or isinstance(max_switch, bool) or max_switch < 0:
            raise MaxSwitchUnavailable(max_switch, device_id)

        switches: List[SwitchDetail] = []
        for index in range(max_switch):
            try:
                switches.append(await client.get_switch_details(index))
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Error getting details for switch {index} on {device_id}: {e}")
                switches.append(SwitchDetail.placeholder(index))

        return max_switch, switches

    async def set_switch_value(
        self,
        device_id: str,
        switch_id: int,
        value: SwitchValue,
    ) -> Optional[CommandOutcome]:
        """
        Set one switch's state (bool) or value (number).

        Args:
            device_id: Device ID.
            switch_id: Switch index.
            value: New state or value.
        """
        client = self._client(device_id)
        if client is None:
            return None

        operation = client.set_switch if isinstance(value, bool) else client.set_switch_value

        return await self.executor.run_command(
            device_id,
            SET_SWITCH_VALUE,
            lambda: operation(switch_id, value),
            args=(switch_id, value),
            refresh=lambda: self.fetch_with(device_id, client),
            on_success=self._splice(
                device_id, client, switch_id, "switchValue", lambda detail: detail.value
            ),
        )

    async def set_switch_name(
        self,
        device_id: str,
        switch_id: int,
        name: str,
    ) -> Optional[CommandOutcome]:
        """
        Rename one switch.

        Args:
            device_id: Device ID.
            switch_id: Switch index.
            name: New name.
        """
        client = self._client(device_id)
        if client is None:
            return None

        return await self.executor.run_command(
            device_id,
            SET_SWITCH_NAME,
            lambda: client.set_switch_name(switch_id, name),
            args=(switch_id, name),
            refresh=lambda: self.fetch_with(device_id, client),
            on_success=self._splice(
                device_id, client, switch_id, "switchName", lambda detail: name
            ),
        )

    async def set_async_switch_state(
        self,
        device_id: str,
        switch_id: int,
        state: bool,
    ) -> Optional[CommandOutcome]:
        """Start an asynchronous state change; the cache is not refreshed."""
        client = self._client(device_id)
        if client is None:
            return None
        return await self.executor.run_command(
            device_id,
            SET_ASYNC_SWITCH_STATE,
            lambda: client.set_async_switch(switch_id, state),
            args=(switch_id, state),
        )

    async def set_async_switch_value(
        self,
        device_id: str,
        switch_id: int,
        value: float,
    ) -> Optional[CommandOutcome]:
        """Start an asynchronous value change; the cache is not refreshed."""
        client = self._client(device_id)
        if client is None:
            return None
        return await self.executor.run_command(
            device_id,
            SET_ASYNC_SWITCH_VALUE,
            lambda: client.set_async_switch_value(switch_id, value),
            args=(switch_id, value),
        )

    async def is_state_change_complete(
        self,
        device_id: str,
        switch_id: int,
        transaction_id: int,
    ) -> Optional[bool]:
        """
        Check whether an asynchronous switch change has finished.

        Returns:
            Completion flag, or None if unresolved or failed.
        """
        client = self._client(device_id)
        if client is None:
            return None
        outcome = await self.executor.run_command(
            device_id,
            STATE_CHANGE_COMPLETE,
            lambda: client.is_state_change_complete(switch_id, transaction_id),
            args=(switch_id, transaction_id),
        )
        return outcome.result if outcome.ok else None

    def _splice(
        self,
        device_id: str,
        client: SwitchCapability,
        switch_id: int,
        prefix: str,
        event_value: Callable[[SwitchDetail], Any],
    ) -> Callable[[Any], Awaitable[None]]:
        """Build the follow-up that re-reads one switch and splices it into the cache."""

        async def splice(_: Any) -> None:
            if not self._is_cached(device_id, switch_id):
                logger.debug(
                    f"Switch {switch_id} not cached for {device_id}, refreshing all details"
                )
                await self.fetch_with(device_id, client)
                return

            detail = await client.get_switch_details(switch_id)

            # Splice into the collection as it is now, not as it was before the read
            if not self._is_cached(device_id, switch_id):
                await self.fetch_with(device_id, client)
                return
            current = list(self._record(device_id).switches)
            current[switch_id] = detail

            self.executor.update_and_notify(
                device_id,
                {"switches": current},
                f"{prefix}_{switch_id}",
                event_value(detail),
            )

        return splice

    def _is_cached(self, device_id: str, switch_id: int) -> bool:
        record = self._record(device_id)
        return record is not None and 0 <= switch_id < len(record.switches or [])
