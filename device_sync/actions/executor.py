"""
Uniform execution of remote device calls.

Every remote query and command goes through ActionExecutor so that
success and failure are reported the same way: cache update before event,
ApiError on failure, and an explicit refresh policy per command.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Flag
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, Sequence, TypeVar

from ..devices.cache import DeviceCache
from ..events.bus import EventSink
from ..events.types import ApiError, MethodCalled, PropertyChanged, format_api_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

Refresh = Callable[[], Awaitable[Any]]


class RefreshPolicy(Flag):
    """When a command triggers a full status refresh."""
    NONE = 0
    ON_SUCCESS = 1
    ON_FAILURE = 2
    ALWAYS = ON_SUCCESS | ON_FAILURE


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class QuerySpec(Generic[T]):
    """
    A remote query whose result is cached.

    Attributes:
        property: Property name carried by the PropertyChanged event.
        description: Action text for the ApiError message ("fetch dome status").
        to_fields: Maps the result to the cache fields to replace.
        to_value: Maps the result to the event value.
    """
    property: str
    description: str
    to_fields: Callable[[T], Dict[str, Any]]
    to_value: Callable[[T], Any] = field(default=_identity)


@dataclass(frozen=True)
class CommandSpec:
    """
    A remote command.

    Attributes:
        method: Method name carried by the MethodCalled event.
        description: Action text for the ApiError message.
        refresh: When to run the full status refresh.
        announce: Emit MethodCalled on success.
        report_result: MethodCalled carries the call result instead of "success".
    """
    method: str
    description: str
    refresh: RefreshPolicy = RefreshPolicy.NONE
    announce: bool = True
    report_result: bool = False


@dataclass(frozen=True)
class CommandOutcome:
    """Result of a command execution."""
    ok: bool
    result: Any = None
    error: Optional[str] = None


class ActionExecutor:
    """
    Runs remote calls for a device and reports the outcome.

    Never raises for remote failures; they are logged and emitted as
    ApiError events.
    """

    def __init__(self, cache: DeviceCache, sink: EventSink):
        """
        Initialize the executor.

        Args:
            cache: Device cache receiving update requests.
            sink: Event sink receiving structured events.
        """
        self.cache = cache
        self.sink = sink

    async def run_query(
        self,
        device_id: str,
        spec: QuerySpec[T],
        call: Callable[[], Awaitable[T]],
    ) -> Optional[T]:
        """
        Run a remote query and cache its result.

        Args:
            device_id: Device ID.
            spec: Query description.
            call: Coroutine function performing the remote query.

        Returns:
            The query result, or None if the call failed.
        """
        try:
            result = await call()
            fields = spec.to_fields(result)
            value = spec.to_value(result)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error trying to {spec.description} for {device_id}: {e}")
            self.report_error(device_id, spec.description, e)
            return None

        self.cache.update(device_id, fields)
        self.sink.emit(PropertyChanged(device_id, spec.property, value))
        return result

    async def run_command(
        self,
        device_id: str,
        spec: CommandSpec,
        call: Callable[[], Awaitable[Any]],
        args: Sequence[Any] = (),
        refresh: Optional[Refresh] = None,
        on_success: Optional[Callable[[Any], Awaitable[None]]] = None,
    ) -> CommandOutcome:
        """
        Run a remote command.

        On success: on_success(result), then refresh if the policy asks for
        it, then MethodCalled. On failure (of the call or of on_success):
        ApiError, then refresh if the policy asks for it.

        Args:
            device_id: Device ID.
            spec: Command description.
            call: Coroutine function performing the remote command.
            args: Arguments reported in the MethodCalled event.
            refresh: Full status refresh for this device.
            on_success: Follow-up run after a successful call, e.g. a targeted
                cache update.

        Returns:
            CommandOutcome describing the result.
        """
        try:
            result = await call()
            if on_success is not None:
                await on_success(result)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error executing {spec.method} on {device_id}: {e}")
            error = self.report_error(device_id, spec.description, e)
            if refresh is not None and RefreshPolicy.ON_FAILURE in spec.refresh:
                await refresh()
            return CommandOutcome(ok=False, error=error)

        if refresh is not None and RefreshPolicy.ON_SUCCESS in spec.refresh:
            await refresh()

        if spec.announce:
            self.sink.emit(
                MethodCalled(
                    device_id,
                    spec.method,
                    tuple(args),
                    result if spec.report_result else "success",
                )
            )
        return CommandOutcome(ok=True, result=result)

    def update_and_notify(self, device_id: str, fields: Dict[str, Any], prop: str, value: Any) -> None:
        """Apply a targeted cache update, then announce it."""
        self.cache.update(device_id, fields)
        self.sink.emit(PropertyChanged(device_id, prop, value))

    def report_error(self, device_id: str, action: str, cause: Any) -> str:
        """
        Emit an ApiError event.

        Returns:
            The formatted error text.
        """
        error = format_api_error(action, cause)
        self.sink.emit(ApiError(device_id, error))
        return error
