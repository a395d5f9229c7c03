"""
Exceptions raised inside the device sync layer.

Resolution errors never reach callers of actions or poll ticks; they are
logged and turned into silent no-ops. Remote call errors become ApiError
events.
"""
from typing import Any, Optional


class DeviceSyncError(Exception):
    """Base exception for the device sync layer."""

    def __init__(self, message: str, device_id: Optional[str] = None):
        self.message = message
        self.device_id = device_id
        super().__init__(message)


class ResolutionError(DeviceSyncError):
    """A protocol client could not be resolved for a device."""


class DeviceNotFoundError(ResolutionError):
    """Raised when the device record does not exist."""

    def __init__(self, device_id: str):
        super().__init__(f"Device {device_id} not found", device_id)


class CategoryMismatchError(ResolutionError):
    """Raised when the device record has a different category than expected."""

    def __init__(self, device_id: str, expected: Any, actual: Any):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Device {device_id} is a {actual!s} device, expected {expected!s}",
            device_id,
        )


class IncompleteAddressError(ResolutionError):
    """Raised when no endpoint can be derived from the address fields."""

    def __init__(self, device_id: str):
        super().__init__(f"Device {device_id} has incomplete address details", device_id)


class RemoteCallError(DeviceSyncError):
    """
    A remote operation failed.

    Intended for protocol client implementations; str() renders only the
    cause so that ApiError messages read "Failed to <action>: <cause>".
    """

    def __init__(
        self,
        action: str,
        cause: Any,
        device_id: Optional[str] = None,
    ):
        self.action = action
        self.cause = cause
        super().__init__(str(cause), device_id)


class MaxSwitchUnavailable(RemoteCallError):
    """Raised when a switch bank does not report a usable switch count."""

    def __init__(self, reported: Any, device_id: Optional[str] = None):
        self.reported = reported
        super().__init__(
            "max_switch",
            f"could not determine maxSwitch (got {reported!r})",
            device_id,
        )
