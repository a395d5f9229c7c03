"""
Structured device events.

Events are emitted after the cache has been updated and are consumed by
downstream UI through an event sink.
"""
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Tuple, Union


def format_api_error(action: str, cause: Any) -> str:
    """Render the error text carried by an ApiError event."""
    return f"Failed to {action}: {cause}"


@dataclass(frozen=True)
class PropertyChanged:
    """A cached device property has a new value."""
    type: ClassVar[str] = "devicePropertyChanged"

    device_id: str
    property: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "deviceId": self.device_id,
            "property": self.property,
            "value": self.value,
        }


@dataclass(frozen=True)
class MethodCalled:
    """A remote command completed."""
    type: ClassVar[str] = "deviceMethodCalled"

    device_id: str
    method: str
    args: Tuple[Any, ...] = field(default_factory=tuple)
    result: Any = "success"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "deviceId": self.device_id,
            "method": self.method,
            "args": list(self.args),
            "result": self.result,
        }


@dataclass(frozen=True)
class ApiError:
    """A remote call failed."""
    type: ClassVar[str] = "deviceApiError"

    device_id: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "deviceId": self.device_id,
            "error": self.error,
        }


DeviceEvent = Union[PropertyChanged, MethodCalled, ApiError]
