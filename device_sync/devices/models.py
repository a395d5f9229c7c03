"""
Device records held by the device cache.

Records are immutable snapshots; the sync layer reads them and asks the
cache to replace fields, it never mutates a record in place.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union


class DeviceCategory(str, Enum):
    """Kind of hardware a device record describes."""
    DOME = "dome"
    OBSERVING_CONDITIONS = "observingconditions"
    SWITCH = "switch"


SwitchValue = Union[bool, float]


@dataclass(frozen=True)
class SwitchDetail:
    """One switch within a switch bank, identified by its index."""
    name: str
    description: str
    value: SwitchValue
    writable: bool = True
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None

    @classmethod
    def placeholder(cls, index: int) -> "SwitchDetail":
        """Stand-in for a switch whose details could not be loaded."""
        return cls(
            name=f"Switch {index} (Error)",
            description="Could not load details for this switch.",
            value=False,
            writable=False,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "value": self.value,
            "writable": self.writable,
            "min": self.min,
            "max": self.max,
            "step": self.step,
        }


@dataclass(frozen=True)
class DeviceRecord:
    """
    Stored state for one remote device.

    Connection fields are used to derive the protocol endpoint; cached
    category fields hold the last-known-good values fetched from the device.
    """
    # Identity
    id: str
    category: DeviceCategory
    name: Optional[str] = None

    # Connection
    explicit_base_url: Optional[str] = None
    host_address: Optional[str] = None
    host_ip: Optional[str] = None
    port: Optional[int] = None
    device_index: Optional[int] = None
    connected: bool = False

    # Free-form properties (may contain pollIntervalMs)
    properties: Dict[str, Any] = field(default_factory=dict)

    # Dome cache
    dome_status: Optional[Dict[str, Any]] = None
    dome_slaved: Optional[bool] = None

    # Observing conditions cache
    conditions: Optional[Dict[str, Any]] = None

    # Switch cache
    max_switch: Optional[int] = None
    switches: Optional[List[SwitchDetail]] = None

    @classmethod
    def cached_fields(cls) -> FrozenSet[str]:
        """Names of fields that may be replaced through the device cache."""
        return frozenset(f.name for f in fields(cls) if f.name != "id")

    def __repr__(self) -> str:
        return (
            f"DeviceRecord("
            f"id={self.id}, "
            f"category={getattr(self.category, 'value', self.category)}, "
            f"connected={self.connected})"
        )
