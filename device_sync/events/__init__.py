"""
Device events module.

Structured events emitted by the sync layer and the sink that delivers them.
"""
from .types import ApiError, DeviceEvent, MethodCalled, PropertyChanged, format_api_error
from .bus import EventBus, EventListener, EventSink

__all__ = [
    "ApiError",
    "DeviceEvent",
    "MethodCalled",
    "PropertyChanged",
    "format_api_error",
    "EventBus",
    "EventListener",
    "EventSink",
]
