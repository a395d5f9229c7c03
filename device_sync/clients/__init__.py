"""
Protocol client resolution module.

Derives device endpoints and resolves category-specific clients for them.
"""
from .address import resolve_device_index, resolve_endpoint
from .capabilities import (
    ClientFactory,
    DomeCapability,
    ObservingConditionsCapability,
    SwitchCapability,
)
from .resolver import ClientResolver

__all__ = [
    "resolve_device_index",
    "resolve_endpoint",
    "ClientFactory",
    "DomeCapability",
    "ObservingConditionsCapability",
    "SwitchCapability",
    "ClientResolver",
]
