"""
Device actions module.

Uniform execution of remote queries and commands, plus the action sets for
each device category.
"""
from .executor import (
    ActionExecutor,
    CommandOutcome,
    CommandSpec,
    QuerySpec,
    RefreshPolicy,
)
from .base import DeviceActions
from .dome import DomeActions
from .observing_conditions import ObservingConditionsActions
from .switch import SwitchActions

__all__ = [
    "ActionExecutor",
    "CommandOutcome",
    "CommandSpec",
    "QuerySpec",
    "RefreshPolicy",
    "DeviceActions",
    "DomeActions",
    "ObservingConditionsActions",
    "SwitchActions",
]
