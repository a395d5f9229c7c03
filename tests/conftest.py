"""
Shared pytest fixtures for device sync tests.

Provides fixtures for:
- Device cache and recording event sink
- Fake protocol clients per category
- Resolvers and action sets wired to the fakes
- Virtual clock scheduler
"""
import pytest

from device_sync.actions.dome import DomeActions
from device_sync.actions.executor import ActionExecutor
from device_sync.actions.observing_conditions import ObservingConditionsActions
from device_sync.actions.switch import SwitchActions
from device_sync.clients.resolver import ClientResolver
from device_sync.config import DeviceSyncSettings, PollingSettings
from device_sync.devices.cache import InMemoryDeviceCache
from device_sync.devices.models import DeviceCategory

from tests.factories import (
    DomeRecordFactory,
    ObservingConditionsRecordFactory,
    SwitchDetailFactory,
    SwitchRecordFactory,
)
from tests.simulators import (
    FakeDomeClient,
    FakeObservingConditionsClient,
    FakeSwitchClient,
    RecordingSink,
    VirtualScheduler,
)


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def cache():
    """Empty in-memory device cache."""
    return InMemoryDeviceCache()


@pytest.fixture
def sink(cache):
    """Event sink recording events and the cache state at emission."""
    return RecordingSink(cache)


@pytest.fixture
def executor(cache, sink):
    return ActionExecutor(cache, sink)


@pytest.fixture
def scheduler():
    """Virtual clock scheduler."""
    return VirtualScheduler()


@pytest.fixture
def settings():
    """Settings with fixed polling intervals."""
    return DeviceSyncSettings(
        polling=PollingSettings(
            dome_interval_ms=5000,
            observing_conditions_interval_ms=5000,
            switch_interval_ms=3000,
            min_interval_ms=100,
        ),
    )


# ============================================================================
# Dome Fixtures
# ============================================================================

@pytest.fixture
def dome_record(cache):
    """Connected dome registered in the cache."""
    record = DomeRecordFactory(id="dome-1")
    cache.add(record)
    return record


@pytest.fixture
def dome_client():
    return FakeDomeClient()


@pytest.fixture
def dome_resolver(cache, dome_client):
    return ClientResolver(cache, DeviceCategory.DOME, lambda endpoint, index, record: dome_client)


@pytest.fixture
def dome_actions(dome_resolver, executor):
    return DomeActions(dome_resolver, executor)


# ============================================================================
# Switch Fixtures
# ============================================================================

@pytest.fixture
def switch_record(cache):
    """Connected switch bank registered in the cache."""
    record = SwitchRecordFactory(id="switch-1")
    cache.add(record)
    return record


@pytest.fixture
def switch_client():
    """Switch bank with two relays and one dimmer."""
    return FakeSwitchClient([
        SwitchDetailFactory(name="Heater", value=False),
        SwitchDetailFactory(name="Fan", value=True),
        SwitchDetailFactory(name="Dew strap", value=0.5, min=0.0, max=1.0, step=0.1),
    ])


@pytest.fixture
def switch_resolver(cache, switch_client):
    return ClientResolver(
        cache, DeviceCategory.SWITCH, lambda endpoint, index, record: switch_client
    )


@pytest.fixture
def switch_actions(switch_resolver, executor):
    return SwitchActions(switch_resolver, executor)


# ============================================================================
# Observing Conditions Fixtures
# ============================================================================

@pytest.fixture
def oc_record(cache):
    """Connected observing conditions sensor registered in the cache."""
    record = ObservingConditionsRecordFactory(id="oc-1")
    cache.add(record)
    return record


@pytest.fixture
def oc_client():
    return FakeObservingConditionsClient()


@pytest.fixture
def oc_resolver(cache, oc_client):
    return ClientResolver(
        cache, DeviceCategory.OBSERVING_CONDITIONS, lambda endpoint, index, record: oc_client
    )


@pytest.fixture
def oc_actions(oc_resolver, executor):
    return ObservingConditionsActions(oc_resolver, executor)
