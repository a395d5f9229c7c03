"""
Device-related test data factories.
"""
import factory

from device_sync.devices.models import DeviceCategory, DeviceRecord, SwitchDetail


class DeviceRecordFactory(factory.Factory):
    """
    Factory for creating connected device records.

    Usage:
        record = DeviceRecordFactory()
        record = DeviceRecordFactory(connected=False, port=None)
        records = DeviceRecordFactory.build_batch(5)
    """

    class Meta:
        model = DeviceRecord

    id = factory.Sequence(lambda n: f"device-{n}")
    category = DeviceCategory.DOME
    name = factory.LazyAttribute(lambda o: f"{o.category.value} {o.id}")
    host_address = "127.0.0.1"
    port = factory.Sequence(lambda n: 11111 + n)
    device_index = 0
    connected = True
    properties = factory.LazyFunction(dict)


class DomeRecordFactory(DeviceRecordFactory):
    """Factory for dome device records."""

    id = factory.Sequence(lambda n: f"dome-{n}")
    category = DeviceCategory.DOME


class SwitchRecordFactory(DeviceRecordFactory):
    """Factory for switch bank device records."""

    id = factory.Sequence(lambda n: f"switch-{n}")
    category = DeviceCategory.SWITCH


class ObservingConditionsRecordFactory(DeviceRecordFactory):
    """Factory for observing conditions device records."""

    id = factory.Sequence(lambda n: f"oc-{n}")
    category = DeviceCategory.OBSERVING_CONDITIONS


class SwitchDetailFactory(factory.Factory):
    """
    Factory for boolean switch details.

    Usage:
        detail = SwitchDetailFactory(value=True)
        dimmer = SwitchDetailFactory(value=0.5, min=0.0, max=1.0, step=0.1)
    """

    class Meta:
        model = SwitchDetail

    name = factory.Sequence(lambda n: f"Output {n}")
    description = factory.LazyAttribute(lambda o: f"{o.name} power")
    value = False
    writable = True
