"""
Endpoint derivation from device connection fields.
"""
from typing import Optional

from ..devices.models import DeviceRecord


def resolve_endpoint(record: DeviceRecord) -> Optional[str]:
    """
    Derive the protocol endpoint for a device.

    Precedence, first match wins:
    1. explicit_base_url, with one trailing "/" removed
    2. http://{host_address}:{port}
    3. http://{host_ip}:{port}

    Args:
        record: Device record.

    Returns:
        Endpoint string, or None if no endpoint can be derived.
    """
    if record.explicit_base_url and isinstance(record.explicit_base_url, str):
        base_url = record.explicit_base_url
        if base_url.endswith("/"):
            base_url = base_url[:-1]
        return base_url

    if record.host_address and record.port:
        return f"http://{record.host_address}:{record.port}"

    if record.host_ip and record.port:
        return f"http://{record.host_ip}:{record.port}"

    return None


def resolve_device_index(record: DeviceRecord) -> int:
    """Device index on the endpoint; 0 unless the record holds an integer."""
    index = record.device_index
    if isinstance(index, int) and not isinstance(index, bool):
        return index
    return 0
