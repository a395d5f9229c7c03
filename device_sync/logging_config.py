"""
Logging setup for processes embedding the device sync layer.
"""
import logging
import sys
from typing import Optional

from .config import DeviceSyncSettings, get_device_sync_settings


def configure_logging(settings: Optional[DeviceSyncSettings] = None) -> None:
    """
    Configure the root logger from settings.

    Args:
        settings: Settings providing log level and format.
    """
    settings = settings or get_device_sync_settings()
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )

    logging.basicConfig(
        level=level,
        format=settings.log_format,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )
