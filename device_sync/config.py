"""
Configuration for the device sync layer.

Provides settings for polling intervals, client caching and logging.
"""
from functools import lru_cache
from typing import Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .devices.models import DeviceCategory


class PollingSettings(BaseSettings):
    """Property polling configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DEVICE_SYNC_POLLING_",
        env_file=".env",
        extra="ignore",
    )

    dome_interval_ms: int = Field(default=5000, description="Default dome poll interval (ms)")
    observing_conditions_interval_ms: int = Field(
        default=5000, description="Default observing conditions poll interval (ms)"
    )
    switch_interval_ms: int = Field(default=3000, description="Default switch poll interval (ms)")
    min_interval_ms: int = Field(default=100, description="Smallest accepted per-device interval (ms)")


class ClientSettings(BaseSettings):
    """Protocol client resolution configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DEVICE_SYNC_CLIENT_",
        env_file=".env",
        extra="ignore",
    )

    cache_clients: bool = Field(default=True, description="Reuse clients per device id")


class DeviceSyncSettings(BaseSettings):
    """Main configuration for the device sync layer."""

    model_config = SettingsConfigDict(
        env_prefix="DEVICE_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Observatory Device Sync")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Sub-settings
    polling: PollingSettings = Field(default_factory=PollingSettings)
    clients: ClientSettings = Field(default_factory=ClientSettings)

    def default_interval_ms(self, category: Union[DeviceCategory, str]) -> int:
        """
        Get the default poll interval for a device category.

        Args:
            category: Device category.

        Returns:
            Interval in milliseconds.
        """
        intervals = {
            DeviceCategory.DOME: self.polling.dome_interval_ms,
            DeviceCategory.OBSERVING_CONDITIONS: self.polling.observing_conditions_interval_ms,
            DeviceCategory.SWITCH: self.polling.switch_interval_ms,
        }
        return intervals.get(category, self.polling.dome_interval_ms)


@lru_cache()
def get_device_sync_settings() -> DeviceSyncSettings:
    """
    Get cached device sync settings.

    Uses LRU cache to avoid re-reading environment variables on every access.
    """
    return DeviceSyncSettings()
