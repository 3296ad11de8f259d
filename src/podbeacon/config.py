"""Tracker configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ConfigError
from .protocol.constants import APPLE_COMPANY_ID


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ConfigError(f"{name} must be positive: {value}")


@dataclass(frozen=True, slots=True)
class TrackerConfig:
    """Tunables for one tracked earbud pairing.

    Attributes:
        company_id: Manufacturer ID to accept (Apple, 0x004C)
        max_battery_delta: Largest plausible jump in any battery percentage
            between two accepted observations from the same side
        max_rssi_delta: Largest plausible RSSI jump in dBm
        liveness_window: Seconds without an update before the device is
            considered disconnected
        debounce_threshold: Seconds a new ear position must hold before it
            is committed
        debounce_interval: Period of the debounce check in seconds
        min_rssi: Optional signal floor; weaker beacons are ignored
    """

    company_id: int = APPLE_COMPANY_ID
    max_battery_delta: int = 10
    max_rssi_delta: int = 50
    liveness_window: float = 60.0
    debounce_threshold: float = 0.5
    debounce_interval: float = 0.1
    min_rssi: int | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.company_id <= 0xFFFF:
            raise ConfigError(
                f"company_id out of range: {self.company_id} (must be 0-65535)"
            )
        if not 0 <= self.max_battery_delta <= 100:
            raise ConfigError(
                f"max_battery_delta out of range: {self.max_battery_delta} (must be 0-100)"
            )
        if self.max_rssi_delta < 0:
            raise ConfigError(f"max_rssi_delta must not be negative: {self.max_rssi_delta}")
        _check_positive("liveness_window", self.liveness_window)
        _check_positive("debounce_threshold", self.debounce_threshold)
        _check_positive("debounce_interval", self.debounce_interval)
        if self.debounce_interval > self.debounce_threshold:
            raise ConfigError(
                "debounce_interval must not exceed debounce_threshold "
                f"({self.debounce_interval} > {self.debounce_threshold})"
            )
