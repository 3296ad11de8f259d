"""Merged device state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .battery import BatteryStatus
from .enums import (
    DeviceColor,
    DeviceModel,
    EarDetectionState,
    PodStatus,
    ear_state_from_flags,
    get_model_name,
)


@dataclass(frozen=True, slots=True)
class DeviceState:
    """Application-visible snapshot of one earbud pairing.

    Built by the reconciler from the left and right observations. A new
    instance replaces the old one on every accepted change.
    """

    model: DeviceModel
    model_id: int
    color: DeviceColor | int
    battery: BatteryStatus = field(default_factory=BatteryStatus)
    lid_open_count: int = 0
    rssi: int = -100
    status_byte: int = 0
    pod_status: PodStatus = PodStatus.NONE
    last_update: float = 0.0
    address: int | None = None

    @property
    def model_name(self) -> str:
        return get_model_name(self.model)

    @property
    def ear_detection(self) -> EarDetectionState:
        return ear_state_from_flags(self.pod_status)

    def is_connected(self, now: float, liveness_window: float = 60.0) -> bool:
        """True if the last update is within the liveness window."""
        return now - self.last_update < liveness_window

    def materially_equals(self, other: DeviceState) -> bool:
        """Compare the fields that decide whether observers are notified.

        Timestamps, addresses and position flags are not compared.
        """
        return (
            self.model == other.model
            and self.rssi == other.rssi
            and self.lid_open_count == other.lid_open_count
            and self.battery == other.battery
        )

    def __str__(self) -> str:
        return f"{self.model_name} | {self.battery} | RSSI: {self.rssi} dBm"
