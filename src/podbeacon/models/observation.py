"""Decoded proximity pairing advertisement."""

from __future__ import annotations

from dataclasses import dataclass

from .battery import BatteryInfo, BatteryStatus
from .enums import BroadcastSide, DeviceColor, DeviceModel, get_model_name

BROADCAST_SIDE_BIT = 0x80


@dataclass(frozen=True, slots=True)
class Observation:
    """One decoded beacon from one earbud.

    The raw status, battery and charging bytes are kept alongside the
    decoded fields; the reconciler reads position sub-fields from
    ``status`` directly.

    Attributes:
        side: Earbud that broadcast this beacon (bit 7 of ``status``)
        model_id: Raw 16-bit model identifier
        model: Table lookup of ``model_id`` (UNKNOWN if not listed)
        status: Raw status byte, including the broadcast-side bit
        battery_byte: Raw battery nibbles (low = broadcasting pod, high = other pod)
        charging_byte: Raw charging flags (bits 0-2) and case nibble (bits 4-7)
        left_battery: Left earbud percentage, None if unavailable
        right_battery: Right earbud percentage, None if unavailable
        case_battery: Case percentage, None if unavailable
        left_charging: Left charging flag
        right_charging: Right charging flag
        case_charging: Case charging flag
        lid_open_count: Lid open counter (uint8, wraps)
        color: Housing color, raw int if the code is not listed
        rssi: Signal strength in dBm
        address: Source address as a 48-bit integer (rotates)
        arrived_at: Arrival time in seconds
    """

    side: BroadcastSide
    model_id: int
    model: DeviceModel
    status: int
    battery_byte: int
    charging_byte: int
    left_battery: int | None
    right_battery: int | None
    case_battery: int | None
    left_charging: bool
    right_charging: bool
    case_charging: bool
    lid_open_count: int
    color: DeviceColor | int
    rssi: int
    address: int
    arrived_at: float

    @property
    def is_left_broadcast(self) -> bool:
        return self.side is BroadcastSide.LEFT

    @property
    def model_name(self) -> str:
        return get_model_name(self.model)

    @property
    def battery(self) -> BatteryStatus:
        return BatteryStatus(
            left=BatteryInfo(self.left_battery, self.left_charging),
            right=BatteryInfo(self.right_battery, self.right_charging),
            case=BatteryInfo(self.case_battery, self.case_charging),
        )
