"""Data models for earbud beacons and merged device state."""

from .battery import BatteryInfo, BatteryStatus, case_nibble_to_percent, nibble_to_percent
from .enums import (
    BroadcastSide,
    DeviceColor,
    DeviceModel,
    EarDetectionState,
    PodStatus,
    color_from_code,
    ear_state_from_flags,
    get_model_name,
    is_airpods,
    model_from_id,
)
from .events import (
    DeviceStateChanged,
    EarbudsInserted,
    EarbudsRemoved,
    EarDetectionChanged,
    EarDetectionTransition,
    LidOpened,
    TrackerEvent,
)
from .observation import Observation
from .state import DeviceState

__all__ = [
    "BatteryInfo",
    "BatteryStatus",
    "BroadcastSide",
    "DeviceColor",
    "DeviceModel",
    "DeviceState",
    "DeviceStateChanged",
    "EarDetectionChanged",
    "EarDetectionState",
    "EarDetectionTransition",
    "EarbudsInserted",
    "EarbudsRemoved",
    "LidOpened",
    "Observation",
    "PodStatus",
    "TrackerEvent",
    "case_nibble_to_percent",
    "color_from_code",
    "ear_state_from_flags",
    "get_model_name",
    "is_airpods",
    "model_from_id",
    "nibble_to_percent",
]
