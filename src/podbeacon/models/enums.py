from __future__ import annotations

from enum import Enum, IntEnum, IntFlag
from typing import Final


class BroadcastSide(IntEnum):
    """Earbud that originated an advertisement."""
    LEFT = 0
    RIGHT = 1

    @property
    def other(self) -> BroadcastSide:
        return BroadcastSide.RIGHT if self is BroadcastSide.LEFT else BroadcastSide.LEFT


class DeviceModel(IntEnum):
    """Model identifiers as read (little-endian) from the beacon record.

    Beats products share the same protocol. UNKNOWN is the sentinel for
    identifiers that are not in this table.
    """
    UNKNOWN = 0x0000

    AIRPODS_1 = 0x0220
    AIRPODS_2 = 0x0F20
    AIRPODS_3 = 0x1320
    AIRPODS_4 = 0x1720

    AIRPODS_PRO = 0x0E20
    AIRPODS_PRO_2 = 0x1420
    AIRPODS_PRO_2_USBC = 0x1520
    AIRPODS_PRO_2_2024 = 0x2024
    AIRPODS_PRO_2_VARIANT = 0x1920

    AIRPODS_MAX = 0x0A20

    POWERBEATS_PRO = 0x0B20
    POWERBEATS_PRO_2 = 0x1120
    BEATS_FIT_PRO = 0x1220
    BEATS_STUDIO_BUDS = 0x1020
    BEATS_STUDIO_PRO = 0x1820
    BEATS_SOLO_3 = 0x0620
    BEATS_SOLO_PRO = 0x0C20
    BEATS_X = 0x0520


class DeviceColor(IntEnum):
    """Housing color codes."""
    WHITE = 0x00
    BLACK = 0x01
    RED = 0x02
    BLUE = 0x03
    PINK = 0x04
    GRAY = 0x05
    SILVER = 0x06
    GOLD = 0x07
    ROSE_GOLD = 0x08
    SPACE_GRAY = 0x09
    DARK_CHERRY = 0x0A
    GREEN = 0x0B


class PodStatus(IntFlag):
    """Per-earbud position flags derived from the status sub-fields."""
    NONE = 0x00
    LEFT_IN_EAR = 0x01
    RIGHT_IN_EAR = 0x02
    BOTH_IN_EAR = 0x03
    LEFT_IN_CASE = 0x10
    RIGHT_IN_CASE = 0x20
    BOTH_IN_CASE = 0x30


class EarDetectionState(Enum):
    """Coarse ear position category used for debouncing."""
    BOTH_IN_CASE = "both_in_case"
    LEFT_IN_EAR = "left_in_ear"
    RIGHT_IN_EAR = "right_in_ear"
    BOTH_IN_EAR = "both_in_ear"
    ONE_OR_BOTH_OUT = "one_or_both_out"

    @property
    def is_any_in_ear(self) -> bool:
        return self in _IN_EAR_STATES

    @property
    def description(self) -> str:
        return _EAR_STATE_DESCRIPTIONS[self]


_IN_EAR_STATES: Final[frozenset[EarDetectionState]] = frozenset({
    EarDetectionState.LEFT_IN_EAR,
    EarDetectionState.RIGHT_IN_EAR,
    EarDetectionState.BOTH_IN_EAR,
})

_EAR_STATE_DESCRIPTIONS: Final[dict[EarDetectionState, str]] = {
    EarDetectionState.BOTH_IN_CASE: "Both in case",
    EarDetectionState.LEFT_IN_EAR: "Left in ear",
    EarDetectionState.RIGHT_IN_EAR: "Right in ear",
    EarDetectionState.BOTH_IN_EAR: "Both in ear",
    EarDetectionState.ONE_OR_BOTH_OUT: "One or both out",
}

MODEL_NAMES: Final[dict[DeviceModel, str]] = {
    DeviceModel.AIRPODS_1: "AirPods (1st Generation)",
    DeviceModel.AIRPODS_2: "AirPods (2nd Generation)",
    DeviceModel.AIRPODS_3: "AirPods (3rd Generation)",
    DeviceModel.AIRPODS_4: "AirPods (4th Generation)",
    DeviceModel.AIRPODS_PRO: "AirPods Pro",
    DeviceModel.AIRPODS_PRO_2: "AirPods Pro (2nd Generation)",
    DeviceModel.AIRPODS_PRO_2_USBC: "AirPods Pro (2nd Generation, USB-C)",
    DeviceModel.AIRPODS_PRO_2_2024: "AirPods Pro (2nd Generation, USB-C)",
    DeviceModel.AIRPODS_PRO_2_VARIANT: "AirPods Pro (2nd Generation)",
    DeviceModel.AIRPODS_MAX: "AirPods Max",
    DeviceModel.POWERBEATS_PRO: "Powerbeats Pro",
    DeviceModel.POWERBEATS_PRO_2: "Powerbeats Pro 2",
    DeviceModel.BEATS_FIT_PRO: "Beats Fit Pro",
    DeviceModel.BEATS_STUDIO_BUDS: "Beats Studio Buds",
    DeviceModel.BEATS_STUDIO_PRO: "Beats Studio Pro",
    DeviceModel.BEATS_SOLO_3: "Beats Solo3",
    DeviceModel.BEATS_SOLO_PRO: "Beats Solo Pro",
    DeviceModel.BEATS_X: "BeatsX",
}

_AIRPODS_MODELS: Final[frozenset[DeviceModel]] = frozenset({
    DeviceModel.AIRPODS_1,
    DeviceModel.AIRPODS_2,
    DeviceModel.AIRPODS_3,
    DeviceModel.AIRPODS_4,
    DeviceModel.AIRPODS_PRO,
    DeviceModel.AIRPODS_PRO_2,
    DeviceModel.AIRPODS_PRO_2_USBC,
    DeviceModel.AIRPODS_PRO_2_2024,
    DeviceModel.AIRPODS_PRO_2_VARIANT,
    DeviceModel.AIRPODS_MAX,
})


def model_from_id(model_id: int) -> DeviceModel:
    """Look up a model by exact identifier, UNKNOWN when not in the table."""
    try:
        return DeviceModel(model_id)
    except ValueError:
        return DeviceModel.UNKNOWN


def get_model_name(model: DeviceModel | int) -> str:
    """Get human-readable product name for a model."""
    return MODEL_NAMES.get(model_from_id(int(model)), "Unknown Device")


def is_airpods(model: DeviceModel) -> bool:
    """True for AirPods products, False for Beats and unknown models."""
    return model in _AIRPODS_MODELS


def color_from_code(code: int) -> DeviceColor | int:
    """Map a color byte to DeviceColor, keeping unlisted codes as raw ints."""
    try:
        return DeviceColor(code)
    except ValueError:
        return code


def ear_state_from_flags(pod_status: PodStatus) -> EarDetectionState:
    """Derive the ear detection category from per-earbud position flags."""
    left_in_ear = bool(pod_status & PodStatus.LEFT_IN_EAR)
    right_in_ear = bool(pod_status & PodStatus.RIGHT_IN_EAR)

    if left_in_ear and right_in_ear:
        return EarDetectionState.BOTH_IN_EAR
    if left_in_ear:
        return EarDetectionState.LEFT_IN_EAR
    if right_in_ear:
        return EarDetectionState.RIGHT_IN_EAR
    if (pod_status & PodStatus.BOTH_IN_CASE) == PodStatus.BOTH_IN_CASE:
        return EarDetectionState.BOTH_IN_CASE
    return EarDetectionState.ONE_OR_BOTH_OUT
