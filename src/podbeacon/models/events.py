"""Events emitted by the device tracker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .enums import EarDetectionState
from .state import DeviceState


@dataclass(frozen=True, slots=True)
class EarDetectionTransition:
    """Committed change of ear detection category."""

    old_state: EarDetectionState
    new_state: EarDetectionState
    timestamp: float

    @property
    def was_in_ear(self) -> bool:
        return self.old_state.is_any_in_ear

    @property
    def is_in_ear(self) -> bool:
        return self.new_state.is_any_in_ear


@dataclass(frozen=True, slots=True)
class DeviceStateChanged:
    """Merged state differs materially from the last emitted one."""

    state: DeviceState


@dataclass(frozen=True, slots=True)
class LidOpened:
    """Lid open counter changed."""

    lid_open_count: int
    timestamp: float


@dataclass(frozen=True, slots=True)
class EarbudsInserted:
    """No earbud was in ear, now at least one is."""

    transition: EarDetectionTransition


@dataclass(frozen=True, slots=True)
class EarbudsRemoved:
    """At least one earbud was in ear, now none is."""

    transition: EarDetectionTransition


@dataclass(frozen=True, slots=True)
class EarDetectionChanged:
    """Any committed ear detection change."""

    transition: EarDetectionTransition


TrackerEvent: TypeAlias = (
    DeviceStateChanged | LidOpened | EarbudsInserted | EarbudsRemoved | EarDetectionChanged
)
