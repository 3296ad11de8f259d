"""Merge left and right observations into one device state."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..models.battery import BatteryInfo, BatteryStatus
from ..models.enums import PodStatus
from ..models.observation import Observation
from ..models.state import DeviceState
from .validation import SideTracker

_LOGGER = logging.getLogger(__name__)

POSITION_MASK = 0x7F
POSITION_IN_EAR = 0x03
POSITION_IN_CASE = 0x05


def _newest(*observations: Observation | None) -> Observation | None:
    """Most recent observation; on equal timestamps the earlier argument wins."""
    newest = None
    for observation in observations:
        if observation is None:
            continue
        if newest is None or observation.arrived_at > newest.arrived_at:
            newest = observation
    return newest


def _freshest_percentage(
    channel: str, left: Observation | None, right: Observation | None
) -> int | None:
    """Percentage from the most recent observation that reports the channel."""
    candidates = [o for o in (left, right) if o is not None and getattr(o, channel) is not None]
    newest = _newest(*candidates)
    return getattr(newest, channel) if newest is not None else None


def _either(flag: str, left: Observation | None, right: Observation | None) -> bool:
    return any(getattr(o, flag) for o in (left, right) if o is not None)


def _position_fields(status: int) -> tuple[int, int]:
    """Split a status byte into (left, right) position sub-fields."""
    masked = status & POSITION_MASK
    return masked & 0x0F, (masked >> 4) & 0x07


def position_status(left: Observation | None, right: Observation | None) -> tuple[int, PodStatus]:
    """Combine the position sub-fields reported by both earbuds.

    The left sub-field comes from the left-broadcast observation and the
    right sub-field from the right-broadcast one. A side that has not been
    seen leaves its sub-field at 0, which reads as neither in ear nor in case.

    Returns:
        (combined status byte, position flags)
    """
    left_field = _position_fields(left.status)[0] if left is not None else 0
    right_field = _position_fields(right.status)[1] if right is not None else 0

    flags = PodStatus.NONE
    if left_field == POSITION_IN_EAR:
        flags |= PodStatus.LEFT_IN_EAR
    elif left_field == POSITION_IN_CASE:
        flags |= PodStatus.LEFT_IN_CASE
    if right_field == POSITION_IN_EAR:
        flags |= PodStatus.RIGHT_IN_EAR
    elif right_field == POSITION_IN_CASE:
        flags |= PodStatus.RIGHT_IN_CASE

    return (right_field << 4) | left_field, flags


def merge(left: Observation | None, right: Observation | None) -> DeviceState | None:
    """Build a device state from the latest left and right observations.

    The most recent observation supplies model, color, lid counter, RSSI,
    address and timestamp. Battery percentages are taken per channel from
    whichever observation reported that channel most recently, and charging
    flags are OR-combined across both sides.

    Returns:
        Merged state, or None if neither side has been seen
    """
    base = _newest(left, right)
    if base is None:
        return None

    status_byte, pod_status = position_status(left, right)

    battery = BatteryStatus(
        left=BatteryInfo(
            _freshest_percentage("left_battery", left, right),
            _either("left_charging", left, right),
        ),
        right=BatteryInfo(
            _freshest_percentage("right_battery", left, right),
            _either("right_charging", left, right),
        ),
        case=BatteryInfo(
            _freshest_percentage("case_battery", left, right),
            _either("case_charging", left, right),
        ),
    )

    return DeviceState(
        model=base.model,
        model_id=base.model_id,
        color=base.color,
        battery=battery,
        lid_open_count=base.lid_open_count,
        rssi=base.rssi,
        status_byte=status_byte,
        pod_status=pod_status,
        last_update=base.arrived_at,
        address=base.address,
    )


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of folding one observation into the reconciler.

    Attributes:
        accepted: Observation passed validation and replaced its side's slot
        state: Latest merged state (None only if nothing was ever accepted)
        changed: State differs materially from the last emitted state
        lid_opened: Lid counter changed since the last accepted observation
    """

    accepted: bool
    state: DeviceState | None = None
    changed: bool = False
    lid_opened: bool = False


class StateReconciler:
    """Owns the side slots and the merged device state for one pairing.

    Not thread-safe; the caller serializes ``update`` calls.
    """

    def __init__(self, side_tracker: SideTracker | None = None) -> None:
        self._sides = side_tracker if side_tracker is not None else SideTracker()
        self._last_lid_count: int | None = None
        self._state: DeviceState | None = None
        self._emitted: DeviceState | None = None

    @property
    def sides(self) -> SideTracker:
        return self._sides

    @property
    def state(self) -> DeviceState | None:
        """Latest merged state, including updates that were not emitted."""
        return self._state

    @property
    def emitted_state(self) -> DeviceState | None:
        """Last state reported as changed."""
        return self._emitted

    def update(self, observation: Observation) -> ReconcileResult:
        """Validate, store and merge one observation."""
        if not self._sides.accept(observation.side, observation):
            return ReconcileResult(accepted=False, state=self._state)

        lid_opened = self._check_lid(observation.lid_open_count)

        state = merge(self._sides.left, self._sides.right)
        self._state = state

        changed = state is not None and (
            self._emitted is None or not self._emitted.materially_equals(state)
        )
        if changed:
            self._emitted = state

        return ReconcileResult(accepted=True, state=state, changed=changed, lid_opened=lid_opened)

    def _check_lid(self, lid_open_count: int) -> bool:
        # Any difference counts, so 255 -> 0 is a change
        previous = self._last_lid_count
        self._last_lid_count = lid_open_count
        if previous is not None and lid_open_count != previous:
            _LOGGER.debug("Lid counter %d -> %d", previous, lid_open_count)
            return True
        return False

    def reset(self) -> None:
        self._sides.clear()
        self._last_lid_count = None
        self._state = None
        self._emitted = None
