"""Per-side plausibility validation.

Earbud addresses rotate, so the address cannot tie two beacons to the same
device. Instead each new beacon is compared with the last accepted beacon
from the same side: the model must match and battery/RSSI may only drift
within bounds. This rejects a different pair of the same model nearby while
tolerating normal jitter.
"""

from __future__ import annotations

import logging

from ..models.enums import BroadcastSide
from ..models.observation import Observation

_LOGGER = logging.getLogger(__name__)


def _within(new: int | None, old: int | None, limit: int) -> bool:
    if new is None or old is None:
        return True
    return abs(new - old) <= limit


def is_plausible(
    new: Observation,
    previous: Observation | None,
    *,
    max_battery_delta: int = 10,
    max_rssi_delta: int = 50,
) -> bool:
    """Check a new observation against the last accepted one for its side.

    Rules, in order:
    1. No previous observation: accept.
    2. Model ID must equal the previous model ID.
    3. Each battery percentage available in both may differ by at most
       ``max_battery_delta``.
    4. RSSI may differ by at most ``max_rssi_delta`` dBm.
    """
    if previous is None:
        return True

    if new.model_id != previous.model_id:
        _LOGGER.debug(
            "Rejected %s beacon: model 0x%04X != 0x%04X",
            new.side.name, new.model_id, previous.model_id,
        )
        return False

    for channel in ("left_battery", "right_battery", "case_battery"):
        if not _within(getattr(new, channel), getattr(previous, channel), max_battery_delta):
            _LOGGER.debug(
                "Rejected %s beacon: %s jumped %s -> %s",
                new.side.name, channel, getattr(previous, channel), getattr(new, channel),
            )
            return False

    if abs(new.rssi - previous.rssi) > max_rssi_delta:
        _LOGGER.debug(
            "Rejected %s beacon: RSSI jumped %d -> %d", new.side.name, previous.rssi, new.rssi
        )
        return False

    return True


class SideTracker:
    """Most recently accepted observation per broadcasting side.

    Slots are replaced wholesale and only by observations that pass
    ``is_plausible`` against the current slot content.
    """

    def __init__(self, max_battery_delta: int = 10, max_rssi_delta: int = 50) -> None:
        self.max_battery_delta = max_battery_delta
        self.max_rssi_delta = max_rssi_delta
        self._slots: dict[BroadcastSide, Observation] = {}

    @property
    def left(self) -> Observation | None:
        return self._slots.get(BroadcastSide.LEFT)

    @property
    def right(self) -> Observation | None:
        return self._slots.get(BroadcastSide.RIGHT)

    def slot(self, side: BroadcastSide) -> Observation | None:
        return self._slots.get(side)

    def accept(self, side: BroadcastSide, observation: Observation) -> bool:
        """Store the observation in the side's slot if it is plausible.

        Returns:
            True if the slot was replaced, False if the observation was dropped
        """
        if not is_plausible(
            observation,
            self._slots.get(side),
            max_battery_delta=self.max_battery_delta,
            max_rssi_delta=self.max_rssi_delta,
        ):
            return False
        self._slots[side] = observation
        return True

    def clear(self) -> None:
        self._slots.clear()
