"""Shared builders and fakes for unit tests."""

from __future__ import annotations

import struct
from collections.abc import Callable

import pytest

from podbeacon.models.enums import BroadcastSide, model_from_id
from podbeacon.models.observation import Observation

AIRPODS_PRO = 0x0E20

# Status position nibbles: low = left, bits 4-6 = right; 0x3 in ear, 0x5 in case
BOTH_IN_CASE = 0x55


def build_payload(
    *,
    model_id: int = AIRPODS_PRO,
    status: int = 0x80 | BOTH_IN_CASE,
    battery: int = 0x88,
    charging: int = 0x70,
    lid: int = 0,
    color: int = 0x00,
    prefix: int = 0x01,
    suffix: int = 0x00,
    leading: bytes = b"",
    tail: bytes = bytes(16),
) -> bytes:
    """Build manufacturer data holding one proximity pairing message.

    Default: 9-byte record + 16-byte tail + 2 framing bytes = 27 bytes.
    """
    record = struct.pack("<BHBBBBBB", prefix, model_id, status, battery, charging, lid, color, suffix)
    body = record + tail
    return leading + bytes([0x07, len(body)]) + body


def make_observation(
    side: BroadcastSide = BroadcastSide.LEFT,
    *,
    model_id: int = AIRPODS_PRO,
    position: int = BOTH_IN_CASE,
    left: int | None = 80,
    right: int | None = 80,
    case: int | None = 80,
    left_charging: bool = False,
    right_charging: bool = False,
    case_charging: bool = False,
    lid: int = 0,
    rssi: int = -50,
    address: int = 0xAABBCCDDEEFF,
    arrived_at: float = 0.0,
) -> Observation:
    """Build an Observation directly, bypassing the decoder."""
    status = (0x80 if side is BroadcastSide.LEFT else 0x00) | (position & 0x7F)
    return Observation(
        side=side,
        model_id=model_id,
        model=model_from_id(model_id),
        status=status,
        battery_byte=0,
        charging_byte=0,
        left_battery=left,
        right_battery=right,
        case_battery=case,
        left_charging=left_charging,
        right_charging=right_charging,
        case_charging=case_charging,
        lid_open_count=lid,
        color=0,
        rssi=rssi,
        address=address,
        arrived_at=arrived_at,
    )


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimers:
    """Timer factory that records timers and fires them on demand."""

    def __init__(self) -> None:
        self.created: list[FakeTimer] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.created.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        return [t for t in self.created if not t.cancelled and not t.fired]

    def fire(self) -> None:
        """Fire every active timer once."""
        for timer in self.active:
            timer.fired = True
            timer.callback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def payload() -> Callable[..., bytes]:
    return build_payload


@pytest.fixture
def observation() -> Callable[..., Observation]:
    return make_observation
