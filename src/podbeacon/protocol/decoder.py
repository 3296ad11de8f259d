"""Proximity pairing beacon decoding."""

from __future__ import annotations

import logging
import struct
import time

from ..models.battery import case_nibble_to_percent, nibble_to_percent
from ..models.enums import BroadcastSide, DeviceModel, color_from_code, model_from_id
from ..models.observation import BROADCAST_SIDE_BIT, Observation
from .constants import (
    APPLE_COMPANY_ID,
    MIN_PAYLOAD_LENGTH,
    PROXIMITY_PAIRING_TYPE,
    RECORD_FORMAT,
    RECORD_LENGTH,
    RECORD_PREFIX,
    RECORD_SUFFIX,
)

_LOGGER = logging.getLogger(__name__)


def is_proximity_pairing(data: bytes) -> bool:
    """Cheap check for a proximity pairing message followed by the record prefix.

    Used to skip unrelated Apple traffic (iBeacon, Handoff, ...) before a
    full decode. A True result does not guarantee that decode succeeds.
    """
    if len(data) < 10:
        return False
    for i in range(len(data) - 2):
        if data[i] == PROXIMITY_PAIRING_TYPE and data[i + 2] == RECORD_PREFIX:
            return True
    return False


def _find_record(data: bytes) -> bytes | None:
    """Walk [type:1][length:1][payload:length] frames and return the beacon record."""
    offset = 0
    while offset + 2 < len(data):
        msg_type = data[offset]
        msg_length = data[offset + 1]
        start = offset + 2

        if msg_type == PROXIMITY_PAIRING_TYPE:
            if msg_length < RECORD_LENGTH or start + RECORD_LENGTH > len(data):
                return None
            return data[start:start + RECORD_LENGTH]

        offset = start + msg_length

    return None


def decode(
    data: bytes,
    company_id: int = APPLE_COMPANY_ID,
    *,
    rssi: int = 0,
    address: int = 0,
    arrived_at: float | None = None,
    expected_company_id: int = APPLE_COMPANY_ID,
) -> Observation | None:
    """Decode an earbud beacon from manufacturer data.

    Bleak provides manufacturer data keyed by company ID, so ``data`` must
    not include the 2-byte company ID prefix.

    Record layout (9 bytes, followed by an encrypted tail that is ignored):
    - [0]: Prefix, always 0x01
    - [1-2]: Model ID (little-endian uint16)
    - [3]: Status; bit 7 set = left earbud broadcasting, bits 0-6 = position
    - [4]: Battery; low nibble = broadcasting earbud, high nibble = other earbud
    - [5]: Charging; bit0=left, bit1=right, bit2=case, bits 4-7 = case battery
    - [6]: Lid open counter (uint8, wraps)
    - [7]: Color
    - [8]: Suffix, always 0x00

    Args:
        data: Manufacturer data payload
        company_id: Company ID the payload was advertised under
        rssi: Signal strength in dBm
        address: Source address as a 48-bit integer
        arrived_at: Arrival time in seconds (default: time.monotonic())
        expected_company_id: Company ID beacons must carry (default: Apple)

    Returns:
        Decoded Observation, or None for anything that is not an earbud
        beacon. Non-matching traffic is expected and never raises.
    """
    if company_id != expected_company_id or len(data) < MIN_PAYLOAD_LENGTH:
        return None

    record = _find_record(data)
    if record is None:
        return None

    prefix, model_id, status, battery_byte, charging_byte, lid_open_count, color, suffix = (
        struct.unpack(RECORD_FORMAT, record)
    )
    if prefix != RECORD_PREFIX or suffix != RECORD_SUFFIX:
        return None

    side = BroadcastSide.LEFT if status & BROADCAST_SIDE_BIT else BroadcastSide.RIGHT

    own_battery = nibble_to_percent(battery_byte & 0x0F)
    other_battery = nibble_to_percent((battery_byte >> 4) & 0x0F)
    if side is BroadcastSide.LEFT:
        left_battery, right_battery = own_battery, other_battery
    else:
        left_battery, right_battery = other_battery, own_battery

    model = model_from_id(model_id)
    if model is DeviceModel.UNKNOWN:
        _LOGGER.debug("Unknown model ID 0x%04X", model_id)

    observation = Observation(
        side=side,
        model_id=model_id,
        model=model,
        status=status,
        battery_byte=battery_byte,
        charging_byte=charging_byte,
        left_battery=left_battery,
        right_battery=right_battery,
        case_battery=case_nibble_to_percent((charging_byte >> 4) & 0x0F),
        left_charging=bool(charging_byte & 0x01),
        right_charging=bool(charging_byte & 0x02),
        case_charging=bool(charging_byte & 0x04),
        lid_open_count=lid_open_count,
        color=color_from_code(color),
        rssi=rssi,
        address=address,
        arrived_at=arrived_at if arrived_at is not None else time.monotonic(),
    )

    _LOGGER.debug(
        "Decoded %s beacon: model=0x%04X status=0x%02X battery=0x%02X charging=0x%02X "
        "lid=%d rssi=%d",
        side.name,
        model_id,
        status,
        battery_byte,
        charging_byte,
        lid_open_count,
        rssi,
    )
    return observation
