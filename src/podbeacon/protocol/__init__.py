"""Proximity pairing protocol implementation."""

from .constants import (
    APPLE_COMPANY_ID,
    MIN_PAYLOAD_LENGTH,
    PROXIMITY_PAIRING_TYPE,
    RECORD_LENGTH,
    RECORD_PREFIX,
    RECORD_SUFFIX,
)
from .decoder import decode, is_proximity_pairing

__all__ = [
    "APPLE_COMPANY_ID",
    "MIN_PAYLOAD_LENGTH",
    "PROXIMITY_PAIRING_TYPE",
    "RECORD_LENGTH",
    "RECORD_PREFIX",
    "RECORD_SUFFIX",
    "decode",
    "is_proximity_pairing",
]
