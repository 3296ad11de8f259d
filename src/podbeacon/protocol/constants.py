"""Apple Continuity proximity pairing constants."""

from __future__ import annotations

from typing import Final

APPLE_COMPANY_ID: Final = 0x004C

# Continuity sub-message carrying earbud status
PROXIMITY_PAIRING_TYPE: Final = 0x07

RECORD_PREFIX: Final = 0x01
RECORD_SUFFIX: Final = 0x00

# prefix(1) model(2 LE) status(1) battery(1) charging(1) lid(1) color(1) suffix(1)
RECORD_FORMAT: Final = "<BHBBBBBB"
RECORD_LENGTH: Final = 9

# Whole manufacturer payload, company ID already stripped
MIN_PAYLOAD_LENGTH: Final = 27
