"""BLE advertisement scanning."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Literal

from bleak import BleakScanner
from bleak.exc import BleakError

from ..exceptions import ScannerError

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice
    from bleak.backends.scanner import AdvertisementData

    from ..device import DeviceTracker

_LOGGER = logging.getLogger(__name__)

ADDRESS_MASK = 0xFFFFFFFFFFFF


def address_to_int(address: str) -> int:
    """Convert a Bleak device address to a 48-bit integer handle.

    Accepts MAC addresses (``AA:BB:CC:DD:EE:FF``). CoreBluetooth hides the
    MAC and reports a UUID instead; its low 48 bits are used.

    Raises:
        ValueError: If the address is neither a MAC address nor a UUID
    """
    parts = address.split(":")
    if len(parts) == 6:
        return int("".join(parts), 16)
    return uuid.UUID(address).int & ADDRESS_MASK


class BeaconScanner:
    """Passive listener that feeds every manufacturer-data block to a tracker.

    No connection is ever made; the scanner only forwards raw advertisement
    payloads. Filtering and decoding happen in the tracker.

    Usage:
        async with BeaconScanner(tracker):
            await asyncio.sleep(30)
    """

    def __init__(
            self,
            tracker: DeviceTracker,
            *,
            scanning_mode: Literal["active", "passive"] = "active",
            adapter: str | None = None,
    ):
        """Initialize the scanner.

        Args:
            tracker: Receives every manufacturer-data block
            scanning_mode: Bleak scanning mode (default: active)
            adapter: Optional Bluetooth adapter name (BlueZ only)
        """
        self.tracker = tracker
        self.scanning_mode = scanning_mode
        self.adapter = adapter
        self._scanner: BleakScanner | None = None

    async def __aenter__(self) -> BeaconScanner:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    @property
    def is_scanning(self) -> bool:
        return self._scanner is not None

    async def start(self) -> None:
        """Start scanning.

        Raises:
            ScannerError: If the Bluetooth stack refuses to scan
        """
        if self._scanner is not None:
            return  # Already scanning

        kwargs: dict[str, dict[str, str]] = {}
        if self.adapter is not None:
            kwargs["bluez"] = {"adapter": self.adapter}

        scanner = BleakScanner(
            detection_callback=self._detection_callback,
            scanning_mode=self.scanning_mode,
            **kwargs,
        )
        try:
            await scanner.start()
        except (BleakError, OSError) as e:
            raise ScannerError(f"Failed to start scanning: {e}") from e

        self._scanner = scanner
        _LOGGER.info("Started scanning for earbud beacons")

    async def stop(self) -> None:
        """Stop scanning."""
        if self._scanner is None:
            return

        scanner = self._scanner
        self._scanner = None
        try:
            await scanner.stop()
        except (BleakError, OSError) as e:
            raise ScannerError(f"Failed to stop scanning: {e}") from e
        _LOGGER.info("Stopped scanning")

    def _detection_callback(self, device: BLEDevice, advertisement_data: AdvertisementData) -> None:
        try:
            address = address_to_int(device.address)
        except ValueError:
            _LOGGER.debug("Unparseable device address %s", device.address)
            return

        for company_id, payload in advertisement_data.manufacturer_data.items():
            self.tracker.on_raw_advertisement(
                company_id,
                bytes(payload),
                advertisement_data.rssi,
                address,
            )
