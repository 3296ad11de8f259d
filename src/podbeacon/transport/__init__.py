"""BLE transport layer."""

from .scanner import BeaconScanner, address_to_int

__all__ = ["BeaconScanner", "address_to_int"]
