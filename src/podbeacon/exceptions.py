"""Exception hierarchy for podbeacon.

Malformed or implausible advertisements are never raised as errors; they are
dropped and counted by the tracker. Exceptions are reserved for the
configuration and scanner surfaces.
"""

from __future__ import annotations


class PodBeaconError(Exception):
    """Base exception for all podbeacon errors."""


class ConfigError(PodBeaconError, ValueError):
    """Invalid tracker configuration."""


class ScannerError(PodBeaconError):
    """BLE scanner failed to start or stop."""
