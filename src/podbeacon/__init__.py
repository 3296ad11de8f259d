"""podbeacon: earbud BLE beacon decoding and state tracking.

  Pure Python package that turns Apple proximity pairing advertisements
  into a merged, debounced view of battery, charging and ear detection.
  """

from .config import TrackerConfig
from .device import DeviceTracker
from .exceptions import ConfigError, PodBeaconError, ScannerError
from .models.battery import BatteryInfo, BatteryStatus
from .models.enums import (
    BroadcastSide,
    DeviceColor,
    DeviceModel,
    EarDetectionState,
    PodStatus,
    get_model_name,
    is_airpods,
)
from .models.events import (
    DeviceStateChanged,
    EarbudsInserted,
    EarbudsRemoved,
    EarDetectionChanged,
    EarDetectionTransition,
    LidOpened,
    TrackerEvent,
)
from .models.observation import Observation
from .models.state import DeviceState
from .protocol import APPLE_COMPANY_ID, decode, is_proximity_pairing
from .tracking import EarDetectionDebouncer, SideTracker, StateReconciler, merge
from .transport import BeaconScanner, address_to_int

__version__ = "0.1.0"

__all__ = [
    # Main API
    "DeviceTracker",
    "BeaconScanner",
    "TrackerConfig",
    # Exceptions
    "PodBeaconError",
    "ConfigError",
    "ScannerError",
    # Models
    "Observation",
    "DeviceState",
    "BatteryInfo",
    "BatteryStatus",
    # Events
    "DeviceStateChanged",
    "LidOpened",
    "EarbudsInserted",
    "EarbudsRemoved",
    "EarDetectionChanged",
    "EarDetectionTransition",
    "TrackerEvent",
    # Enums
    "BroadcastSide",
    "DeviceColor",
    "DeviceModel",
    "EarDetectionState",
    "PodStatus",
    "get_model_name",
    "is_airpods",
    # Core components
    "SideTracker",
    "StateReconciler",
    "EarDetectionDebouncer",
    "merge",
    # Utilities
    "decode",
    "is_proximity_pairing",
    "address_to_int",
    # Constants
    "APPLE_COMPANY_ID",
]
