"""Main earbud tracker class."""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from collections.abc import Callable

from .config import TrackerConfig
from .models.enums import DeviceModel, EarDetectionState
from .models.events import DeviceStateChanged, LidOpened, TrackerEvent
from .models.state import DeviceState
from .protocol import decode
from .tracking import (
    EarDetectionDebouncer,
    SideTracker,
    StateReconciler,
    TimerFactory,
    start_thread_timer,
)

_LOGGER = logging.getLogger(__name__)

Listener = Callable[[TrackerEvent], None]


class DeviceTracker:
    """Tracks one pair of earbuds from their BLE advertisements.

    Feed every manufacturer-data block the scanner sees into
    ``on_raw_advertisement``; subscribe to receive events.

    Usage:
        tracker = DeviceTracker()
        unsubscribe = tracker.subscribe(print)
        tracker.on_raw_advertisement(0x004C, payload, rssi=-55, address=0x1234)
        ...
        tracker.close()

    Decoding happens outside the lock. Validation, merging, change
    detection and ear detection run under one lock per tracker, which the
    debounce timer shares. Listeners are called after the lock is released.
    """

    def __init__(
            self,
            config: TrackerConfig | None = None,
            *,
            clock: Callable[[], float] = time.monotonic,
            timer_factory: TimerFactory = start_thread_timer,
    ):
        """Initialize the tracker.

        Args:
            config: Tracker tunables (default: TrackerConfig())
            clock: Monotonic time source used to stamp advertisements
            timer_factory: Timer used by the ear detection debounce check
        """
        self.config = config if config is not None else TrackerConfig()
        self._clock = clock
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        self._stats: Counter[str] = Counter()
        self._unknown_models: set[int] = set()
        self._closed = False

        self._reconciler = StateReconciler(
            SideTracker(
                max_battery_delta=self.config.max_battery_delta,
                max_rssi_delta=self.config.max_rssi_delta,
            )
        )
        self._ear_detection = EarDetectionDebouncer(
            threshold=self.config.debounce_threshold,
            interval=self.config.debounce_interval,
            liveness_window=self.config.liveness_window,
            clock=clock,
            timer_factory=timer_factory,
            lock=self._lock,
            dispatch=self._dispatch,
        )

    def __enter__(self) -> DeviceTracker:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def current_state(self) -> DeviceState | None:
        """Latest merged state, or None if nothing has been accepted yet."""
        with self._lock:
            return self._reconciler.state

    @property
    def ear_detection_state(self) -> EarDetectionState:
        """Committed (debounced) ear detection category."""
        return self._ear_detection.state

    @property
    def is_connected(self) -> bool:
        """True if an accepted beacon arrived within the liveness window."""
        with self._lock:
            state = self._reconciler.state
            return state is not None and state.is_connected(
                self._clock(), self.config.liveness_window
            )

    @property
    def stats(self) -> dict[str, int]:
        """Counters for accepted, dropped and unknown-model beacons."""
        with self._lock:
            return dict(self._stats)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for tracker events.

        Returns:
            Callable that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def on_raw_advertisement(
            self,
            company_id: int,
            payload: bytes,
            rssi: int,
            address: int,
            arrived_at: float | None = None,
    ) -> bool:
        """Process one manufacturer-data block from the scanner.

        Args:
            company_id: Company ID of the manufacturer-data block
            payload: Manufacturer data without the company ID
            rssi: Signal strength in dBm
            address: Source address as a 48-bit integer
            arrived_at: Arrival time (default: the tracker clock)

        Returns:
            True if the beacon was decoded and accepted
        """
        if self._closed:
            return False

        if company_id != self.config.company_id or (
            self.config.min_rssi is not None and rssi < self.config.min_rssi
        ):
            with self._lock:
                self._stats["ignored"] += 1
            return False

        observation = decode(
            payload,
            company_id,
            rssi=rssi,
            address=address,
            arrived_at=arrived_at if arrived_at is not None else self._clock(),
            expected_company_id=self.config.company_id,
        )

        events: list[TrackerEvent] = []
        with self._lock:
            if self._closed:
                return False

            if observation is None:
                self._stats["malformed"] += 1
                return False

            if observation.model is DeviceModel.UNKNOWN:
                self._stats["unknown_model"] += 1
                if observation.model_id not in self._unknown_models:
                    self._unknown_models.add(observation.model_id)
                    _LOGGER.info(
                        "Unknown model ID 0x%04X (%d), treating as unknown device",
                        observation.model_id,
                        observation.model_id,
                    )

            result = self._reconciler.update(observation)
            if not result.accepted:
                self._stats["rejected"] += 1
                return False
            self._stats["accepted"] += 1

            if result.lid_opened:
                self._stats["lid_opened"] += 1
                events.append(LidOpened(observation.lid_open_count, observation.arrived_at))

            if result.changed and result.state is not None:
                self._stats["state_changed"] += 1
                _LOGGER.debug("State changed: %s", result.state)
                events.append(DeviceStateChanged(result.state))

            if result.state is not None:
                self._ear_detection.process(result.state)

        self._dispatch(events)
        return True

    def reset_ear_detection(self) -> None:
        """Force ear detection back to both-in-case, e.g. when tracking restarts."""
        self._ear_detection.reset()

    def reset(self) -> None:
        """Forget all observations and the ear detection state."""
        with self._lock:
            self._reconciler.reset()
            self._ear_detection.reset()
            self._unknown_models.clear()

    def close(self) -> None:
        """Stop the debounce timer and ignore further advertisements."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._ear_detection.shutdown()
            self._reconciler.reset()
            self._listeners.clear()
        _LOGGER.debug("Tracker closed")

    def _dispatch(self, events: list[TrackerEvent]) -> None:
        if not events:
            return
        with self._lock:
            listeners = list(self._listeners)
        for event in events:
            for listener in listeners:
                try:
                    listener(event)
                except Exception:
                    _LOGGER.exception("Error in listener for %s", type(event).__name__)
