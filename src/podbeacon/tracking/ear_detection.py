"""Debounced ear insertion/removal detection.

The position sensors chatter while an earbud is being inserted or removed.
A new position category is only committed after it has been observed
continuously for ``threshold`` seconds; a periodic check every
``interval`` seconds performs the commit.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from functools import partial
from typing import Protocol

from ..models.enums import EarDetectionState
from ..models.events import (
    EarbudsInserted,
    EarbudsRemoved,
    EarDetectionChanged,
    EarDetectionTransition,
    TrackerEvent,
)
from ..models.state import DeviceState

_LOGGER = logging.getLogger(__name__)

INITIAL_STATE = EarDetectionState.BOTH_IN_CASE


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def start_thread_timer(interval: float, callback: Callable[[], None]) -> threading.Timer:
    """Default timer factory: one-shot daemon threading.Timer."""
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    timer.start()
    return timer


class EarDetectionDebouncer:
    """Turn raw ear position categories into stable transition events.

    Usage:
        debouncer = EarDetectionDebouncer(dispatch=handle_events)
        debouncer.process(state)   # on every merged DeviceState
        ...
        debouncer.shutdown()

    Events produced by the periodic check are passed to ``dispatch`` after
    the lock has been released. ``check()`` can also be called directly; it
    returns the events instead of dispatching them.
    """

    def __init__(
            self,
            *,
            threshold: float = 0.5,
            interval: float = 0.1,
            liveness_window: float = 60.0,
            clock: Callable[[], float] = time.monotonic,
            timer_factory: TimerFactory = start_thread_timer,
            lock: threading.RLock | None = None,
            dispatch: Callable[[list[TrackerEvent]], None] | None = None,
    ):
        """Initialize the debouncer.

        Args:
            threshold: Seconds a candidate must stay pending before commit (default: 0.5)
            interval: Seconds between periodic checks (default: 0.1)
            liveness_window: States older than this are ignored (default: 60)
            clock: Monotonic time source, shared with DeviceState.last_update
            timer_factory: Starts a one-shot timer; must return an object with cancel()
            lock: Lock shared with the owning tracker (default: private RLock)
            dispatch: Receives events committed by the periodic check
        """
        self.threshold = threshold
        self.interval = interval
        self.liveness_window = liveness_window
        self._clock = clock
        self._timer_factory = timer_factory
        self._lock = lock if lock is not None else threading.RLock()
        self._dispatch = dispatch

        self._committed = INITIAL_STATE
        self._pending: EarDetectionState | None = None
        self._pending_since = 0.0
        self._timer: TimerHandle | None = None
        self._timer_generation = 0
        self._closed = False

    @property
    def state(self) -> EarDetectionState:
        """Committed ear detection category."""
        with self._lock:
            return self._committed

    @property
    def pending(self) -> EarDetectionState | None:
        with self._lock:
            return self._pending

    @property
    def is_checking(self) -> bool:
        """True while the periodic check is scheduled."""
        with self._lock:
            return self._timer is not None

    def process(self, state: DeviceState) -> None:
        """Feed one merged device state.

        Stale states (no update within the liveness window) are ignored.
        """
        with self._lock:
            if self._closed:
                return

            now = self._clock()
            if not state.is_connected(now, self.liveness_window):
                return

            candidate = state.ear_detection

            if candidate == self._committed:
                if self._pending is not None:
                    # Reverted before the threshold: drop the candidate rather than
                    # re-pending the committed category, so no old == new
                    # transition is ever reported
                    _LOGGER.debug("Ear detection reverted to %s", candidate.description)
                    self._pending = None
                    self._stop_timer()
                return

            if candidate == self._pending:
                return

            _LOGGER.debug(
                "Ear detection change: %s -> %s (debouncing)",
                self._committed.description,
                candidate.description,
            )
            self._pending = candidate
            self._pending_since = now
            self._ensure_timer()

    def check(self) -> list[TrackerEvent]:
        """Commit the pending category if it has been stable long enough.

        Safe to call at any time; returns an empty list when nothing is due.
        """
        with self._lock:
            return self._check_locked()

    def reset(self) -> None:
        """Force BOTH_IN_CASE and drop any pending candidate."""
        with self._lock:
            self._committed = INITIAL_STATE
            self._pending = None
            self._pending_since = 0.0
            self._stop_timer()

    def shutdown(self) -> None:
        """Stop the periodic check for good."""
        with self._lock:
            self._closed = True
            self._pending = None
            self._stop_timer()

    def _check_locked(self) -> list[TrackerEvent]:
        if self._pending is None:
            self._stop_timer()
            return []

        now = self._clock()
        if now - self._pending_since < self.threshold:
            return []

        transition = EarDetectionTransition(
            old_state=self._committed,
            new_state=self._pending,
            timestamp=now,
        )
        self._committed = self._pending
        self._pending = None
        self._stop_timer()

        events: list[TrackerEvent] = []
        if not transition.was_in_ear and transition.is_in_ear:
            _LOGGER.info(
                "Earbuds inserted: %s -> %s",
                transition.old_state.description,
                transition.new_state.description,
            )
            events.append(EarbudsInserted(transition))
        elif transition.was_in_ear and not transition.is_in_ear:
            _LOGGER.info(
                "Earbuds removed: %s -> %s",
                transition.old_state.description,
                transition.new_state.description,
            )
            events.append(EarbudsRemoved(transition))
        events.append(EarDetectionChanged(transition))
        return events

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            # A cancelled timer may still fire once it has started
            if self._closed or generation != self._timer_generation:
                return
            self._timer = None
            events = self._check_locked()
            if self._pending is not None:
                self._ensure_timer()

        if events and self._dispatch is not None:
            self._dispatch(events)

    def _ensure_timer(self) -> None:
        if self._timer is None and not self._closed:
            self._timer_generation += 1
            self._timer = self._timer_factory(
                self.interval, partial(self._on_timer, self._timer_generation)
            )

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer_generation += 1
            self._timer.cancel()
            self._timer = None
