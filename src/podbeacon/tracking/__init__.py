"""Side validation, state reconciliation and ear detection."""

from .ear_detection import (
    EarDetectionDebouncer,
    TimerFactory,
    TimerHandle,
    start_thread_timer,
)
from .reconciler import ReconcileResult, StateReconciler, merge, position_status
from .validation import SideTracker, is_plausible

__all__ = [
    "EarDetectionDebouncer",
    "ReconcileResult",
    "SideTracker",
    "StateReconciler",
    "TimerFactory",
    "TimerHandle",
    "is_plausible",
    "merge",
    "position_status",
    "start_thread_timer",
]
