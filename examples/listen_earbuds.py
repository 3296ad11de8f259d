"""Listen for earbud BLE beacons and print the merged state and events.

Usage:
    uv run python examples/listen_earbuds.py --duration 30
    uv run python examples/listen_earbuds.py --min-rssi -70 --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections import Counter
from datetime import datetime

from podbeacon import (
    BeaconScanner,
    DeviceStateChanged,
    DeviceTracker,
    EarbudsInserted,
    EarbudsRemoved,
    EarDetectionChanged,
    LidOpened,
    TrackerConfig,
    TrackerEvent,
)


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _print_event(event: TrackerEvent) -> None:
    """Print one tracker event."""
    if isinstance(event, DeviceStateChanged):
        state = event.state
        print(
            f"[{_timestamp()}] STATE {state.model_name} "
            f"battery=({state.battery}) rssi={state.rssi} lid={state.lid_open_count} "
            f"position=0x{state.status_byte:02x}"
        )
    elif isinstance(event, LidOpened):
        print(f"[{_timestamp()}] LID opened (count={event.lid_open_count})")
    elif isinstance(event, EarbudsInserted):
        print(f"[{_timestamp()}] INSERTED {event.transition.new_state.description}")
    elif isinstance(event, EarbudsRemoved):
        print(f"[{_timestamp()}] REMOVED {event.transition.new_state.description}")
    elif isinstance(event, EarDetectionChanged):
        print(
            f"[{_timestamp()}] EAR {event.transition.old_state.description} -> "
            f"{event.transition.new_state.description}"
        )


async def listen(duration: float, min_rssi: int | None) -> None:
    """Scan for beacons and print tracker events."""
    event_counts: Counter[str] = Counter()
    tracker = DeviceTracker(TrackerConfig(min_rssi=min_rssi))

    def on_event(event: TrackerEvent) -> None:
        event_counts[type(event).__name__] += 1
        _print_event(event)

    tracker.subscribe(on_event)

    print("Listening for earbud beacons (manufacturer 0x004c)...")
    if duration > 0:
        print(f"Duration: {duration:.1f}s")
    else:
        print("Duration: unlimited (Ctrl+C to stop)")

    with tracker:
        async with BeaconScanner(tracker):
            if duration > 0:
                await asyncio.sleep(duration)
            else:
                while True:
                    await asyncio.sleep(1)

        print("\nSummary:")
        print(f"  beacons={tracker.stats}")
        print(f"  events_seen={dict(event_counts)}")
        state = tracker.current_state
        if state is not None:
            print(f"  last_state={state}")
            print(f"  ear_detection={tracker.ear_detection_state.description}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Listen for earbud BLE beacons and print merged state and events."
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=30.0,
        help="Listen duration in seconds (0 = run until Ctrl+C). Default: 30",
    )
    parser.add_argument(
        "--min-rssi",
        type=int,
        default=None,
        help="Ignore beacons weaker than this RSSI in dBm (default: no floor).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging for decoded and rejected beacons.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(listen(duration=args.duration, min_rssi=args.min_rssi))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
