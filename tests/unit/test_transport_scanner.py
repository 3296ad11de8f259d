"""Test the Bleak scanner adapter."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from bleak.exc import BleakError

from podbeacon.exceptions import ScannerError
from podbeacon.transport import BeaconScanner, address_to_int


class _FakeTracker:
    def __init__(self) -> None:
        self.calls: list[tuple[int, bytes, int, int]] = []

    def on_raw_advertisement(self, company_id, payload, rssi, address, arrived_at=None) -> bool:
        self.calls.append((company_id, payload, rssi, address))
        return True


class _FakeBleakScanner:
    instances: list[_FakeBleakScanner] = []
    start_error: Exception | None = None

    def __init__(self, detection_callback=None, scanning_mode="active", **kwargs):
        self.detection_callback = detection_callback
        self.scanning_mode = scanning_mode
        self.kwargs = kwargs
        self.started = False
        self.stopped = False
        _FakeBleakScanner.instances.append(self)

    async def start(self) -> None:
        if _FakeBleakScanner.start_error is not None:
            raise _FakeBleakScanner.start_error
        self.started = True

    async def stop(self) -> None:
        self.stopped = True


@pytest.fixture
def fake_bleak(monkeypatch: pytest.MonkeyPatch) -> type[_FakeBleakScanner]:
    _FakeBleakScanner.instances = []
    _FakeBleakScanner.start_error = None
    monkeypatch.setattr("podbeacon.transport.scanner.BleakScanner", _FakeBleakScanner)
    return _FakeBleakScanner


def _advertisement(manufacturer_data: dict[int, bytes], rssi: int = -60) -> SimpleNamespace:
    return SimpleNamespace(manufacturer_data=manufacturer_data, rssi=rssi)


class TestAddressToInt:
    """Test address conversion."""

    def test_mac_address(self):
        assert address_to_int("AA:BB:CC:DD:EE:FF") == 0xAABBCCDDEEFF

    def test_lowercase_mac_address(self):
        assert address_to_int("01:02:03:0a:0b:0c") == 0x0102030A0B0C

    def test_uuid_uses_low_48_bits(self):
        """CoreBluetooth UUIDs map to their low 48 bits."""
        assert address_to_int("12345678-1234-5678-9ABC-DEF012345678") == 0xDEF012345678

    def test_invalid_address(self):
        with pytest.raises(ValueError):
            address_to_int("not-an-address")


class TestDetectionCallback:
    """Test forwarding of advertisement data."""

    def test_forwards_every_manufacturer_block(self):
        """Each manufacturer-data entry reaches the tracker."""
        tracker = _FakeTracker()
        scanner = BeaconScanner(tracker)
        device = SimpleNamespace(address="AA:BB:CC:DD:EE:FF")

        scanner._detection_callback(
            device, _advertisement({0x004C: bytearray(b"\x07\x01"), 0x0006: b"\x01"}, rssi=-42)
        )

        assert tracker.calls == [
            (0x004C, b"\x07\x01", -42, 0xAABBCCDDEEFF),
            (0x0006, b"\x01", -42, 0xAABBCCDDEEFF),
        ]
        assert all(type(call[1]) is bytes for call in tracker.calls)

    def test_no_manufacturer_data(self):
        tracker = _FakeTracker()
        scanner = BeaconScanner(tracker)

        scanner._detection_callback(SimpleNamespace(address="AA:BB:CC:DD:EE:FF"), _advertisement({}))

        assert tracker.calls == []

    def test_unparseable_address_skipped(self):
        tracker = _FakeTracker()
        scanner = BeaconScanner(tracker)

        scanner._detection_callback(
            SimpleNamespace(address="garbage"), _advertisement({0x004C: b"\x07"})
        )

        assert tracker.calls == []


class TestScanning:
    """Test start/stop against a fake BleakScanner."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, fake_bleak):
        scanner = BeaconScanner(_FakeTracker(), scanning_mode="passive")

        await scanner.start()

        assert scanner.is_scanning is True
        bleak_scanner = fake_bleak.instances[0]
        assert bleak_scanner.started is True
        assert bleak_scanner.scanning_mode == "passive"
        assert bleak_scanner.detection_callback == scanner._detection_callback
        assert bleak_scanner.kwargs == {}

        await scanner.stop()

        assert scanner.is_scanning is False
        assert bleak_scanner.stopped is True

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self, fake_bleak):
        scanner = BeaconScanner(_FakeTracker())

        await scanner.start()
        await scanner.start()

        assert len(fake_bleak.instances) == 1
        await scanner.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self, fake_bleak):
        scanner = BeaconScanner(_FakeTracker())

        await scanner.stop()

        assert fake_bleak.instances == []

    @pytest.mark.asyncio
    async def test_adapter_passed_to_bluez(self, fake_bleak):
        async with BeaconScanner(_FakeTracker(), adapter="hci1"):
            assert fake_bleak.instances[0].kwargs == {"bluez": {"adapter": "hci1"}}

        assert fake_bleak.instances[0].stopped is True

    @pytest.mark.asyncio
    async def test_start_failure_wrapped(self, fake_bleak):
        """Bluetooth stack errors surface as ScannerError."""
        fake_bleak.start_error = BleakError("adapter off")
        scanner = BeaconScanner(_FakeTracker())

        with pytest.raises(ScannerError, match="adapter off"):
            await scanner.start()

        assert scanner.is_scanning is False
