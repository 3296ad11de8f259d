"""Test model enums and lookups."""

from podbeacon.models.enums import (
    BroadcastSide,
    DeviceColor,
    DeviceModel,
    EarDetectionState,
    PodStatus,
    color_from_code,
    ear_state_from_flags,
    get_model_name,
    is_airpods,
    model_from_id,
)


class TestDeviceModel:
    """Test DeviceModel enum and lookups."""

    def test_device_model_values(self):
        """Test selected model identifiers."""
        assert DeviceModel.AIRPODS_1 == 0x0220
        assert DeviceModel.AIRPODS_PRO == 0x0E20
        assert DeviceModel.AIRPODS_PRO_2 == 0x1420
        assert DeviceModel.AIRPODS_MAX == 0x0A20
        assert DeviceModel.POWERBEATS_PRO == 0x0B20
        assert DeviceModel.UNKNOWN == 0x0000

    def test_model_from_id(self):
        """Exact matches resolve, everything else is UNKNOWN."""
        assert model_from_id(0x1520) == DeviceModel.AIRPODS_PRO_2_USBC
        assert model_from_id(0x0E21) == DeviceModel.UNKNOWN
        assert model_from_id(0xFFFF) == DeviceModel.UNKNOWN

    def test_model_names(self):
        """Test human-readable model names."""
        assert get_model_name(DeviceModel.AIRPODS_PRO) == "AirPods Pro"
        assert get_model_name(DeviceModel.BEATS_FIT_PRO) == "Beats Fit Pro"
        assert get_model_name(0x0A20) == "AirPods Max"
        assert get_model_name(DeviceModel.UNKNOWN) == "Unknown Device"
        assert get_model_name(0x1234) == "Unknown Device"

    def test_is_airpods(self):
        """Beats and unknown models are not AirPods."""
        assert is_airpods(DeviceModel.AIRPODS_3) is True
        assert is_airpods(DeviceModel.AIRPODS_MAX) is True
        assert is_airpods(DeviceModel.POWERBEATS_PRO) is False
        assert is_airpods(DeviceModel.UNKNOWN) is False


class TestDeviceColor:
    """Test DeviceColor enum."""

    def test_device_color_values(self):
        """Test color codes."""
        assert DeviceColor.WHITE == 0x00
        assert DeviceColor.BLACK == 0x01
        assert DeviceColor.GREEN == 0x0B

    def test_color_from_code(self):
        """Known codes map to DeviceColor, unknown codes stay ints."""
        assert color_from_code(0x06) is DeviceColor.SILVER
        assert color_from_code(0x20) == 0x20


class TestBroadcastSide:
    """Test BroadcastSide enum."""

    def test_other(self):
        """other flips the side."""
        assert BroadcastSide.LEFT.other is BroadcastSide.RIGHT
        assert BroadcastSide.RIGHT.other is BroadcastSide.LEFT


class TestEarDetectionState:
    """Test EarDetectionState helpers."""

    def test_is_any_in_ear(self):
        """Only in-ear categories report is_any_in_ear."""
        assert EarDetectionState.LEFT_IN_EAR.is_any_in_ear is True
        assert EarDetectionState.RIGHT_IN_EAR.is_any_in_ear is True
        assert EarDetectionState.BOTH_IN_EAR.is_any_in_ear is True
        assert EarDetectionState.BOTH_IN_CASE.is_any_in_ear is False
        assert EarDetectionState.ONE_OR_BOTH_OUT.is_any_in_ear is False

    def test_descriptions(self):
        """Test human-readable descriptions."""
        assert EarDetectionState.BOTH_IN_CASE.description == "Both in case"
        assert EarDetectionState.ONE_OR_BOTH_OUT.description == "One or both out"


class TestEarStateFromFlags:
    """Test category derivation from position flags."""

    def test_both_in_ear(self):
        assert ear_state_from_flags(PodStatus.BOTH_IN_EAR) is EarDetectionState.BOTH_IN_EAR

    def test_one_in_ear(self):
        """Exactly one in ear maps to that side, whatever the other does."""
        assert (
            ear_state_from_flags(PodStatus.LEFT_IN_EAR | PodStatus.RIGHT_IN_CASE)
            is EarDetectionState.LEFT_IN_EAR
        )
        assert ear_state_from_flags(PodStatus.RIGHT_IN_EAR) is EarDetectionState.RIGHT_IN_EAR

    def test_both_in_case(self):
        assert ear_state_from_flags(PodStatus.BOTH_IN_CASE) is EarDetectionState.BOTH_IN_CASE

    def test_anything_else_is_out(self):
        """One in case and one in neither state, or nothing, is ONE_OR_BOTH_OUT."""
        assert ear_state_from_flags(PodStatus.LEFT_IN_CASE) is EarDetectionState.ONE_OR_BOTH_OUT
        assert ear_state_from_flags(PodStatus.NONE) is EarDetectionState.ONE_OR_BOTH_OUT
