"""Battery readings for the earbuds and the case."""

from __future__ import annotations

from dataclasses import dataclass, field

BATTERY_UNAVAILABLE = 0x0F
MAX_BATTERY_NIBBLE = 10
LOW_BATTERY_PERCENT = 20


@dataclass(frozen=True, slots=True)
class BatteryInfo:
    """Battery reading for one component.

    Attributes:
        percentage: Charge level 0-100, or None when the device did not report it
        is_charging: Whether the component is charging
    """

    percentage: int | None = None
    is_charging: bool = False

    def __post_init__(self) -> None:
        if self.percentage is not None and not 0 <= self.percentage <= 100:
            raise ValueError(
                f"percentage out of range: {self.percentage} (must be 0-100 or None)"
            )

    @property
    def is_available(self) -> bool:
        return self.percentage is not None

    @classmethod
    def unknown(cls) -> BatteryInfo:
        return cls()

    @classmethod
    def from_nibble(cls, nibble: int, is_charging: bool = False) -> BatteryInfo:
        """Build from a raw 0-10 nibble; 0x0F and out-of-range values are unavailable."""
        return cls(percentage=nibble_to_percent(nibble), is_charging=is_charging)

    @classmethod
    def from_percentage(cls, percentage: int | None, is_charging: bool = False) -> BatteryInfo:
        return cls(percentage=percentage, is_charging=is_charging)

    def __str__(self) -> str:
        if self.percentage is None:
            return "N/A"
        return f"{self.percentage}%{' (Charging)' if self.is_charging else ''}"


@dataclass(frozen=True, slots=True)
class BatteryStatus:
    """Battery readings for left, right and case."""

    left: BatteryInfo = field(default_factory=BatteryInfo)
    right: BatteryInfo = field(default_factory=BatteryInfo)
    case: BatteryInfo = field(default_factory=BatteryInfo)

    @property
    def average_pod_battery(self) -> int | None:
        """Mean of the available earbud readings, None if neither is available."""
        levels = [b.percentage for b in (self.left, self.right) if b.percentage is not None]
        if not levels:
            return None
        return sum(levels) // len(levels)

    @property
    def is_low_battery(self) -> bool:
        return any(
            b.percentage is not None and b.percentage <= LOW_BATTERY_PERCENT
            for b in (self.left, self.right, self.case)
        )

    @property
    def is_any_charging(self) -> bool:
        return self.left.is_charging or self.right.is_charging or self.case.is_charging

    def __str__(self) -> str:
        return f"L: {self.left} | R: {self.right} | Case: {self.case}"


def nibble_to_percent(nibble: int) -> int | None:
    """Convert an earbud battery nibble to a percentage.

    0x0F is the "unavailable" sentinel and is never scaled.
    """
    if nibble == BATTERY_UNAVAILABLE or not 0 <= nibble <= MAX_BATTERY_NIBBLE:
        return None
    return nibble * 10


def case_nibble_to_percent(nibble: int) -> int | None:
    """Convert the case battery nibble to a percentage.

    0x0F is unavailable, 0x0A and above clamp to 100, otherwise (n + 1) * 10.
    """
    if nibble == BATTERY_UNAVAILABLE:
        return None
    if nibble >= MAX_BATTERY_NIBBLE:
        return 100
    return (nibble + 1) * 10
