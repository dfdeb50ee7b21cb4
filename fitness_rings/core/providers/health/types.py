"""Category, unit and window types shared by health providers and the engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from fitness_rings.config.activity import CANONICAL_UNITS, DISPLAY_ORDER


class Category(str, Enum):
    """Activity metrics tracked by the three rings."""

    ENERGY = "energy"
    STEPS = "steps"
    DISTANCE = "distance"

    @property
    def unit(self) -> "HealthUnit":
        """Return the canonical unit the category is summed in."""

        return HealthUnit(CANONICAL_UNITS[self.value])

    @classmethod
    def display_order(cls) -> tuple["Category", ...]:
        return tuple(cls(value) for value in DISPLAY_ORDER)


class HealthUnit(str, Enum):
    """Units a provider may report samples in."""

    KILOCALORIE = "kcal"
    KILOJOULE = "kJ"
    CALORIE = "cal"
    COUNT = "count"
    MILE = "mi"
    KILOMETER = "km"
    METER = "m"
    FOOT = "ft"


# Multiply a value in the key unit to get the same quantity in the base unit of its dimension
_CONVERSIONS: dict[HealthUnit, tuple[str, float]] = {
    HealthUnit.KILOCALORIE: ("energy", 1.0),
    HealthUnit.KILOJOULE: ("energy", 1.0 / 4.184),
    HealthUnit.CALORIE: ("energy", 0.001),
    HealthUnit.COUNT: ("count", 1.0),
    HealthUnit.MILE: ("length", 1.0),
    HealthUnit.KILOMETER: ("length", 1000.0 / 1609.344),
    HealthUnit.METER: ("length", 1.0 / 1609.344),
    HealthUnit.FOOT: ("length", 1.0 / 5280.0),
}


def convert_quantity(value: float, source: HealthUnit, target: HealthUnit) -> float:
    """Convert ``value`` from ``source`` to ``target``.

    Raises ``ValueError`` when the units measure different dimensions.
    """

    source_dimension, source_factor = _CONVERSIONS[HealthUnit(source)]
    target_dimension, target_factor = _CONVERSIONS[HealthUnit(target)]
    if source_dimension != target_dimension:
        raise ValueError(f"Cannot convert {source.value} to {target.value}")
    if source == target:
        return float(value)
    return float(value) * source_factor / target_factor


@dataclass(frozen=True, slots=True)
class DayWindow:
    """Half-open ``[start, end)`` interval a category is summed over."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("DayWindow instants must be timezone aware")
        if self.start > self.end:
            raise ValueError("DayWindow start must not be after its end")

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    def overlap_seconds(self, start: datetime, end: datetime) -> float:
        """Return how many seconds of ``[start, end)`` fall inside the window."""

        lower = max(self.start.timestamp(), start.timestamp())
        upper = min(self.end.timestamp(), end.timestamp())
        return max(upper - lower, 0.0)


__all__ = ["Category", "DayWindow", "HealthUnit", "convert_quantity"]
