"""Health data provider contract and bundled implementations."""

from .base import BaseHealthProvider
from .samples import HealthSample, SampleHealthProvider
from .types import Category, DayWindow, HealthUnit, convert_quantity

__all__ = [
    "BaseHealthProvider",
    "Category",
    "DayWindow",
    "HealthSample",
    "HealthUnit",
    "SampleHealthProvider",
    "convert_quantity",
]
