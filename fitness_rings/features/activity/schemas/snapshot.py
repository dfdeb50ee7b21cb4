"""Immutable per-day activity totals handed to the presentation layer."""

from __future__ import annotations

from datetime import date, datetime
from types import MappingProxyType
from typing import Annotated, Any, Mapping

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)

from fitness_rings.core.providers.health.types import Category, DayWindow


def _freeze(value: Mapping[Category, Any]) -> Mapping[Category, Any]:
    return MappingProxyType(dict(value))


def _thaw(value: Mapping[Category, Any]) -> dict[Category, Any]:
    return dict(value)


def _read_only(value_type: type) -> Any:
    """Per-category mapping that rejects item assignment and dumps as a plain dict."""

    return Annotated[
        Mapping[Category, value_type],
        AfterValidator(_freeze),
        PlainSerializer(_thaw, return_type=dict[Category, value_type]),
    ]


CategoryTotals = _read_only(float)
CategoryFlags = _read_only(bool)
CategoryMessages = _read_only(str)


class ActivitySnapshot(BaseModel):
    """Totals for one day.

    ``availability`` records whether each category's query succeeded, so a
    failed query (``False``) is never confused with a genuine zero.
    ``provider_available`` is ``False`` when the health data source as a whole
    is missing or unauthorised.
    """

    model_config = ConfigDict(frozen=True)

    day: date
    window_start: datetime
    window_end: datetime
    totals: CategoryTotals
    availability: CategoryFlags
    errors: CategoryMessages = Field(default_factory=dict, validate_default=True)
    provider_available: bool = True

    @field_validator("totals")
    @classmethod
    def _non_negative(cls, value: Mapping[Category, float]) -> Mapping[Category, float]:
        for category, total in value.items():
            if total < 0:
                raise ValueError(f"{category.value} total must be non-negative")
        return value

    @model_validator(mode="after")
    def _covers_every_category(self) -> "ActivitySnapshot":
        missing = [category.value for category in Category if category not in self.totals]
        if missing:
            raise ValueError(f"Snapshot is missing totals for: {', '.join(missing)}")
        if self.window_start > self.window_end:
            raise ValueError("Snapshot window start must not be after its end")
        return self

    @classmethod
    def build(
        cls,
        day: date,
        window: DayWindow,
        totals: Mapping[Category, float],
        availability: Mapping[Category, bool],
        errors: Mapping[Category, str] | None = None,
        *,
        provider_available: bool = True,
    ) -> "ActivitySnapshot":
        return cls(
            day=day,
            window_start=window.start,
            window_end=window.end,
            totals=dict(totals),
            availability={category: bool(availability.get(category, False)) for category in Category},
            errors=dict(errors or {}),
            provider_available=provider_available,
        )

    @classmethod
    def empty(cls, day: date, window: DayWindow, *, provider_available: bool = True) -> "ActivitySnapshot":
        """Return an all-zero snapshot with no category marked available."""

        return cls.build(
            day,
            window,
            totals={category: 0.0 for category in Category},
            availability={},
            provider_available=provider_available,
        )

    @property
    def window(self) -> DayWindow:
        return DayWindow(start=self.window_start, end=self.window_end)

    def total(self, category: Category) -> float:
        return self.totals[Category(category)]

    def is_available(self, category: Category) -> bool:
        return self.availability.get(Category(category), False)


__all__ = ["ActivitySnapshot"]
