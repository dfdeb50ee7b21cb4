"""In-process health provider backed by raw time-stamped samples.

Samples carry their own unit and a ``[start, end)`` span.  A cumulative query
converts every overlapping sample to the requested unit and pro-rates samples
that straddle a window edge by the share of their span inside the window, so
a walk logged from 23:30 to 00:30 counts half towards each day.
Instantaneous samples (``start == end``) count when ``start`` falls inside the
window.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from fitness_rings.core.exceptions import ProviderUnavailableError
from fitness_rings.core.providers.health.base import BaseHealthProvider
from fitness_rings.core.providers.health.types import Category, DayWindow, HealthUnit, convert_quantity

logger = logging.getLogger(__name__)


class HealthSample(BaseModel):
    """A single measurement reported by a device."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    category: Category
    value: float = Field(ge=0)
    unit: HealthUnit
    start: datetime
    end: datetime | None = None

    @field_validator("value")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("value must be a finite number")
        return value

    @field_validator("start", "end")
    @classmethod
    def _aware(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            raise ValueError("sample timestamps must include a UTC offset")
        return value

    @model_validator(mode="after")
    def _ordered(self) -> "HealthSample":
        if self.end is not None and self.end < self.start:
            raise ValueError("sample end must not be before its start")
        return self

    @property
    def finish(self) -> datetime:
        return self.end or self.start

    def share_in(self, window: DayWindow) -> float:
        """Return the fraction of this sample attributed to ``window``."""

        duration = self.finish.timestamp() - self.start.timestamp()
        if duration <= 0:
            return 1.0 if window.contains(self.start) else 0.0
        return window.overlap_seconds(self.start, self.finish) / duration


class SampleHealthProvider(BaseHealthProvider):
    """Sum in-memory samples over day windows."""

    name = "samples"

    def __init__(
        self,
        samples: Iterable[HealthSample] = (),
        *,
        available: bool = True,
        grant_authorization: bool = True,
    ) -> None:
        self._samples: dict[Category, list[HealthSample]] = {category: [] for category in Category}
        self._available = available
        self._grant_authorization = grant_authorization
        self.add_samples(samples)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        **kwargs: Any,
    ) -> "SampleHealthProvider":
        """Build a provider from raw mappings, skipping records that fail validation."""

        samples: list[HealthSample] = []
        skipped = 0
        for index, record in enumerate(records):
            try:
                samples.append(HealthSample.model_validate(record))
            except ValidationError as exc:
                skipped += 1
                logger.warning(
                    "Skipping invalid health sample",
                    extra={"index": index, "errors": exc.error_count()},
                )
        if skipped:
            logger.info("Loaded health samples", extra={"loaded": len(samples), "skipped": skipped})
        return cls(samples, **kwargs)

    def add_sample(self, sample: HealthSample) -> None:
        self._samples[sample.category].append(sample)

    def add_samples(self, samples: Iterable[HealthSample]) -> None:
        for sample in samples:
            self.add_sample(sample)

    def samples_for(self, category: Category) -> list[HealthSample]:
        return list(self._samples[category])

    def is_available(self) -> bool:
        return self._available

    async def request_authorization(self, categories: Iterable[Category]) -> bool:
        if not self._available:
            return False
        return self._grant_authorization

    async def query_cumulative(
        self,
        category: Category,
        window: DayWindow,
        unit: HealthUnit,
    ) -> float | None:
        if not self._available:
            raise ProviderUnavailableError("Health data is not available", provider=self.name)
        if not self._grant_authorization:
            raise ProviderUnavailableError("Read access to health data was denied", provider=self.name)

        total = 0.0
        matched = False
        for sample in self._samples[category]:
            share = sample.share_in(window)
            if share <= 0:
                continue
            matched = True
            total += convert_quantity(sample.value, sample.unit, unit) * share
        return total if matched else None


__all__ = ["HealthSample", "SampleHealthProvider"]
