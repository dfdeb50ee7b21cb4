"""Base Provider Interface - Abstract Contract for Health Data Sources
This module defines the abstract base class every health data source must
follow.  The engine only depends on this contract; platform bindings (a health
store bridge, a fitness tracker export, the in-process sample provider) live
behind it.

Design Pattern:
    - Abstract base class with @abstractmethod for the cumulative-sum query
    - Availability and authorization default to "present and granted"
    - Providers return ``None`` when a window holds no samples so the caller
      can tell "no data" apart from a failed query, which raises

Provider Lifecycle:
    1. Shell constructs the provider and hands it to the aggregator
    2. ``request_authorization()`` is awaited once at start-up
    3. ``query_cumulative()`` is awaited once per category per aggregation

See Also:
    - fitness_rings/core/providers/health/samples.py: in-process implementation
    - fitness_rings/features/activity/aggregator.py: the consumer
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from fitness_rings.core.providers.health.types import Category, DayWindow, HealthUnit


class BaseHealthProvider(ABC):
    """Base interface for health data providers."""

    name: str = "health"

    def is_available(self) -> bool:
        """Return ``False`` when the platform has no health data capability."""

        return True

    async def request_authorization(self, categories: Iterable[Category]) -> bool:
        """Ask the platform for read access to ``categories``.

        Providers without an authorization step grant access unconditionally.
        """

        return True

    @abstractmethod
    async def query_cumulative(
        self,
        category: Category,
        window: DayWindow,
        unit: HealthUnit,
    ) -> float | None:
        """Return the cumulative sum of ``category`` over ``window`` in ``unit``.

        Returns ``None`` when no samples fall inside the window and raises on
        failure.
        """


__all__ = ["BaseHealthProvider"]
