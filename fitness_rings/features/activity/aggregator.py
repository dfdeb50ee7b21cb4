"""Day-scoped fan-out/fan-in aggregation of activity totals.

Every :meth:`ActivityAggregator.aggregate` call starts a new *generation*.
The three category queries run as concurrent tasks; each completion is
tagged with the requested day and generation and handed to a
:class:`SnapshotReducer`, which is the only code that touches the current
snapshot.  Completions for anything other than the active generation are
dropped, so a slow fetch for a day the user has already paged away from can
never overwrite the newer day.  All of this runs on one event loop and needs
no locks.

Failure handling:
    - ``None`` from the provider means "no samples" and counts as ``0.0``
    - an exception from one category's query zeroes that category only and
      marks it unavailable
    - a provider that is missing or unauthorised yields an all-zero snapshot
      with ``provider_available=False`` and issues no queries
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Callable, Mapping

from fitness_rings.core.exceptions import ProviderUnavailableError, QueryFailureError
from fitness_rings.core.providers.health.base import BaseHealthProvider
from fitness_rings.core.providers.health.types import Category, DayWindow
from fitness_rings.features.activity.schemas import ActivitySnapshot
from fitness_rings.features.activity.windows import build_day_window, local_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True, slots=True)
class CategoryOutcome:
    """Result of one category query after failure handling."""

    category: Category
    total: float
    available: bool
    error: str | None = None
    provider_unavailable: bool = False


@dataclass(frozen=True, slots=True)
class CategoryCompletion:
    """A category outcome tagged with the request it belongs to."""

    day: date
    generation: int
    outcome: CategoryOutcome


def _snapshot_from_outcomes(
    day: date,
    window: DayWindow,
    outcomes: Mapping[Category, CategoryOutcome],
    *,
    provider_available: bool = True,
) -> ActivitySnapshot:
    if outcomes and all(outcome.provider_unavailable for outcome in outcomes.values()):
        provider_available = False
    return ActivitySnapshot.build(
        day,
        window,
        totals={category: outcomes[category].total for category in Category},
        availability={category: outcomes[category].available for category in Category},
        errors={
            category: outcome.error
            for category, outcome in outcomes.items()
            if outcome.error is not None
        },
        provider_available=provider_available,
    )


class SnapshotReducer:
    """Single owner of the current snapshot.

    ``begin`` activates a request; ``apply`` folds in one completion and
    installs a fresh snapshot once all categories of the active request are in.
    """

    def __init__(self) -> None:
        self.current: ActivitySnapshot | None = None
        self._active_day: date | None = None
        self._active_generation = 0
        self._window: DayWindow | None = None
        self._provider_available = True
        self._pending: dict[Category, CategoryOutcome] = {}

    @property
    def active_day(self) -> date | None:
        return self._active_day

    def begin(self, day: date, generation: int, window: DayWindow, *, provider_available: bool = True) -> None:
        self._active_day = day
        self._active_generation = generation
        self._window = window
        self._provider_available = provider_available
        self._pending = {}

    def is_active(self, day: date, generation: int) -> bool:
        return day == self._active_day and generation == self._active_generation

    def apply(self, completion: CategoryCompletion) -> ActivitySnapshot | None:
        """Fold ``completion`` in; return the snapshot if this completed the active request."""

        if not self.is_active(completion.day, completion.generation):
            logger.debug(
                "Discarding stale completion",
                extra={
                    "category": completion.outcome.category.value,
                    "requested_day": completion.day.isoformat(),
                    "active_day": self._active_day.isoformat() if self._active_day else None,
                },
            )
            return None

        self._pending[completion.outcome.category] = completion.outcome
        if len(self._pending) < len(Category) or self._window is None:
            return None

        snapshot = _snapshot_from_outcomes(
            completion.day,
            self._window,
            self._pending,
            provider_available=self._provider_available,
        )
        self.current = snapshot
        self._pending = {}
        return snapshot


class ActivityAggregator:
    """Query the provider for a day and reduce the results to one snapshot."""

    def __init__(
        self,
        provider: BaseHealthProvider,
        *,
        tz: tzinfo | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._provider = provider
        self._tz = tz
        self._clock: Clock = clock or (lambda: local_now(tz))
        self._reducer = SnapshotReducer()
        self._generation = 0
        self._authorized: bool | None = None

    @property
    def current(self) -> ActivitySnapshot | None:
        return self._reducer.current

    @property
    def active_day(self) -> date | None:
        return self._reducer.active_day

    async def request_authorization(self) -> bool:
        """Ask the provider for read access to every category once."""

        if not self._provider.is_available():
            logger.warning("Health data is not available on this platform", extra={"provider": self._provider.name})
            self._authorized = False
            return False
        try:
            granted = bool(await self._provider.request_authorization(tuple(Category)))
        except Exception as exc:
            logger.warning(
                "Health data authorization failed",
                extra={"provider": self._provider.name},
                exc_info=exc,
            )
            granted = False
        if not granted:
            logger.warning("Health data authorization was not granted", extra={"provider": self._provider.name})
        self._authorized = granted
        return granted

    def window_for(self, day: date) -> DayWindow:
        return build_day_window(day, now=self._clock(), tz=self._tz)

    async def aggregate(self, day: date) -> ActivitySnapshot:
        """Return totals for ``day``.

        The returned snapshot always describes ``day``; it becomes
        :attr:`current` only if no newer request started while it was in flight.
        """

        window = self.window_for(day)
        self._generation += 1
        generation = self._generation
        provider_available = self._provider.is_available() and self._authorized is not False
        self._reducer.begin(day, generation, window, provider_available=provider_available)

        if not provider_available:
            logger.info(
                "Health provider unavailable; reporting zero activity",
                extra={"day": day.isoformat(), "provider": self._provider.name},
            )
            outcomes = {
                category: CategoryOutcome(
                    category=category,
                    total=0.0,
                    available=False,
                    error="Health data is unavailable",
                    provider_unavailable=True,
                )
                for category in Category
            }
            for outcome in outcomes.values():
                self._reducer.apply(CategoryCompletion(day=day, generation=generation, outcome=outcome))
            return _snapshot_from_outcomes(day, window, outcomes, provider_available=False)

        tasks = [asyncio.create_task(self._query(category, window)) for category in Category]
        outcomes: dict[Category, CategoryOutcome] = {}
        for next_done in asyncio.as_completed(tasks):
            outcome = await next_done
            outcomes[outcome.category] = outcome
            self._reducer.apply(CategoryCompletion(day=day, generation=generation, outcome=outcome))

        snapshot = _snapshot_from_outcomes(day, window, outcomes)
        if not self._reducer.is_active(day, generation):
            logger.debug("Aggregation superseded before completion", extra={"day": day.isoformat()})
        return snapshot

    async def _query(self, category: Category, window: DayWindow) -> CategoryOutcome:
        try:
            raw_total = await self._provider.query_cumulative(category, window, category.unit)
            total = None if raw_total is None else float(raw_total)
        except ProviderUnavailableError as exc:
            logger.warning(
                "Health provider unavailable for category",
                extra={"category": category.value, "provider": self._provider.name},
            )
            return CategoryOutcome(category, 0.0, False, error=exc.message, provider_unavailable=True)
        except Exception as exc:
            failure = QueryFailureError(
                f"Query for {category.value} failed: {exc}",
                category=category.value,
                provider=self._provider.name,
                original_error=exc,
            )
            logger.warning(
                "Health query failed; treating category as zero",
                extra={"category": category.value, "provider": self._provider.name},
                exc_info=exc,
            )
            return CategoryOutcome(category, 0.0, False, error=failure.message)

        if total is None:
            return CategoryOutcome(category, 0.0, True)

        if not math.isfinite(total):
            logger.warning(
                "Health query returned a non-finite total; treating category as zero",
                extra={"category": category.value, "total": repr(total)},
            )
            return CategoryOutcome(category, 0.0, False, error=f"Non-finite total for {category.value}")
        if total < 0:
            logger.warning(
                "Health query returned a negative total; clamping to zero",
                extra={"category": category.value, "total": total},
            )
            total = 0.0
        return CategoryOutcome(category, total, True)


__all__ = [
    "ActivityAggregator",
    "CategoryCompletion",
    "CategoryOutcome",
    "SnapshotReducer",
]
