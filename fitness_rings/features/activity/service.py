"""High level orchestration for the activity rings screen.

:class:`ActivityRingsService` is the object a UI shell drives.  It wires the
cursor, aggregator, goal store and calculator together in the order the
screen needs them: authorise and load today on start-up, re-aggregate
whenever navigation settles on a new day, and compute progress afresh on
every reveal.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fitness_rings.config.activity import GOAL_STEPS
from fitness_rings.core.providers.health.types import Category
from fitness_rings.features.activity.aggregator import ActivityAggregator
from fitness_rings.features.activity.date_cursor import DateCursor
from fitness_rings.features.activity.goal_store import GoalStore, GoalUpdate, goal_range
from fitness_rings.features.activity.progress import ProgressCalculator
from fitness_rings.features.activity.schemas import ActivitySnapshot, ProgressResult

logger = logging.getLogger(__name__)


class ActivityRingsService:
    """Coordinate navigation, aggregation, goals and progress for one screen."""

    def __init__(
        self,
        *,
        aggregator: ActivityAggregator,
        goal_store: GoalStore,
        cursor: DateCursor,
        calculator: ProgressCalculator | None = None,
        compact_steps: bool = True,
    ) -> None:
        self._aggregator = aggregator
        self._goal_store = goal_store
        self._cursor = cursor
        self._calculator = calculator or ProgressCalculator()
        self._compact_steps = compact_steps

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> DateCursor:
        return self._cursor

    @property
    def goals(self) -> GoalStore:
        return self._goal_store

    @property
    def snapshot(self) -> ActivitySnapshot | None:
        """Return the installed snapshot when it belongs to the day on display."""

        current = self._aggregator.current
        if current is None or current.day != self._cursor.current():
            return None
        return current

    async def start(self) -> ActivitySnapshot:
        """Request health data access and load the day on display."""

        await self._aggregator.request_authorization()
        return await self._aggregator.aggregate(self._cursor.current())

    async def refresh(self) -> ActivitySnapshot:
        return await self._aggregator.aggregate(self._cursor.current())

    async def show_previous_day(self) -> ActivitySnapshot:
        day = self._cursor.step_backward()
        return await self._aggregator.aggregate(day)

    async def show_next_day(self) -> ActivitySnapshot | None:
        """Advance one day; returns ``None`` without querying when already on today."""

        day = self._cursor.step_forward()
        if day is None:
            logger.debug("Already showing today; ignoring forward navigation")
            return None
        return await self._aggregator.aggregate(day)

    async def show_today(self) -> ActivitySnapshot:
        day = self._cursor.reset_to_today()
        return await self._aggregator.aggregate(day)

    def reveal(self, *, compact: bool | None = None) -> list[ProgressResult]:
        """Compute progress for the day on display using the current goals.

        While the day's fetch is still in flight every ring reads zero.
        """

        snapshot = self.snapshot
        if snapshot is None:
            day = self._cursor.current()
            snapshot = ActivitySnapshot.empty(day, self._aggregator.window_for(day))
        compact_flag = self._compact_steps if compact is None else compact
        return self._calculator.compute(snapshot, self._goal_store, compact=compact_flag)

    def update_goal(self, category: Category, value: float) -> GoalUpdate:
        return self._goal_store.set_goal(category, value)

    def goal_slider(self, category: Category) -> Mapping[str, int]:
        """Return the slider bounds, step and current value for ``category``."""

        category = Category(category)
        lower, upper = goal_range(category)
        return {
            "min": lower,
            "max": upper,
            "step": GOAL_STEPS[category.value],
            "value": self._goal_store.effective_goal(category),
        }

    def date_label(self) -> str:
        return self._cursor.label()

    def status(self) -> Mapping[str, Any]:
        """Return engine state for diagnostics."""

        current = self._aggregator.current
        return {
            "day": self._cursor.current().isoformat(),
            "today": self._cursor.today.isoformat(),
            "is_today": self._cursor.is_today(),
            "active_day": self._aggregator.active_day.isoformat() if self._aggregator.active_day else None,
            "snapshot_day": current.day.isoformat() if current else None,
            "provider_available": current.provider_available if current else None,
            "goals": {category.value: goal for category, goal in self._goal_store.effective_goals().items()},
        }


__all__ = ["ActivityRingsService"]
