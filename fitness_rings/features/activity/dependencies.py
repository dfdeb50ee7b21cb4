"""Construction helpers wiring settings into the activity rings service."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

from fitness_rings.core.persistence.base import GoalPersistence
from fitness_rings.core.persistence.json_store import JsonGoalPersistence
from fitness_rings.core.providers.health.base import BaseHealthProvider
from fitness_rings.features.activity.aggregator import ActivityAggregator
from fitness_rings.features.activity.date_cursor import DateCursor
from fitness_rings.features.activity.goal_store import GoalStore
from fitness_rings.features.activity.service import ActivityRingsService
from fitness_rings.features.activity.settings import ActivitySettings, get_activity_settings
from fitness_rings.features.activity.windows import local_now


def build_goal_store(
    settings: ActivitySettings | None = None,
    *,
    persistence: GoalPersistence | None = None,
) -> GoalStore:
    """Return a goal store backed by ``persistence`` or the configured JSON file."""

    if persistence is None:
        settings = settings or get_activity_settings()
        persistence = JsonGoalPersistence(settings.goals_path)
    return GoalStore(persistence)


def build_activity_service(
    provider: BaseHealthProvider,
    *,
    settings: ActivitySettings | None = None,
    goal_store: GoalStore | None = None,
    clock: Callable[[], datetime] | None = None,
    today: date | None = None,
) -> ActivityRingsService:
    """Assemble an :class:`ActivityRingsService` for ``provider``.

    ``today`` defaults to the clock's current local date; the cursor never
    moves past it for the life of the service.
    """

    settings = settings or get_activity_settings()
    tz = settings.timezone
    clock = clock or (lambda: local_now(tz))
    if today is None:
        now = clock()
        today = now.astimezone(tz).date() if tz is not None else now.astimezone().date()

    return ActivityRingsService(
        aggregator=ActivityAggregator(provider, tz=tz, clock=clock),
        goal_store=goal_store or build_goal_store(settings),
        cursor=DateCursor(today, tz=tz),
        compact_steps=settings.compact_steps,
    )


__all__ = ["build_activity_service", "build_goal_store"]
