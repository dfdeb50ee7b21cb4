"""Daily activity aggregation and goal-progress engine."""

from __future__ import annotations

from fitness_rings.core.providers.health.types import Category, DayWindow

from .aggregator import ActivityAggregator, CategoryCompletion, CategoryOutcome, SnapshotReducer
from .date_cursor import DateCursor
from .dependencies import build_activity_service, build_goal_store
from .goal_store import GoalStore, GoalUpdate, quantize_goal
from .progress import ProgressCalculator
from .schemas import ActivitySnapshot, ProgressResult
from .service import ActivityRingsService
from .windows import build_day_window

__all__ = [
    "ActivityAggregator",
    "ActivityRingsService",
    "ActivitySnapshot",
    "Category",
    "CategoryCompletion",
    "CategoryOutcome",
    "DateCursor",
    "DayWindow",
    "GoalStore",
    "GoalUpdate",
    "ProgressCalculator",
    "ProgressResult",
    "SnapshotReducer",
    "build_activity_service",
    "build_day_window",
    "build_goal_store",
    "quantize_goal",
]
