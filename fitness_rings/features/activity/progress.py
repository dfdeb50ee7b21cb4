"""Turn daily totals and goals into ring progress values."""

from __future__ import annotations

import logging
import math
from typing import Mapping, Protocol

from fitness_rings.config.activity import DISPLAY_DECIMALS, DISPLAY_LABELS
from fitness_rings.core.providers.health.types import Category
from fitness_rings.features.activity.schemas import ActivitySnapshot, ProgressResult

logger = logging.getLogger(__name__)


class GoalSource(Protocol):
    def effective_goal(self, category: Category) -> int: ...


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves away from zero instead of Python's round-half-to-even."""

    factor = 10 ** decimals
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value)


def _resolve_goal(goals: GoalSource | Mapping[Category, int], category: Category) -> int:
    if isinstance(goals, Mapping):
        return int(goals[category])
    return int(goals.effective_goal(category))


class ProgressCalculator:
    """Compute one :class:`ProgressResult` per category in ring order."""

    def compute(
        self,
        snapshot: ActivitySnapshot,
        goals: GoalSource | Mapping[Category, int],
        *,
        compact: bool = False,
    ) -> list[ProgressResult]:
        return [
            self.compute_category(category, snapshot.total(category), _resolve_goal(goals, category), compact=compact)
            for category in Category.display_order()
        ]

    def compute_category(
        self,
        category: Category,
        total: float,
        goal: int,
        *,
        compact: bool = False,
    ) -> ProgressResult:
        category = Category(category)
        if goal > 0:
            ratio = total / goal
        else:
            logger.warning(
                "Non-positive goal; reporting zero progress",
                extra={"category": category.value, "goal": goal},
            )
            ratio = 0.0

        decimals = DISPLAY_DECIMALS[category.value]
        display_value = total if decimals is None else round_half_up(total, decimals)

        return ProgressResult(
            category=category,
            total=total,
            goal=goal,
            ratio=ratio,
            fill=min(max(ratio, 0.0), 1.0),
            percent=int(round_half_up(ratio * 100)),
            display_value=display_value,
            label=DISPLAY_LABELS[category.value],
            compact=compact,
        )


__all__ = ["GoalSource", "ProgressCalculator", "round_half_up"]
