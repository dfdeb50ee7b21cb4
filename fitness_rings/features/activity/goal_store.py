"""Per-category goal values with defaults, quantization and persistence.

Goal edits come from sliders, so every update is snapped to the category's
step and then clamped into its slider range before it is stored.  Halves
round up (``145`` kcal becomes ``150``).  Persistence is synchronous and
best effort: a failed save is logged and reported on the returned
:class:`GoalUpdate`, while the in-memory value still changes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

from fitness_rings.config.activity import DEFAULT_GOALS, GOAL_RANGES, GOAL_STEPS
from fitness_rings.core.exceptions import PersistenceError, ValidationError
from fitness_rings.core.persistence.base import GoalPersistence
from fitness_rings.core.persistence.memory import InMemoryGoalPersistence
from fitness_rings.core.providers.health.types import Category

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GoalUpdate:
    """Outcome of a single goal edit."""

    category: Category
    requested: float
    value: int
    persisted: bool

    @property
    def adjusted(self) -> bool:
        """``True`` when quantization or clamping changed the requested value."""

        return self.value != self.requested


def default_goal(category: Category) -> int:
    return DEFAULT_GOALS[Category(category).value]


def goal_range(category: Category) -> tuple[int, int]:
    return GOAL_RANGES[Category(category).value]


def quantize_goal(category: Category, value: float) -> int:
    """Snap ``value`` to the category step, then clamp it into the slider range."""

    key = Category(category).value
    step = GOAL_STEPS[key]
    lower, upper = GOAL_RANGES[key]
    if math.isinf(value):
        return upper if value > 0 else lower
    snapped = math.floor(value / step + 0.5) * step
    return int(min(max(snapped, lower), upper))


def _coerce_category(category: Any) -> Category:
    try:
        return Category(category)
    except ValueError as exc:
        raise ValidationError(f"Unknown activity category {category!r}", field="category") from exc


def _coerce_value(category: Category, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(
            f"Goal for {category.value} must be a number, got {type(value).__name__}",
            field=category.value,
        )
    try:
        numeric = float(value)
    except OverflowError:
        # Beyond float range; quantize_goal clamps infinities to the slider bound.
        return math.inf if value > 0 else -math.inf
    if not math.isfinite(numeric):
        raise ValidationError(f"Goal for {category.value} must be finite", field=category.value)
    return numeric


class GoalStore:
    """Hold effective goals for every category for the life of the process."""

    def __init__(self, persistence: GoalPersistence | None = None) -> None:
        self._persistence = persistence if persistence is not None else InMemoryGoalPersistence()
        self._values: dict[Category, int] = {}
        self._load()

    def _load(self) -> None:
        for category in Category:
            try:
                stored = self._persistence.load_goal(category)
            except PersistenceError as exc:
                logger.warning(
                    "Failed to load stored goal; using default",
                    extra={"category": category.value, "operation": exc.operation},
                    exc_info=exc,
                )
                continue
            if stored is None:
                continue
            if isinstance(stored, bool) or not isinstance(stored, int):
                logger.warning(
                    "Ignoring non-integer stored goal",
                    extra={"category": category.value, "stored": repr(stored)},
                )
                continue
            self._values[category] = stored

    def raw_goal(self, category: Category) -> int:
        """Return the stored value, or ``0`` when nothing has been stored."""

        return self._values.get(_coerce_category(category), 0)

    def effective_goal(self, category: Category) -> int:
        category = _coerce_category(category)
        stored = self._values.get(category, 0)
        if stored > 0:
            return stored
        return default_goal(category)

    def effective_goals(self) -> dict[Category, int]:
        return {category: self.effective_goal(category) for category in Category}

    def set_goal(self, category: Category, value: float) -> GoalUpdate:
        category = _coerce_category(category)
        requested = _coerce_value(category, value)
        stored = quantize_goal(category, requested)
        self._values[category] = stored

        persisted = True
        try:
            self._persistence.save_goals(dict(self._values))
        except PersistenceError as exc:
            persisted = False
            logger.warning(
                "Failed to persist goal; keeping in-memory value",
                extra={"category": category.value, "value": stored},
                exc_info=exc,
            )

        if stored != requested:
            logger.info(
                "Adjusted goal to slider step and range",
                extra={"category": category.value, "requested": requested, "stored": stored},
            )
        return GoalUpdate(category=category, requested=requested, value=stored, persisted=persisted)


__all__ = ["GoalStore", "GoalUpdate", "default_goal", "goal_range", "quantize_goal"]
