"""Dictionary-backed goal persistence for tests and ephemeral shells."""

from __future__ import annotations

from typing import Mapping

from fitness_rings.core.exceptions import PersistenceError
from fitness_rings.core.persistence.base import GoalPersistence
from fitness_rings.core.providers.health.types import Category


class InMemoryGoalPersistence(GoalPersistence):
    """Keep goals in a plain dict; optionally fail writes to simulate a broken store."""

    def __init__(self, initial: Mapping[Category, int] | None = None, *, fail_writes: bool = False) -> None:
        self.values: dict[Category, int] = dict(initial or {})
        self.fail_writes = fail_writes
        self.save_calls = 0

    def load_goal(self, category: Category) -> int | None:
        return self.values.get(category)

    def save_goal(self, category: Category, value: int) -> None:
        self.save_calls += 1
        if self.fail_writes:
            raise PersistenceError("Goal store is read-only", operation="save", key=category.value)
        self.values[category] = value

    def save_goals(self, goals: Mapping[Category, int]) -> None:
        self.save_calls += 1
        if self.fail_writes:
            raise PersistenceError("Goal store is read-only", operation="save", key="goals")
        self.values.update(goals)


__all__ = ["InMemoryGoalPersistence"]
