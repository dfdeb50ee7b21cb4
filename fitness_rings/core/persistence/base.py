"""Key/value contract for persisting goal values between sessions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from fitness_rings.core.providers.health.types import Category


class GoalPersistence(ABC):
    """Store one integer per category.

    Implementations raise :class:`~fitness_rings.core.exceptions.PersistenceError`
    when the backing store cannot be read or written.
    """

    @abstractmethod
    def load_goal(self, category: Category) -> int | None:
        """Return the stored goal or ``None`` when nothing was saved."""

    @abstractmethod
    def save_goal(self, category: Category, value: int) -> None:
        """Persist ``value`` for ``category``."""

    def save_goals(self, goals: Mapping[Category, int]) -> None:
        """Persist every goal in ``goals``; backends with a single document override this."""

        for category, value in goals.items():
            self.save_goal(category, value)


__all__ = ["GoalPersistence"]
