"""Goal persistence backends."""

from .base import GoalPersistence
from .json_store import GoalDocument, JsonGoalPersistence
from .memory import InMemoryGoalPersistence

__all__ = [
    "GoalDocument",
    "GoalPersistence",
    "InMemoryGoalPersistence",
    "JsonGoalPersistence",
]
