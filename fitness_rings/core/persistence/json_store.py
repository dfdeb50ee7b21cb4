"""JSON-file persistence for goal values.

Goals live in a small settings document keyed by category so they survive
restarts.  Every save rewrites the whole document through a temporary file
and an atomic rename, so a crash mid-write leaves the previous goals intact.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from fitness_rings.core.exceptions import PersistenceError
from fitness_rings.core.persistence.base import GoalPersistence
from fitness_rings.core.providers.health.types import Category

logger = logging.getLogger(__name__)


class GoalDocument(BaseModel):
    """On-disk layout of the goal settings file."""

    model_config = ConfigDict(extra="ignore")

    version: int = 1
    goals: dict[Category, int] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _accept_flat_layout(cls, data: Any) -> Any:
        """Read a bare ``{"energy": 300, ...}`` mapping as the goals section."""

        if isinstance(data, Mapping) and "goals" not in data and "version" not in data:
            return {"goals": dict(data)}
        return data

    @field_validator("goals", mode="before")
    @classmethod
    def _drop_invalid_goals(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value

        goals: dict[Category, int] = {}
        for key, goal in value.items():
            try:
                category = Category(key)
            except ValueError:
                logger.warning("Ignoring stored goal for unknown category", extra={"key": repr(key)})
                continue
            if isinstance(goal, bool) or not isinstance(goal, int):
                logger.warning(
                    "Ignoring non-integer stored goal",
                    extra={"category": category.value, "stored": repr(goal)},
                )
                continue
            goals[category] = goal
        return goals


def _ensure_parent(path: Path) -> None:
    """Create the directory that will hold the goal file if missing."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PersistenceError(
            f"Unable to create goal directory {path.parent}", operation="mkdir"
        ) from exc


@dataclass(slots=True)
class JsonGoalPersistence(GoalPersistence):
    """Simple JSON-backed goal persistence."""

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path).expanduser()

    def load(self) -> GoalDocument:
        """Load the goal document, returning an empty one if the file does not exist."""

        if not self.path.exists():
            return GoalDocument()

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:  # pragma: no cover - raced deletion
            return GoalDocument()
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Failed to read goal file {self.path}", operation="load") from exc

        try:
            return GoalDocument.model_validate(data)
        except PydanticValidationError as exc:
            raise PersistenceError(f"Goal file {self.path} is malformed", operation="load") from exc

    def load_goal(self, category: Category) -> int | None:
        return self.load().goals.get(category)

    def save_goal(self, category: Category, value: int) -> None:
        try:
            document = self.load()
        except PersistenceError:
            logger.warning("Replacing unreadable goal file", extra={"path": str(self.path)})
            document = GoalDocument()

        document.goals[category] = int(value)
        self._write(document)

    def save_goals(self, goals: Mapping[Category, int]) -> None:
        """Replace the stored goals with ``goals`` without reading the file first."""

        self._write(GoalDocument(goals={category: int(value) for category, value in goals.items()}))

    def _write(self, document: GoalDocument) -> None:
        _ensure_parent(self.path)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        payload = {
            "version": document.version,
            "goals": {category.value: goal for category, goal in sorted(document.goals.items())},
        }
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(
                f"Failed to persist goals to {self.path}", operation="save", key="goals"
            ) from exc


__all__ = ["GoalDocument", "JsonGoalPersistence"]
