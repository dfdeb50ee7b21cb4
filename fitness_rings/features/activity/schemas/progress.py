"""Derived ring progress values; computed on every reveal and never stored."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fitness_rings.core.providers.health.types import Category


def format_number(value: float, decimals: int) -> str:
    """Render ``value`` with at most ``decimals`` places and no trailing zeros."""

    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class ProgressResult(BaseModel):
    """Progress of one category towards its goal.

    ``ratio`` and ``percent`` are not clamped so a user at 120% sees 120%;
    ``fill`` is the ring fraction and always lies in ``[0, 1]``.
    """

    model_config = ConfigDict(frozen=True)

    category: Category
    total: float
    goal: int
    ratio: float
    fill: float
    percent: int
    display_value: float
    label: str
    compact: bool = False

    def value_text(self, compact: bool | None = None) -> str:
        """Return the ``value/goal`` part of the ring label."""

        compact = self.compact if compact is None else compact
        if self.category is Category.ENERGY:
            return f"{self.display_value:.0f}/{self.goal}"
        if self.category is Category.STEPS:
            if compact:
                return f"{format_number(self.display_value / 1000, 2)}k/{format_number(self.goal / 1000, 2)}k"
            return f"{self.display_value:.0f}/{self.goal}"
        return f"{format_number(self.display_value, 2)}/{self.goal}"

    def display_text(self, compact: bool | None = None) -> str:
        """Return the full ring label, e.g. ``"STEPS:  4.2k/5k | 84%"``."""

        return f"{self.label}:  {self.value_text(compact)} | {self.percent}%"


__all__ = ["ProgressResult", "format_number"]
