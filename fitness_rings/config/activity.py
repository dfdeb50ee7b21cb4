"""Global default values for activity categories, goals and display."""

from __future__ import annotations

# Goal defaults used when nothing positive is stored
DEFAULT_GOALS = {
    "energy": 150,
    "steps": 5000,
    "distance": 2,
}

# Slider ranges (inclusive) accepted by goal edits
GOAL_RANGES = {
    "energy": (1, 500),
    "steps": (1, 20000),
    "distance": (1, 10),
}

# Goal edits snap to the nearest multiple of these steps
GOAL_STEPS = {
    "energy": 10,
    "steps": 1000,
    "distance": 1,
}

# Canonical unit each category is summed in; not user configurable
CANONICAL_UNITS = {
    "energy": "kcal",
    "steps": "count",
    "distance": "mi",
}

# Ring labels shown beside the numbers
DISPLAY_LABELS = {
    "energy": "WORK",
    "steps": "STEPS",
    "distance": "MOVE",
}

# Outer ring first
DISPLAY_ORDER = ("energy", "steps", "distance")

# Decimal places for the displayed raw value; None leaves the value unrounded
DISPLAY_DECIMALS = {
    "energy": 0,
    "steps": None,
    "distance": 2,
}

DATE_LABEL_FORMAT = "%m / %d / %Y"

DEFAULT_GOALS_FILENAME = "goals.json"
DEFAULT_DATA_DIRNAME = ".fitness_rings"

__all__ = [
    "DEFAULT_GOALS",
    "GOAL_RANGES",
    "GOAL_STEPS",
    "CANONICAL_UNITS",
    "DISPLAY_LABELS",
    "DISPLAY_ORDER",
    "DISPLAY_DECIMALS",
    "DATE_LABEL_FORMAT",
    "DEFAULT_GOALS_FILENAME",
    "DEFAULT_DATA_DIRNAME",
]
