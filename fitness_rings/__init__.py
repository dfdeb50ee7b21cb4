"""Package initialisation for fitness-rings."""

from __future__ import annotations

import importlib

features = importlib.import_module(".features", __package__)

__version__ = "1.0.0"

__all__ = ["features", "__version__"]
