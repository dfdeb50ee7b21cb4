"""Pydantic models exchanged with the presentation layer."""

from .progress import ProgressResult
from .snapshot import ActivitySnapshot

__all__ = ["ActivitySnapshot", "ProgressResult"]
