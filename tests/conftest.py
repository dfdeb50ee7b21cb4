"""Test configuration helpers."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Mapping
from zoneinfo import ZoneInfo

import pytest

# Explicitly opt-in to the async plugins we rely on. Some execution environments
# disable plugin auto-discovery via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD`` which
# prevents AnyIO's plugin from being loaded even if the package is installed.
pytest_plugins = ("anyio",)

# Ensure the repository root is importable so ``import fitness_rings`` works
# without an editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fitness_rings.core.persistence.memory import InMemoryGoalPersistence  # noqa: E402
from fitness_rings.core.providers.health.base import BaseHealthProvider  # noqa: E402
from fitness_rings.core.providers.health.types import Category, DayWindow, HealthUnit  # noqa: E402

NEW_YORK = ZoneInfo("America/New_York")


class ScriptedHealthProvider(BaseHealthProvider):
    """Provider double returning per-day totals, optionally held back until released."""

    name = "scripted"

    def __init__(
        self,
        totals: Mapping[date, Mapping[Category, float | None]] | None = None,
        *,
        failures: Mapping[Category, Exception] | None = None,
        available: bool = True,
        tz=NEW_YORK,
    ) -> None:
        self.totals = {day: dict(values) for day, values in (totals or {}).items()}
        self.failures = dict(failures or {})
        self.available = available
        self.tz = tz
        self.calls: list[tuple[Category, DayWindow, HealthUnit]] = []
        self._gates: dict[date, asyncio.Event] = {}

    def hold(self, day: date) -> None:
        """Block queries for ``day`` until :meth:`release` is called."""

        self._gates[day] = asyncio.Event()

    def release(self, day: date) -> None:
        self._gates[day].set()

    def is_available(self) -> bool:
        return self.available

    async def query_cumulative(self, category: Category, window: DayWindow, unit: HealthUnit) -> float | None:
        self.calls.append((category, window, unit))
        day = window.start.astimezone(self.tz).date()
        gate = self._gates.get(day)
        if gate is not None:
            await gate.wait()
        if category in self.failures:
            raise self.failures[category]
        return self.totals.get(day, {}).get(category)


@pytest.fixture
def anyio_backend() -> str:
    """Default AnyIO backend used when tests do not override the fixture."""

    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def suppress_asyncio_debug_logging() -> None:
    """Prevent asyncio debug logs from writing to closed pytest capture streams."""

    logger = logging.getLogger("asyncio")
    if logger.getEffectiveLevel() < logging.INFO:
        logger.setLevel(logging.INFO)


@pytest.fixture
def tz() -> ZoneInfo:
    return NEW_YORK


@pytest.fixture
def fixed_now(tz) -> datetime:
    """Mid-afternoon on the reference "today" used across the suite."""

    return datetime(2024, 6, 12, 15, 30, tzinfo=tz)


@pytest.fixture
def clock(fixed_now) -> Callable[[], datetime]:
    return lambda: fixed_now


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def memory_persistence() -> InMemoryGoalPersistence:
    return InMemoryGoalPersistence()


@pytest.fixture
def scripted_provider_factory() -> Callable[..., ScriptedHealthProvider]:
    return ScriptedHealthProvider
