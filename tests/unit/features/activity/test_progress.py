"""Tests for progress computation and ring labels."""

from datetime import date, datetime, timedelta

import pytest

from fitness_rings.core.providers.health.types import Category, DayWindow
from fitness_rings.features.activity.goal_store import GoalStore
from fitness_rings.features.activity.progress import ProgressCalculator, round_half_up
from fitness_rings.features.activity.schemas import ActivitySnapshot


@pytest.fixture
def calculator():
    return ProgressCalculator()


def _snapshot(tz, totals):
    start = datetime(2024, 6, 11, tzinfo=tz)
    return ActivitySnapshot.build(
        date(2024, 6, 11),
        DayWindow(start=start, end=start + timedelta(days=1)),
        totals=totals,
        availability={category: True for category in Category},
    )


def test_round_half_up():
    assert round_half_up(84.5) == 85
    assert round_half_up(2.5) == 3
    assert round_half_up(3.14159, 2) == pytest.approx(3.14)


def test_reference_day(tz, calculator):
    snapshot = _snapshot(tz, {Category.ENERGY: 120.0, Category.STEPS: 4230.0, Category.DISTANCE: 1.87})
    goals = {Category.ENERGY: 150, Category.STEPS: 5000, Category.DISTANCE: 2}

    results = calculator.compute(snapshot, goals, compact=True)

    energy, steps, distance = results
    assert [result.category for result in results] == [Category.ENERGY, Category.STEPS, Category.DISTANCE]
    assert (energy.fill, energy.percent) == (pytest.approx(0.8), 80)
    assert (steps.fill, steps.percent) == (pytest.approx(0.846), 85)
    assert (distance.fill, distance.percent) == (pytest.approx(0.935), 94)
    assert energy.display_text() == "WORK:  120/150 | 80%"
    assert steps.display_text() == "STEPS:  4.23k/5k | 85%"
    assert distance.display_text() == "MOVE:  1.87/2 | 94%"


def test_goal_reached_fills_completely(calculator):
    result = calculator.compute_category(Category.ENERGY, 150.0, 150)

    assert result.fill == 1.0
    assert result.percent == 100


def test_overachievement_clamps_fill_only(calculator):
    result = calculator.compute_category(Category.STEPS, 12000.0, 10000)

    assert result.fill == 1.0
    assert result.ratio == pytest.approx(1.2)
    assert result.percent == 120
    assert result.display_text(compact=False) == "STEPS:  12000/10000 | 120%"


def test_zero_total(calculator):
    result = calculator.compute_category(Category.DISTANCE, 0.0, 2)

    assert result.fill == 0.0
    assert result.percent == 0
    assert result.value_text() == "0/2"


def test_zero_goal_reports_zero_progress(calculator):
    result = calculator.compute_category(Category.ENERGY, 200.0, 0)

    assert result.ratio == 0.0
    assert result.fill == 0.0
    assert result.percent == 0


def test_display_values_are_rounded_per_category(calculator):
    energy = calculator.compute_category(Category.ENERGY, 99.5, 150)
    distance = calculator.compute_category(Category.DISTANCE, 1.875, 2)
    steps = calculator.compute_category(Category.STEPS, 4230.6, 5000)

    assert energy.display_value == 100
    assert energy.value_text() == "100/150"
    assert distance.display_value == pytest.approx(1.88)
    assert steps.display_value == 4230.6


def test_fill_is_monotonic_in_total(calculator):
    fills = [calculator.compute_category(Category.STEPS, float(total), 5000).fill for total in range(0, 8000, 250)]

    assert fills == sorted(fills)
    assert all(0.0 <= fill <= 1.0 for fill in fills)


def test_goal_store_as_goal_source(tz, calculator, memory_persistence):
    store = GoalStore(memory_persistence)
    store.set_goal(Category.STEPS, 8000)
    snapshot = _snapshot(tz, {Category.ENERGY: 75.0, Category.STEPS: 4000.0, Category.DISTANCE: 3.0})

    energy, steps, distance = calculator.compute(snapshot, store)

    assert energy.percent == 50
    assert steps.percent == 50
    assert distance.fill == 1.0
    assert distance.percent == 150


def test_over_goal_day(tz, calculator):
    snapshot = _snapshot(tz, {Category.ENERGY: 225.0, Category.STEPS: 4200.0, Category.DISTANCE: 1.5})
    goals = {Category.ENERGY: 150, Category.STEPS: 5000, Category.DISTANCE: 2}

    results = calculator.compute(snapshot, goals)

    assert [result.ratio for result in results] == pytest.approx([1.5, 0.84, 0.75])
    assert [result.fill for result in results] == pytest.approx([1.0, 0.84, 0.75])
    assert [result.percent for result in results] == [150, 84, 75]


def test_compact_steps_label_caps_decimals(calculator):
    result = calculator.compute_category(Category.STEPS, 4235.7, 5000, compact=True)

    assert result.display_text() == "STEPS:  4.24k/5k | 85%"
