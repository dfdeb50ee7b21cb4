from datetime import date, datetime, timedelta

import pytest

from fitness_rings.core.providers.health.types import Category, DayWindow
from fitness_rings.features.activity.schemas import ActivitySnapshot


@pytest.fixture
def snapshot(tz):
    start = datetime(2024, 6, 11, tzinfo=tz)
    return ActivitySnapshot.build(
        date(2024, 6, 11),
        DayWindow(start=start, end=start + timedelta(days=1)),
        totals={Category.ENERGY: 120.0, Category.STEPS: 0.0, Category.DISTANCE: 1.5},
        availability={Category.ENERGY: True, Category.DISTANCE: True},
        errors={Category.STEPS: "Query for steps failed"},
    )


def test_snapshot_maps_are_read_only(snapshot):
    with pytest.raises(TypeError):
        snapshot.totals[Category.STEPS] = 9000.0
    with pytest.raises(TypeError):
        snapshot.availability[Category.STEPS] = True
    with pytest.raises(TypeError):
        snapshot.errors[Category.ENERGY] = "boom"


def test_snapshot_distinguishes_failure_from_zero(snapshot):
    assert snapshot.total(Category.STEPS) == 0.0
    assert snapshot.is_available(Category.STEPS) is False
    assert snapshot.is_available(Category.ENERGY) is True


def test_snapshot_dumps_plain_dicts(snapshot):
    dumped = snapshot.model_dump(mode="json")

    assert dumped["totals"] == {"energy": 120.0, "steps": 0.0, "distance": 1.5}
    assert dumped["availability"] == {"energy": True, "steps": False, "distance": True}
    assert dumped["errors"] == {"steps": "Query for steps failed"}


def test_snapshot_rejects_missing_or_negative_totals(tz):
    start = datetime(2024, 6, 11, tzinfo=tz)
    window = DayWindow(start=start, end=start + timedelta(days=1))

    with pytest.raises(ValueError):
        ActivitySnapshot.build(date(2024, 6, 11), window, totals={Category.ENERGY: 1.0}, availability={})
    with pytest.raises(ValueError):
        ActivitySnapshot.build(
            date(2024, 6, 11),
            window,
            totals={Category.ENERGY: -1.0, Category.STEPS: 0.0, Category.DISTANCE: 0.0},
            availability={},
        )
