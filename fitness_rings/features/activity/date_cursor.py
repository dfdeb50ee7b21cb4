"""Track the day on display and keep it from moving past today."""

from __future__ import annotations

import logging
from datetime import date, timedelta, tzinfo

from fitness_rings.config.activity import DATE_LABEL_FORMAT
from fitness_rings.features.activity.windows import local_today

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class DateCursor:
    """Calendar cursor bounded above by the day it was created on.

    Navigation only moves the cursor; re-aggregating for the new day is the
    caller's job.
    """

    def __init__(self, today: date | None = None, *, tz: tzinfo | None = None) -> None:
        self._today = today if today is not None else local_today(tz)
        self._current = self._today

    @property
    def today(self) -> date:
        return self._today

    def current(self) -> date:
        return self._current

    def is_today(self) -> bool:
        return self._current == self._today

    def step_backward(self) -> date:
        self._current = self._current - _ONE_DAY
        logger.debug("Cursor moved back", extra={"day": self._current.isoformat()})
        return self._current

    def step_forward(self) -> date | None:
        """Advance one day, or return ``None`` and stay put when that would pass today."""

        candidate = self._current + _ONE_DAY
        if candidate > self._today:
            return None
        self._current = candidate
        logger.debug("Cursor moved forward", extra={"day": self._current.isoformat()})
        return self._current

    def reset_to_today(self) -> date:
        self._current = self._today
        return self._current

    def label(self) -> str:
        """Return the header date stamp, e.g. ``"11 / 17 / 2020"``."""

        return self._current.strftime(DATE_LABEL_FORMAT)


__all__ = ["DateCursor"]
