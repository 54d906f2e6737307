"""Pure stateless feature functions — date math and counting only, never raises."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterable, Sequence

from app.tracker.models import ALL_GOALS, Goal, MotivationTier


def count_pulled(status: Sequence[bool] | None, lever_count: int) -> int:
    """Number of True entries among the first `lever_count` positions.

    Positions at or beyond the goal's current lever count are stale leftovers
    from before an edit and are never counted. A missing status counts as 0.
    """
    if not status or lever_count <= 0:
        return 0
    return sum(1 for s in status[:lever_count] if s)


def ratio_pct(pulled: int, possible: int) -> float:
    """Percentage pulled/possible rounded to one decimal; 0.0 when possible is 0."""
    if possible <= 0:
        return 0.0
    return round((pulled / possible) * 100.0, 1)


def motivation_tier(count: int) -> MotivationTier:
    """Map a day's pulled count onto the four motivational thresholds."""
    if count <= 0:
        return MotivationTier.starting
    if count < 3:
        return MotivationTier.building
    if count < 6:
        return MotivationTier.steady
    return MotivationTier.flowing


def week_bounds(reference: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing `reference`."""
    start = reference - timedelta(days=reference.weekday())
    return start, start + timedelta(days=6)


def week_days(reference: date) -> list[date]:
    start, _ = week_bounds(reference)
    return [start + timedelta(days=i) for i in range(7)]


def month_days(year: int, month: int) -> list[date]:
    """Every calendar day of the month, in order."""
    _, last = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, last + 1)]


def is_future(day: date, today: date) -> bool:
    return day > today


def select_goals(goals: Iterable[Goal], goal_filter: str | None = ALL_GOALS) -> list[Goal]:
    """Goals covered by a filter: every goal for "all"/None, else the one matching id."""
    if goal_filter is None or goal_filter == ALL_GOALS:
        return list(goals)
    return [g for g in goals if g.id == goal_filter]


def lever_capacity(goals: Iterable[Goal]) -> int:
    """Sum of current lever counts, i.e. the most levers that can be pulled in one day."""
    return sum(len(g.levers) for g in goals)
