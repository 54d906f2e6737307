"""Aggregate builders — daily totals, weekly summary, monthly series.

Everything is derived on read from the goal store and the log store. Only goals
currently in the goal store are counted, and only up to each goal's current
lever count; orphaned and stale log entries are ignored.
Missing data never raises.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from app.tracker import features
from app.tracker.models import (
    ALL_GOALS,
    DailyTotal,
    Goal,
    MonthlyPoint,
    MonthlySeries,
    SeriesMode,
    WeeklySummary,
)
from app.tracker.state import TrackerState


def _pulled_on(state: TrackerState, day: date, goals: Iterable[Goal]) -> int:
    entries = state.day_logs(day)
    return sum(features.count_pulled(entries.get(g.id), len(g.levers)) for g in goals)


def build_daily_total(state: TrackerState, day: date) -> DailyTotal:
    pulled = _pulled_on(state, day, state.goals)
    possible = features.lever_capacity(state.goals)
    return DailyTotal(
        date=day,
        pulled=pulled,
        possible=possible,
        ratio_pct=features.ratio_pct(pulled, possible),
        motivation=features.motivation_tier(pulled),
    )


def build_weekly_summary(
    state: TrackerState,
    reference: date,
    goal_filter: str = ALL_GOALS,
) -> WeeklySummary:
    """Monday–Sunday totals for the week containing `reference`."""
    goals = features.select_goals(state.goals, goal_filter)
    week_start, week_end = features.week_bounds(reference)

    pulled = sum(_pulled_on(state, day, goals) for day in features.week_days(reference))
    possible = features.lever_capacity(goals) * 7

    return WeeklySummary(
        goal_filter=goal_filter,
        week_start=week_start,
        week_end=week_end,
        pulled=pulled,
        possible=possible,
        ratio_pct=features.ratio_pct(pulled, possible),
    )


def build_monthly_series(
    state: TrackerState,
    today: date,
    goal_filter: str = ALL_GOALS,
    mode: SeriesMode = SeriesMode.cumulative,
) -> MonthlySeries:
    """Per-goal series over the month containing `today`.

    Days after `today` carry None for every goal so charts break the line
    instead of plotting zeros. Values are keyed by the goal's area label; when
    two goals share a label the later one wins.
    """
    goals = features.select_goals(state.goals, goal_filter)
    running: dict[str, int] = {g.id: 0 for g in goals}
    points: list[MonthlyPoint] = []

    for day in features.month_days(today.year, today.month):
        values: dict[str, int | None] = {}
        future = features.is_future(day, today)
        entries = {} if future else state.day_logs(day)

        for goal in goals:
            if future:
                values[goal.area] = None
                continue
            pulled = features.count_pulled(entries.get(goal.id), len(goal.levers))
            running[goal.id] += pulled
            values[goal.area] = running[goal.id] if mode == SeriesMode.cumulative else pulled

        points.append(
            MonthlyPoint(
                date=day,
                day=str(day.day),
                full_date=day.strftime("%d/%m"),
                values=values,
            )
        )

    return MonthlySeries(
        year=today.year,
        month=today.month,
        mode=mode,
        goal_filter=goal_filter,
        areas=list(dict.fromkeys(g.area for g in goals)),
        points=points,
    )
