"""Tests for the data model and aggregate view contracts."""

from datetime import date

from app.tracker.models import (
    DailyTotal,
    Goal,
    GoalDraft,
    MonthlyPoint,
    MonthlySeries,
    MotivationTier,
    SeriesMode,
    WeeklySummary,
)


class TestGoal:
    def test_levers_default_empty(self):
        goal = Goal(id="goal-1", area="Health", color="#3b82f6")
        assert goal.levers == []

    def test_roundtrip_json(self):
        goal = Goal.model_validate(
            {"id": "goal-1", "area": "Health", "color": "#3b82f6", "levers": [{"id": "l-1-0", "text": "Walk"}]}
        )
        data = goal.model_dump(mode="json")
        assert data["levers"][0] == {"id": "l-1-0", "text": "Walk"}


class TestGoalDraft:
    def test_defaults(self):
        draft = GoalDraft()
        assert draft.area == ""
        assert draft.color == "#3b82f6"
        assert draft.levers == []


class TestAggregateDefaults:
    def test_daily_total(self):
        total = DailyTotal(date=date(2026, 6, 15))
        assert total.pulled == 0
        assert total.ratio_pct == 0.0
        assert total.motivation == MotivationTier.starting

    def test_weekly_summary(self):
        summary = WeeklySummary(week_start=date(2026, 6, 15), week_end=date(2026, 6, 21))
        assert summary.goal_filter == "all"
        data = summary.model_dump(mode="json")
        assert data["week_start"] == "2026-06-15"

    def test_monthly_series_serializes_nulls(self):
        series = MonthlySeries(
            year=2026,
            month=6,
            points=[MonthlyPoint(date=date(2026, 6, 30), day="30", full_date="30/06", values={"Health": None})],
        )
        data = series.model_dump(mode="json")
        assert data["mode"] == "cumulative"
        assert data["points"][0]["values"] == {"Health": None}

    def test_series_mode_values(self):
        assert {m.value for m in SeriesMode} == {"cumulative", "daily"}
