"""Tracker HTTP router — goals, daily logs, stats, language, onboarding."""

from __future__ import annotations

from datetime import date
from functools import lru_cache

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response

from app.config import settings
from app.db import get_engine
from app.tracker.authoring import GoalValidationError, build_goal, build_onboarding_goal
from app.tracker.blob_store import BlobStore
from app.tracker.i18n import normalize_language
from app.tracker.models import (
    ALL_GOALS,
    DailyTotal,
    Goal,
    GoalDraft,
    LanguageUpdate,
    LeverStatus,
    MonthlySeries,
    OnboardingRequest,
    SeriesMode,
    ToggleResult,
    WeeklySummary,
)
from app.tracker.presets import DEFAULT_COLOR, PRESET_COLORS
from app.tracker.service import OnboardingAlreadyComplete, Tracker

router = APIRouter(prefix="/tracker", tags=["tracker"])


@lru_cache(maxsize=1)
def get_tracker() -> Tracker:
    store = BlobStore(get_engine(), prefix=settings.storage_prefix)
    return Tracker(store, tz_name=settings.default_tz, default_language=settings.default_language)


def _parse_date(value: str | None, name: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


# ---------------------------------------------------------------------------
# /tracker/goals
# ---------------------------------------------------------------------------


@router.get("/goals", response_model=list[Goal])
def list_goals(tracker: Tracker = Depends(get_tracker)) -> list[Goal]:
    return tracker.goals


@router.post("/goals", response_model=Goal, status_code=201)
def create_goal(draft: GoalDraft, tracker: Tracker = Depends(get_tracker)) -> Goal:
    try:
        goal = build_goal(draft, existing_ids=[g.id for g in tracker.goals])
    except GoalValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return tracker.add_goal(goal)


@router.put("/goals/{goal_id}", response_model=Goal)
def replace_goal(
    goal_id: str,
    draft: GoalDraft,
    tracker: Tracker = Depends(get_tracker),
) -> Goal:
    if tracker.get_goal(goal_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown goal: {goal_id}")
    try:
        goal = build_goal(draft, goal_id=goal_id)
    except GoalValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    tracker.update_goal(goal)
    return goal


@router.delete("/goals/{goal_id}", status_code=204)
def remove_goal(goal_id: str, tracker: Tracker = Depends(get_tracker)) -> Response:
    tracker.delete_goal(goal_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# /tracker/logs
# ---------------------------------------------------------------------------


@router.get("/logs/{day}", response_model=dict[str, LeverStatus])
def get_day_logs(day: str, tracker: Tracker = Depends(get_tracker)) -> dict[str, LeverStatus]:
    return tracker.day_logs(_parse_date(day, "day"))


@router.post("/logs/{day}/{goal_id}/{lever_index}/toggle", response_model=ToggleResult)
def toggle_lever(
    day: str,
    goal_id: str,
    lever_index: int,
    tracker: Tracker = Depends(get_tracker),
) -> ToggleResult:
    target = _parse_date(day, "day")
    status = tracker.toggle_lever(target, goal_id, lever_index)
    return ToggleResult(
        date=target,
        goal_id=goal_id,
        lever_index=lever_index,
        applied=status is not None,
        status=status,
    )


# ---------------------------------------------------------------------------
# /tracker/stats
# ---------------------------------------------------------------------------


@router.get("/stats/daily", response_model=DailyTotal)
def daily_stats(
    tracker: Tracker = Depends(get_tracker),
    on: str | None = Query(default=None, alias="date", description="Day (YYYY-MM-DD, default: today)"),
) -> DailyTotal:
    return tracker.daily_total(_parse_date(on, "date"))


@router.get("/stats/weekly", response_model=WeeklySummary)
def weekly_stats(
    tracker: Tracker = Depends(get_tracker),
    goal: str = Query(default=ALL_GOALS, description="Goal id or 'all'"),
    on: str | None = Query(default=None, alias="date", description="Any day of the week (default: today)"),
) -> WeeklySummary:
    return tracker.weekly_summary(goal, _parse_date(on, "date"))


@router.get("/stats/monthly", response_model=MonthlySeries)
def monthly_stats(
    tracker: Tracker = Depends(get_tracker),
    goal: str = Query(default=ALL_GOALS, description="Goal id or 'all'"),
    mode: SeriesMode = Query(default=SeriesMode.cumulative),
    on: str | None = Query(default=None, alias="date", description="Reference 'now' (default: today)"),
) -> MonthlySeries:
    return tracker.monthly_series(goal, mode, _parse_date(on, "date"))


# ---------------------------------------------------------------------------
# /tracker/language, /tracker/onboarding, /tracker/palette
# ---------------------------------------------------------------------------


@router.get("/language")
def get_language(
    tracker: Tracker = Depends(get_tracker),
    accept_language: str | None = Header(default=None),
) -> dict[str, str]:
    return {"language": tracker.language(accept_language)}


@router.put("/language")
def put_language(body: LanguageUpdate, tracker: Tracker = Depends(get_tracker)) -> dict[str, str]:
    try:
        return {"language": tracker.set_language(body.language)}
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.get("/onboarding")
def onboarding_status(tracker: Tracker = Depends(get_tracker)) -> dict[str, bool]:
    return {"complete": tracker.onboarding_complete}


@router.post("/onboarding", response_model=list[Goal])
def complete_onboarding(
    body: OnboardingRequest,
    tracker: Tracker = Depends(get_tracker),
    accept_language: str | None = Header(default=None),
) -> list[Goal]:
    if tracker.onboarding_complete:
        raise HTTPException(status_code=409, detail="Onboarding has already been completed")

    if body.language is not None:
        language = normalize_language(body.language)
        if language is None:
            raise HTTPException(status_code=422, detail=f"Unsupported language: {body.language!r}")
    else:
        language = tracker.language(accept_language)

    try:
        goal = build_onboarding_goal(body.goal, language)
    except GoalValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    try:
        return tracker.complete_onboarding([goal], language=body.language)
    except OnboardingAlreadyComplete as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.get("/palette")
async def palette() -> dict:
    return {"default": DEFAULT_COLOR, "presets": PRESET_COLORS}
