"""Goal/lever/log data model and aggregate views."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

# One boolean per lever, aligned by index to the goal's levers at logging time.
LeverStatus = list[bool]

# ISO date ("YYYY-MM-DD") -> goal id -> LeverStatus
DailyLog = dict[str, dict[str, LeverStatus]]

ALL_GOALS = "all"


class Lever(BaseModel):
    id: str
    text: str


class Goal(BaseModel):
    id: str
    area: str
    color: str
    levers: list[Lever] = Field(default_factory=list)


class SeriesMode(str, Enum):
    cumulative = "cumulative"
    daily = "daily"


class MotivationTier(str, Enum):
    starting = "starting"  # 0 levers pulled
    building = "building"  # 1–2
    steady = "steady"  # 3–5
    flowing = "flowing"  # 6+


class DailyTotal(BaseModel):
    date: date
    pulled: int = 0
    possible: int = 0
    ratio_pct: float = 0.0
    motivation: MotivationTier = MotivationTier.starting


class WeeklySummary(BaseModel):
    goal_filter: str = ALL_GOALS
    week_start: date
    week_end: date
    pulled: int = 0
    possible: int = 0
    ratio_pct: float = 0.0


class MonthlyPoint(BaseModel):
    date: date
    day: str  # "d" label for the x axis
    full_date: str  # "dd/MM"
    values: dict[str, int | None] = Field(default_factory=dict)


class MonthlySeries(BaseModel):
    year: int
    month: int
    mode: SeriesMode = SeriesMode.cumulative
    goal_filter: str = ALL_GOALS
    areas: list[str] = Field(default_factory=list)
    points: list[MonthlyPoint] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request / response bodies for the local API
# ---------------------------------------------------------------------------


class GoalDraft(BaseModel):
    """What the settings and onboarding forms submit."""

    area: str = ""
    color: str = "#3b82f6"
    levers: list[str] = Field(default_factory=list)


class ToggleResult(BaseModel):
    date: date
    goal_id: str
    lever_index: int
    applied: bool
    status: LeverStatus | None = None


class LanguageUpdate(BaseModel):
    language: str


class OnboardingRequest(BaseModel):
    goal: GoalDraft
    language: str | None = None
