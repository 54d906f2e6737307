"""Tracker controller: owns the application state and its persistence.

Every mutation goes through a method here and is followed by a full-snapshot
write of the store it touched. Aggregates are recomputed on every read.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Callable, TypeVar
from zoneinfo import ZoneInfo

from app.tracker import aggregator, codec
from app.tracker.blob_store import BlobStore
from app.tracker.i18n import normalize_language, resolve_language
from app.tracker.models import (
    ALL_GOALS,
    DailyLog,
    DailyTotal,
    Goal,
    LeverStatus,
    MonthlySeries,
    SeriesMode,
    WeeklySummary,
)
from app.tracker.state import TrackerState

logger = logging.getLogger(__name__)

GOALS_KEY = "goals"
LOGS_KEY = "logs"
LANGUAGE_KEY = "language"
ONBOARDING_KEY = "onboarding_complete"

T = TypeVar("T")


class OnboardingAlreadyComplete(RuntimeError):
    """First-run onboarding was already done; it cannot run twice."""


class Tracker:
    def __init__(
        self,
        store: BlobStore,
        tz_name: str = "UTC",
        default_language: str = "pt",
    ):
        self.store = store
        self.tz = ZoneInfo(tz_name)
        self.default_language = default_language
        # Handlers run in a threadpool; mutations and their snapshot writes are serialized
        self._lock = threading.RLock()
        self.state = TrackerState(
            goals=self._load(GOALS_KEY, codec.decode_goals, list),
            logs=self._load(LOGS_KEY, codec.decode_logs, dict),
        )
        logger.info(
            "Tracker loaded: %d goal(s), %d logged day(s)",
            len(self.state.goals),
            len(self.state.logs),
        )

    def _load(self, key: str, decode: Callable[[str], T], empty: Callable[[], T]) -> T:
        raw = self.store.get(key)
        if raw is None:
            return empty()
        try:
            return decode(raw)
        except codec.SnapshotDecodeError as exc:
            logger.warning("Discarding %s snapshot, starting empty: %s", key, exc)
            return empty()

    def _persist_goals(self) -> None:
        self.store.put(GOALS_KEY, codec.encode_goals(self.state.goals))

    def _persist_logs(self) -> None:
        self.store.put(LOGS_KEY, codec.encode_logs(self.state.logs))

    # -- clock --------------------------------------------------------------

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()

    # -- read accessors -----------------------------------------------------

    @property
    def goals(self) -> list[Goal]:
        return self.state.goals

    @property
    def logs(self) -> DailyLog:
        return self.state.logs

    def get_goal(self, goal_id: str) -> Goal | None:
        return self.state.find_goal(goal_id)

    def day_logs(self, day: date) -> dict[str, LeverStatus]:
        return self.state.day_logs(day)

    # -- goal store ---------------------------------------------------------

    def add_goal(self, goal: Goal) -> Goal:
        with self._lock:
            self.state.add_goal(goal)
            self._persist_goals()
        logger.info("Added goal %s (%s, %d levers)", goal.id, goal.area, len(goal.levers))
        return goal

    def update_goal(self, goal: Goal) -> bool:
        with self._lock:
            if not self.state.update_goal(goal):
                logger.debug("Update ignored: unknown goal %s", goal.id)
                return False
            self._persist_goals()
        logger.info("Updated goal %s (%d levers)", goal.id, len(goal.levers))
        return True

    def delete_goal(self, goal_id: str) -> bool:
        with self._lock:
            if not self.state.delete_goal(goal_id):
                logger.debug("Delete ignored: unknown goal %s", goal_id)
                return False
            self._persist_goals()
        logger.info("Deleted goal %s", goal_id)
        return True

    # -- log store ----------------------------------------------------------

    def toggle_lever(self, day: date, goal_id: str, lever_index: int) -> LeverStatus | None:
        with self._lock:
            status = self.state.toggle_lever(day, goal_id, lever_index)
            if status is None:
                return None
            self._persist_logs()
        return status

    # -- aggregates ---------------------------------------------------------

    def daily_total(self, day: date | None = None) -> DailyTotal:
        return aggregator.build_daily_total(self.state, day or self.today())

    def weekly_summary(
        self,
        goal_filter: str = ALL_GOALS,
        reference: date | None = None,
    ) -> WeeklySummary:
        return aggregator.build_weekly_summary(self.state, reference or self.today(), goal_filter)

    def monthly_series(
        self,
        goal_filter: str = ALL_GOALS,
        mode: SeriesMode = SeriesMode.cumulative,
        reference: date | None = None,
    ) -> MonthlySeries:
        return aggregator.build_monthly_series(self.state, reference or self.today(), goal_filter, mode)

    # -- language & onboarding ----------------------------------------------

    def language(self, browser_locale: str | None = None) -> str:
        stored = codec.decode_language(self.store.get(LANGUAGE_KEY))
        return resolve_language(stored, browser_locale, self.default_language)

    def set_language(self, code: str) -> str:
        normalized = normalize_language(code)
        if normalized is None:
            raise ValueError(f"Unsupported language: {code!r}")
        with self._lock:
            self.store.put(LANGUAGE_KEY, normalized)
        logger.info("Language set to %s", normalized)
        return normalized

    @property
    def onboarding_complete(self) -> bool:
        return self.store.has(ONBOARDING_KEY)

    def complete_onboarding(self, initial_goals: list[Goal], language: str | None = None) -> list[Goal]:
        """Replace the goal store with the first-run goals and set the flag for good.

        Raises OnboardingAlreadyComplete once the flag is set, and ValueError for
        an unsupported language; nothing is written in either case.
        """
        normalized = None
        if language is not None:
            normalized = normalize_language(language)
            if normalized is None:
                raise ValueError(f"Unsupported language: {language!r}")

        with self._lock:
            if self.onboarding_complete:
                raise OnboardingAlreadyComplete("Onboarding has already been completed")
            self.state.replace_goals(initial_goals)
            self._persist_goals()
            if normalized is not None:
                self.store.put(LANGUAGE_KEY, normalized)
            self.store.put(ONBOARDING_KEY, "true")
        logger.info("Onboarding complete with %d goal(s)", len(initial_goals))
        return self.state.goals
