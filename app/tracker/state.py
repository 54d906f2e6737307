"""In-memory application state: the goal store and the log store.

Both collections are replaced rather than mutated in place, so a reference to a
previous `goals` list or `logs` mapping keeps describing the previous state.
Log entries reference goals by id only; deleting a goal leaves its entries
behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from app.tracker.models import DailyLog, Goal, LeverStatus

logger = logging.getLogger(__name__)


def date_key(day: date | str) -> str:
    """Normalise a date to the ISO key used by the log store."""
    if isinstance(day, date):
        return day.isoformat()
    return date.fromisoformat(day).isoformat()


@dataclass(slots=True)
class TrackerState:
    goals: list[Goal] = field(default_factory=list)
    logs: DailyLog = field(default_factory=dict)

    # -- goal store ---------------------------------------------------------

    def find_goal(self, goal_id: str) -> Goal | None:
        return next((g for g in self.goals if g.id == goal_id), None)

    def add_goal(self, goal: Goal) -> None:
        self.goals = [*self.goals, goal]

    def update_goal(self, goal: Goal) -> bool:
        """Replace the goal with the same id, keeping its position.

        Returns False (and changes nothing) when no goal has that id.
        Existing log vectors for the goal are left as they are.
        """
        if self.find_goal(goal.id) is None:
            return False
        self.goals = [goal if g.id == goal.id else g for g in self.goals]
        return True

    def delete_goal(self, goal_id: str) -> bool:
        remaining = [g for g in self.goals if g.id != goal_id]
        if len(remaining) == len(self.goals):
            return False
        self.goals = remaining
        return True

    def replace_goals(self, goals: list[Goal]) -> None:
        self.goals = list(goals)

    # -- log store ----------------------------------------------------------

    def day_logs(self, day: date | str) -> dict[str, LeverStatus]:
        return self.logs.get(date_key(day), {})

    def toggle_lever(self, day: date | str, goal_id: str, lever_index: int) -> LeverStatus | None:
        """Flip one lever for one day and return the new status vector.

        Returns None without touching the logs when the goal does not exist or
        the index is outside the goal's current lever range. A vector shorter
        than the current lever count is padded with False; a longer one keeps
        its stale tail.
        """
        goal = self.find_goal(goal_id)
        if goal is None:
            logger.debug("Toggle ignored: unknown goal %s", goal_id)
            return None

        lever_count = len(goal.levers)
        if not 0 <= lever_index < lever_count:
            logger.debug(
                "Toggle ignored: lever %d out of range for goal %s (%d levers)",
                lever_index,
                goal_id,
                lever_count,
            )
            return None

        key = date_key(day)
        day_entries = self.logs.get(key, {})
        current = day_entries.get(goal_id)

        updated = list(current) if current is not None else [False] * lever_count
        if len(updated) < lever_count:
            updated.extend([False] * (lever_count - len(updated)))
        updated[lever_index] = not updated[lever_index]

        self.logs = {**self.logs, key: {**day_entries, goal_id: updated}}
        return updated
