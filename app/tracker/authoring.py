"""Turn goal drafts from the settings and onboarding forms into goals."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable

from app.tracker.models import Goal, GoalDraft, Lever
from app.tracker.presets import default_area

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class GoalValidationError(ValueError):
    """A draft cannot become a goal."""


def _epoch_ms(now: datetime | None) -> int:
    now = now or datetime.now(timezone.utc)
    return int(now.timestamp() * 1000)


def active_lever_texts(texts: Iterable[str]) -> list[str]:
    """Lever texts that are not blank, in their original order."""
    return [t for t in texts if t.strip()]


def new_goal_id(stamp: int, existing_ids: Iterable[str] = ()) -> str:
    """`goal-<ms>`, bumped past any id already taken."""
    taken = set(existing_ids)
    while f"goal-{stamp}" in taken:
        stamp += 1
    return f"goal-{stamp}"


def build_goal(
    draft: GoalDraft,
    *,
    goal_id: str | None = None,
    existing_ids: Iterable[str] = (),
    now: datetime | None = None,
) -> Goal:
    """Validate a draft and build the goal it describes.

    Blank lever texts are dropped. Passing `goal_id` builds a replacement for
    an existing goal; lever ids are regenerated either way.
    """
    if not draft.area.strip():
        raise GoalValidationError("Goal area must not be blank")

    texts = active_lever_texts(draft.levers)
    if not texts:
        raise GoalValidationError("Goal needs at least one lever")

    if not _HEX_COLOR.match(draft.color):
        raise GoalValidationError(f"Invalid colour: {draft.color!r}")

    stamp = _epoch_ms(now)
    return Goal(
        id=goal_id or new_goal_id(stamp, existing_ids),
        area=draft.area,
        color=draft.color,
        levers=[Lever(id=f"l-{stamp}-{i}", text=text) for i, text in enumerate(texts)],
    )


def build_onboarding_goal(
    draft: GoalDraft,
    language: str,
    now: datetime | None = None,
) -> Goal:
    """First goal collected on first run; a blank area gets a localized default."""
    if not draft.area.strip():
        draft = draft.model_copy(update={"area": default_area(language)})
    return build_goal(draft, now=now)
