"""Snapshot encode/decode for the blob store.

Goals and logs are written as a versioned JSON envelope:

    {"schema_version": 1, "goals": [...]}
    {"schema_version": 1, "logs": {...}}

Version 0 is the bare list/object written by the first releases, with no
envelope. It is migrated on read; lever vectors from that era can contain
null holes, which become False.

Anything else (bad JSON, an unknown version, a payload that fails validation)
raises SnapshotDecodeError. Callers decide how to recover.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from pydantic import TypeAdapter, ValidationError

from app.tracker.i18n import normalize_language
from app.tracker.models import DailyLog, Goal

SCHEMA_VERSION = 1

_GOALS = TypeAdapter(list[Goal])
_LOGS = TypeAdapter(DailyLog)


class SnapshotDecodeError(ValueError):
    """A persisted snapshot could not be read."""


def _envelope(field: str, payload: Any) -> str:
    return json.dumps({"schema_version": SCHEMA_VERSION, field: payload}, ensure_ascii=False)


def _unwrap(raw: str | bytes, field: str) -> tuple[int, Any]:
    """Return (schema_version, payload) for a stored snapshot."""
    try:
        obj = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise SnapshotDecodeError(f"Unparsable {field} snapshot: {exc}") from exc

    if isinstance(obj, dict) and "schema_version" in obj:
        version = obj["schema_version"]
        if not isinstance(version, int) or isinstance(version, bool):
            raise SnapshotDecodeError(f"Invalid schema_version in {field} snapshot: {version!r}")
        if version != SCHEMA_VERSION:
            raise SnapshotDecodeError(
                f"Unsupported {field} schema version: {version} (expected {SCHEMA_VERSION})"
            )
        if field not in obj:
            raise SnapshotDecodeError(f"Missing '{field}' in snapshot envelope")
        return version, obj[field]

    return 0, obj


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


def encode_goals(goals: list[Goal]) -> str:
    return _envelope("goals", _GOALS.dump_python(goals, mode="json"))


def decode_goals(raw: str | bytes) -> list[Goal]:
    _, payload = _unwrap(raw, "goals")
    try:
        return _GOALS.validate_python(payload)
    except ValidationError as exc:
        raise SnapshotDecodeError(f"Invalid goals snapshot: {exc.error_count()} error(s)") from exc


# ---------------------------------------------------------------------------
# Logs
# ---------------------------------------------------------------------------


def _fill_holes(payload: Any) -> Any:
    """Replace null entries left by sparse arrays in version 0 lever vectors."""
    if not isinstance(payload, dict):
        return payload
    migrated: dict[Any, Any] = {}
    for day, entries in payload.items():
        if not isinstance(entries, dict):
            migrated[day] = entries
            continue
        migrated[day] = {
            goal_id: [False if s is None else s for s in status] if isinstance(status, list) else status
            for goal_id, status in entries.items()
        }
    return migrated


def encode_logs(logs: DailyLog) -> str:
    return _envelope("logs", _LOGS.dump_python(logs, mode="json"))


def decode_logs(raw: str | bytes) -> DailyLog:
    version, payload = _unwrap(raw, "logs")
    if version == 0:
        payload = _fill_holes(payload)
    try:
        logs = _LOGS.validate_python(payload, strict=True)
    except ValidationError as exc:
        raise SnapshotDecodeError(f"Invalid logs snapshot: {exc.error_count()} error(s)") from exc

    for day in logs:
        try:
            valid = date.fromisoformat(day).isoformat() == day
        except ValueError:
            valid = False
        if not valid:
            raise SnapshotDecodeError(f"Invalid date key in logs snapshot: {day!r}")
    return logs


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------


def decode_language(raw: str | bytes | None) -> str | None:
    """Stored language code, or None when it is missing or unsupported."""
    if raw is None:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return normalize_language(raw)
