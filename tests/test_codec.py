"""Tests for snapshot encode/decode and legacy migration."""

from __future__ import annotations

import json

import pytest

from app.tracker.codec import (
    SCHEMA_VERSION,
    SnapshotDecodeError,
    decode_goals,
    decode_language,
    decode_logs,
    encode_goals,
    encode_logs,
)

from tests.conftest import make_goal


class TestGoalsSnapshot:
    def test_envelope(self):
        data = json.loads(encode_goals([make_goal("a", levers=1)]))
        assert data["schema_version"] == SCHEMA_VERSION
        assert data["goals"][0]["id"] == "a"
        assert data["goals"][0]["levers"] == [{"id": "l-a-0", "text": "Lever 1"}]

    def test_decode_current(self):
        goals = [make_goal("a"), make_goal("b", levers=1)]
        assert decode_goals(encode_goals(goals)) == goals

    def test_decode_legacy_bare_list(self):
        raw = json.dumps(
            [{"id": "goal-1", "area": "Saúde", "color": "#10b981", "levers": [{"id": "l-1-0", "text": "Beber água"}]}]
        )
        goals = decode_goals(raw)
        assert goals[0].area == "Saúde"
        assert goals[0].levers[0].text == "Beber água"

    def test_unparsable(self):
        with pytest.raises(SnapshotDecodeError):
            decode_goals("{not json")

    def test_wrong_shape(self):
        with pytest.raises(SnapshotDecodeError):
            decode_goals(json.dumps({"schema_version": 1, "goals": [{"id": "x"}]}))

    def test_newer_version_rejected(self):
        with pytest.raises(SnapshotDecodeError, match="Unsupported"):
            decode_goals(json.dumps({"schema_version": 99, "goals": []}))

    def test_missing_payload(self):
        with pytest.raises(SnapshotDecodeError):
            decode_goals(json.dumps({"schema_version": 1}))

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_goals("")


class TestLogsSnapshot:
    def test_decode_current(self):
        logs = {"2026-06-15": {"a": [True, False]}, "2026-06-16": {"b": [False]}}
        assert decode_logs(encode_logs(logs)) == logs

    def test_legacy_holes_become_false(self):
        raw = json.dumps({"2026-06-15": {"a": [True, None, True]}})
        assert decode_logs(raw) == {"2026-06-15": {"a": [True, False, True]}}

    def test_holes_rejected_in_current_version(self):
        raw = json.dumps({"schema_version": 1, "logs": {"2026-06-15": {"a": [True, None]}}})
        with pytest.raises(SnapshotDecodeError):
            decode_logs(raw)

    def test_non_boolean_rejected(self):
        with pytest.raises(SnapshotDecodeError):
            decode_logs(json.dumps({"2026-06-15": {"a": [1, 0]}}))

    def test_bad_date_key(self):
        with pytest.raises(SnapshotDecodeError, match="date key"):
            decode_logs(json.dumps({"15/06/2026": {"a": [True]}}))

    def test_not_a_mapping(self):
        with pytest.raises(SnapshotDecodeError):
            decode_logs(json.dumps([1, 2, 3]))


class TestLanguage:
    def test_supported(self):
        assert decode_language("en") == "en"

    def test_unsupported(self):
        assert decode_language("fr") is None

    def test_missing(self):
        assert decode_language(None) is None

    def test_bytes(self):
        assert decode_language(b"es") == "es"
