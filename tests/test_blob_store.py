"""Tests for the SQL-backed blob store."""

from __future__ import annotations

from app.tracker.blob_store import BlobStore


class TestBlobStore:
    def test_missing_key(self, store):
        assert store.get("goals") is None
        assert not store.has("goals")

    def test_put_get(self, store):
        store.put("goals", "[]")
        assert store.get("goals") == "[]"
        assert store.has("goals")

    def test_put_replaces(self, store):
        store.put("logs", "one")
        store.put("logs", "two")
        assert store.get("logs") == "two"

    def test_prefix_isolates_namespaces(self, engine):
        first = BlobStore(engine, prefix="a_")
        second = BlobStore(engine, prefix="b_")
        first.put("goals", "first")
        assert second.get("goals") is None
        assert first.get("goals") == "first"

    def test_table_creation_is_idempotent(self, engine, store):
        store.put("goals", "kept")
        again = BlobStore(engine, prefix="test_")
        assert again.get("goals") == "kept"
