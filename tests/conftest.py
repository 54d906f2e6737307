"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from app.db import make_engine
from app.main import app
from app.tracker.blob_store import BlobStore
from app.tracker.models import Goal, Lever
from app.tracker.router import get_tracker
from app.tracker.service import Tracker


# ---------------------------------------------------------------------------
# In-memory blob store (no database file needed)
# ---------------------------------------------------------------------------

@pytest.fixture()
def engine():
    eng = make_engine("sqlite://")
    yield eng
    eng.dispose()


@pytest.fixture()
def store(engine):
    return BlobStore(engine, prefix="test_")


@pytest.fixture()
def tracker(store):
    return Tracker(store, tz_name="UTC", default_language="pt")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def override_tracker(tracker):
    """Override the FastAPI dependency so every request shares one tracker."""
    app.dependency_overrides[get_tracker] = lambda: tracker
    yield tracker
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_tracker):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_goal(goal_id: str = "goal-1", levers: int = 3, area: str | None = None, color: str = "#3b82f6") -> Goal:
    """Helper to build a goal with `levers` numbered levers."""
    return Goal(
        id=goal_id,
        area=area or f"Area {goal_id}",
        color=color,
        levers=[Lever(id=f"l-{goal_id}-{i}", text=f"Lever {i + 1}") for i in range(levers)],
    )
