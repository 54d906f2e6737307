import logging

from fastapi import FastAPI

from app.config import settings
from app.tracker.router import router as tracker_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Alavancas", version="0.1.0")
app.include_router(tracker_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "tracker": {
            "goals": "/tracker/goals",
            "goal": "/tracker/goals/{goal_id}",
            "day_logs": "/tracker/logs/{date}",
            "toggle": "/tracker/logs/{date}/{goal_id}/{lever_index}/toggle",
            "stats_daily": "/tracker/stats/daily",
            "stats_weekly": "/tracker/stats/weekly",
            "stats_monthly": "/tracker/stats/monthly",
            "language": "/tracker/language",
            "onboarding": "/tracker/onboarding",
            "palette": "/tracker/palette",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
