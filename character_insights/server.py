"""FastAPI server exposing the scoring engine to the frontend.

REST endpoints for recording daily usage and check-ins, and for reading
daily scores, weekly reports and the check-in streak. Every read
recomputes from the record store.
"""

from __future__ import annotations

import logging
from datetime import date as Date
from typing import Optional

import redis
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from character_insights.config.settings import REDIS_URL
from character_insights.engine.scoring_engine import ScoringEngine, ScoringError
from character_insights.models.checkin import CheckIn
from character_insights.models.theme import ALL_THEMES, Theme, get_theme_definition
from character_insights.models.usage import UsageEntry
from character_insights.storage import daily_store
from character_insights.utils.dates import (
    format_week_range,
    get_next_week,
    get_previous_week,
    get_week_start,
    is_future_week,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Character Insights", description="Weekly character theme reflections")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_redis() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


def _engine() -> ScoringEngine:
    return ScoringEngine(r=_get_redis())


def _unavailable(exc: Exception) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Computation failed: {exc}")


# ── Request Models ───────────────────────────────────────────────────────

class UsageEntryRequest(BaseModel):
    date: Date
    social_media_minutes: int = Field(0, ge=0)
    shopping_minutes: int = Field(0, ge=0)
    entertainment_minutes: int = Field(0, ge=0)
    dating_apps_minutes: int = Field(0, ge=0)
    productivity_minutes: int = Field(0, ge=0)
    news_minutes: int = Field(0, ge=0)
    games_minutes: int = Field(0, ge=0)
    phone_pickups: int = Field(0, ge=0)
    late_night_usage_minutes: int = Field(0, ge=0)
    steps: int = Field(0, ge=0)
    sleep_hours: float = Field(0.0, ge=0, le=24)
    wake_time: str = Field("07:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")

    def to_entry(self) -> UsageEntry:
        data = self.model_dump()
        data["date"] = self.date.isoformat()
        return UsageEntry(**data)


class CheckInRequest(BaseModel):
    date: Date
    mood_score: int = Field(..., ge=1, le=10)
    primary_theme: str
    journal_entry: Optional[str] = None

    @field_validator("primary_theme")
    @classmethod
    def _known_theme(cls, v: str) -> str:
        return Theme.from_value(v).value

    def to_check_in(self) -> CheckIn:
        return CheckIn(
            date=self.date.isoformat(),
            mood_score=self.mood_score,
            primary_theme=self.primary_theme,
            journal_entry=self.journal_entry or None,
        )


# ── REST Endpoints ───────────────────────────────────────────────────────

@app.get("/api/health")
async def health():
    r = _get_redis()
    try:
        r.ping()
        redis_ok = True
    except redis.RedisError:
        redis_ok = False
    return {"status": "ok", "redis": redis_ok}


@app.get("/api/themes")
async def list_themes():
    return {"themes": [get_theme_definition(t).to_dict() for t in ALL_THEMES]}


@app.get("/api/scores/daily/{day}")
async def daily_scores(day: Date):
    try:
        scores = _engine().calculate_daily_scores(day)
    except ScoringError as exc:
        raise _unavailable(exc)
    return {"date": day.isoformat(), "scores": [s.to_dict() for s in scores]}


@app.get("/api/reports/weekly")
async def weekly_report(week_start: Optional[Date] = Query(None)):
    """Weekly report plus navigation to the neighbouring weeks."""
    start = get_week_start(week_start)
    try:
        report = _engine().calculate_weekly_report(start)
    except ScoringError as exc:
        raise _unavailable(exc)

    next_week = get_next_week(start)
    return {
        **report.to_dict(),
        "week_label": format_week_range(start),
        "previous_week": get_previous_week(start),
        "next_week": None if is_future_week(next_week) else next_week,
    }


@app.get("/api/streak")
async def streak():
    try:
        result = _engine().compute_streak()
    except ScoringError as exc:
        raise _unavailable(exc)
    return result.to_dict()


@app.get("/api/usage/{day}")
async def get_usage(day: Date):
    try:
        entry = daily_store.get_usage_for_date(day.isoformat(), _get_redis())
    except (redis.RedisError, ValueError) as exc:
        raise _unavailable(exc)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No usage entry for {day}")
    return entry.to_dict()


@app.post("/api/usage")
async def save_usage(req: UsageEntryRequest):
    entry = req.to_entry()
    try:
        daily_store.save_usage_entry(entry, _get_redis())
    except redis.RedisError as exc:
        raise _unavailable(exc)
    return {"status": "saved", "date": entry.date}


@app.get("/api/checkins/{day}")
async def get_check_in(day: Date):
    try:
        check_in = daily_store.get_check_in_for_date(day.isoformat(), _get_redis())
    except (redis.RedisError, ValueError) as exc:
        raise _unavailable(exc)
    if check_in is None:
        raise HTTPException(status_code=404, detail=f"No check-in for {day}")
    return check_in.to_dict()


@app.post("/api/checkins")
async def save_check_in(req: CheckInRequest):
    check_in = req.to_check_in()
    engine = _engine()
    try:
        daily_store.save_check_in(check_in, _get_redis())
        result = engine.compute_streak()
    except (redis.RedisError, ScoringError) as exc:
        raise _unavailable(exc)
    return {"status": "saved", "date": check_in.date, "streak": result.to_dict()}


@app.get("/api/export")
async def export_data():
    try:
        return daily_store.export_all(_get_redis())
    except (redis.RedisError, ValueError) as exc:
        raise _unavailable(exc)


@app.delete("/api/data")
async def clear_data():
    try:
        deleted = daily_store.clear_all(_get_redis())
    except redis.RedisError as exc:
        raise _unavailable(exc)
    logger.info("All records cleared via API")
    return {"status": "cleared", "deleted_keys": deleted}
