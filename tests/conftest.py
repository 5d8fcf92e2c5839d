"""Shared test fixtures for the character insights test suite."""

from datetime import date, timedelta

import fakeredis
import pytest

from character_insights.models.checkin import CheckIn
from character_insights.models.usage import UsageEntry
from character_insights.storage.daily_store import save_check_in, save_usage_entry


# ── Redis ────────────────────────────────────────────────────────────────

@pytest.fixture
def r():
    """Fresh fakeredis instance per test (decode_responses=True like production)."""
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def broken_redis():
    """A client whose server is down: every command raises ConnectionError."""
    server = fakeredis.FakeServer()
    server.connected = False
    return fakeredis.FakeRedis(server=server, decode_responses=True)


# ── Dates ────────────────────────────────────────────────────────────────

@pytest.fixture
def week_start():
    """Monday 2026-10-12; the prior week starts 2026-10-05."""
    return date(2026, 10, 12)


# ── Record Factories ────────────────────────────────────────────────────

HIGH_SLOTH = {
    "steps": 1500,
    "entertainment_minutes": 280,
    "sleep_hours": 10,
    "late_night_usage_minutes": 90,
    "productivity_minutes": 30,
}

BALANCED = {
    "steps": 8000,
    "productivity_minutes": 240,
    "sleep_hours": 7,
}


@pytest.fixture
def make_usage():
    """Factory fixture: UsageEntry with zeroed defaults.

    Usage:
        entry = make_usage("2026-10-12", steps=1500)
    """
    def _factory(day, **overrides):
        day = day.isoformat() if isinstance(day, date) else day
        return UsageEntry(date=day, **overrides)

    return _factory


@pytest.fixture
def make_check_in():
    def _factory(day, mood_score=6, primary_theme="sloth", **overrides):
        day = day.isoformat() if isinstance(day, date) else day
        return CheckIn(date=day, mood_score=mood_score, primary_theme=primary_theme, **overrides)

    return _factory


@pytest.fixture
def seed_days(r, make_usage):
    """Save the same usage profile for ``count`` consecutive days from ``start``."""
    def _seed(start, count, **profile):
        for offset in range(count):
            save_usage_entry(make_usage(start + timedelta(days=offset), **profile), r)

    return _seed


@pytest.fixture
def seed_check_ins(r, make_check_in):
    def _seed(days, **fields):
        for d in days:
            save_check_in(make_check_in(d, **fields), r)

    return _seed


@pytest.fixture
def high_sloth():
    """Low steps, heavy passive viewing, oversleeping, late nights."""
    return dict(HIGH_SLOTH)


@pytest.fixture
def balanced():
    return dict(BALANCED)
