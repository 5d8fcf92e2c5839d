"""Seed Redis with demo usage entries and check-ins.

Run: python -m character_insights.scripts.seed_demo [--days 14] [--scenario high_sloth]
"""

from __future__ import annotations

import argparse
import logging
import random
from datetime import date, timedelta
from typing import Optional

import redis

from character_insights.config.settings import DEMO_DAYS, REDIS_URL
from character_insights.models.checkin import CheckIn
from character_insights.models.theme import ALL_THEMES
from character_insights.models.usage import UsageEntry
from character_insights.storage.daily_store import clear_all, save_check_in, save_usage_entry

logger = logging.getLogger("seed_demo")

CHECK_IN_RATE = 0.8

SCENARIOS: dict[str, dict] = {
    "high_pride": {
        "social_media_minutes": 200,
        "shopping_minutes": 20,
        "entertainment_minutes": 90,
        "dating_apps_minutes": 15,
        "productivity_minutes": 60,
        "news_minutes": 30,
        "games_minutes": 45,
        "phone_pickups": 95,
        "late_night_usage_minutes": 45,
        "steps": 4500,
        "sleep_hours": 6,
        "wake_time": "08:30",
    },
    "high_sloth": {
        "social_media_minutes": 90,
        "shopping_minutes": 10,
        "entertainment_minutes": 280,   # very high passive consumption
        "dating_apps_minutes": 5,
        "productivity_minutes": 30,
        "news_minutes": 60,
        "games_minutes": 120,
        "phone_pickups": 75,
        "late_night_usage_minutes": 90,
        "steps": 1500,
        "sleep_hours": 10,              # oversleeping
        "wake_time": "10:30",
    },
}


def random_day(day: date, rng: random.Random) -> tuple[UsageEntry, Optional[CheckIn]]:
    """A plausible day: weekends run heavier on screens and lighter on activity."""
    is_weekend = day.weekday() >= 5
    screen = 1.3 if is_weekend else 1.0
    activity = 0.8 if is_weekend else 1.0
    iso = day.isoformat()

    usage = UsageEntry(
        date=iso,
        social_media_minutes=round(rng.randint(45, 120) * screen),
        shopping_minutes=rng.randint(5, 40),
        entertainment_minutes=round(rng.randint(60, 180) * screen),
        dating_apps_minutes=rng.randint(0, 30),
        productivity_minutes=round(rng.randint(60, 180) * activity),
        news_minutes=rng.randint(15, 60),
        games_minutes=round(rng.randint(15, 90) * screen),
        phone_pickups=rng.randint(40, 90),
        late_night_usage_minutes=rng.randint(10, 75),
        steps=round(rng.randint(3000, 10000) * activity),
        sleep_hours=rng.randint(5, 9),
        wake_time=f"{rng.randint(6, 9):02d}:{rng.randint(0, 59):02d}",
    )

    check_in = None
    if rng.random() < CHECK_IN_RATE:
        check_in = CheckIn(
            date=iso,
            mood_score=rng.randint(4, 9),
            primary_theme=rng.choice(ALL_THEMES).value,
            journal_entry="Reflection notes..." if day.toordinal() % 3 == 0 else None,
        )
    return usage, check_in


def seed(
    days: int = DEMO_DAYS,
    r: redis.Redis | None = None,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> int:
    """Replace the store contents with ``days`` days of random data ending today."""
    r = r or redis.Redis.from_url(REDIS_URL, decode_responses=True)
    rng = rng or random.Random()
    today = today or date.today()
    clear_all(r)

    check_ins = 0
    for offset in range(days - 1, -1, -1):
        usage, check_in = random_day(today - timedelta(days=offset), rng)
        save_usage_entry(usage, r)
        if check_in:
            save_check_in(check_in, r)
            check_ins += 1

    logger.info("Seeded %d days of usage and %d check-ins", days, check_ins)
    return days


def seed_scenario(name: str, r: redis.Redis | None = None, today: Optional[date] = None) -> UsageEntry:
    """Write a single scenario entry for today."""
    if name not in SCENARIOS:
        raise ValueError(f"Unknown scenario {name!r}; choose from {', '.join(SCENARIOS)}")
    r = r or redis.Redis.from_url(REDIS_URL, decode_responses=True)
    entry = UsageEntry(date=(today or date.today()).isoformat(), **SCENARIOS[name])
    save_usage_entry(entry, r)
    logger.info("Seeded %s scenario for %s", name, entry.date)
    return entry


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(name)-22s  %(message)s",
        datefmt="%H:%M:%S",
    )
    parser = argparse.ArgumentParser(description="Seed demo data into Redis")
    parser.add_argument("--days", type=int, default=DEMO_DAYS)
    parser.add_argument("--scenario", choices=sorted(SCENARIOS))
    args = parser.parse_args()

    if args.scenario:
        seed_scenario(args.scenario)
    else:
        seed(days=args.days)


if __name__ == "__main__":
    main()
