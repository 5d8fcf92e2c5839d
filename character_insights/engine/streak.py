"""Consecutive-day check-in streaks."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional

from character_insights.models.checkin import CheckInStreak
from character_insights.utils.dates import DateLike, get_today, parse_date


def compute_streak(
    check_in_dates: Iterable[DateLike],
    today: Optional[DateLike] = None,
) -> CheckInStreak:
    """Current and longest runs of exactly adjacent days.

    The current streak only counts when the latest check-in is today or
    yesterday; the longest streak ignores recency.
    """
    days = sorted({parse_date(d) for d in check_in_dates}, reverse=True)
    if not days:
        return CheckInStreak()

    today_d = parse_date(today if today is not None else get_today())
    one_day = timedelta(days=1)

    runs: list[int] = []
    run = 1
    for prev, day in zip(days, days[1:]):
        if day == prev - one_day:
            run += 1
        else:
            runs.append(run)
            run = 1
    runs.append(run)

    # runs[0] is the run containing the most recent check-in
    current = runs[0] if days[0] in (today_d, today_d - one_day) else 0

    return CheckInStreak(
        current_streak=current,
        longest_streak=max(runs),
        last_check_in_date=days[0].isoformat(),
    )
