"""Monday-anchored week helpers. Dates travel as ISO strings (YYYY-MM-DD)."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator, Optional, Union

DateLike = Union[date, str]


def parse_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def get_today() -> str:
    return date.today().isoformat()


def get_week_start(day: Optional[DateLike] = None) -> str:
    d = parse_date(day) if day is not None else date.today()
    return (d - timedelta(days=d.weekday())).isoformat()


def get_week_end(day: Optional[DateLike] = None) -> str:
    start = parse_date(get_week_start(day))
    return (start + timedelta(days=6)).isoformat()


def week_days(week_start: DateLike) -> Iterator[str]:
    """The seven ISO dates from ``week_start`` onward."""
    start = parse_date(week_start)
    for offset in range(7):
        yield (start + timedelta(days=offset)).isoformat()


def get_previous_week(week_start: DateLike) -> str:
    return (parse_date(week_start) - timedelta(weeks=1)).isoformat()


def get_next_week(week_start: DateLike) -> str:
    return (parse_date(week_start) + timedelta(weeks=1)).isoformat()


def format_week_range(week_start: DateLike) -> str:
    """'Oct 12 - Oct 18, 2026'."""
    start = parse_date(week_start)
    end = start + timedelta(days=6)
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}, {end.year}"


def is_current_week(week_start: DateLike) -> bool:
    return parse_date(week_start).isoformat() == get_week_start()


def is_future_week(week_start: DateLike) -> bool:
    return parse_date(week_start).isoformat() > get_week_start()
