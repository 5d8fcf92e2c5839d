"""Redis-backed record store for usage entries and check-ins.

One hash per date per record type, keyed by the ISO date, so a re-save for
the same date overwrites in place (last write wins). A sorted set per type
indexes the dates by ordinal for range queries:

    {prefix}:usage:{date}      hash   UsageEntry fields
    {prefix}:usage:dates       zset   date -> date ordinal
    {prefix}:checkin:{date}    hash   CheckIn fields
    {prefix}:checkin:dates     zset   date -> date ordinal
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

import redis

from character_insights.config.settings import KEY_PREFIX, REDIS_URL
from character_insights.models.checkin import CheckIn
from character_insights.models.usage import UsageEntry

logger = logging.getLogger(__name__)

USAGE_PREFIX = f"{KEY_PREFIX}:usage:"
CHECKIN_PREFIX = f"{KEY_PREFIX}:checkin:"
USAGE_INDEX_KEY = f"{KEY_PREFIX}:usage:dates"
CHECKIN_INDEX_KEY = f"{KEY_PREFIX}:checkin:dates"


def _get_redis() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


def _ordinal(iso_date: str) -> int:
    return date.fromisoformat(iso_date).toordinal()


def _decode(data: dict) -> dict[str, Any]:
    return {k.decode() if isinstance(k, bytes) else k:
            v.decode() if isinstance(v, bytes) else v
            for k, v in data.items()}


def _save(r: redis.Redis, prefix: str, index_key: str, day: str, mapping: dict[str, Any]) -> None:
    key = f"{prefix}{day}"
    pipe = r.pipeline(transaction=True)
    pipe.delete(key)  # drop fields the new record no longer carries
    pipe.hset(key, mapping=mapping)
    pipe.zadd(index_key, {day: _ordinal(day)})
    pipe.execute()


def _members(values) -> list[str]:
    return [v.decode() if isinstance(v, bytes) else v for v in values]


def _dates_in_range(r: redis.Redis, index_key: str, start_date: str, end_date: str) -> list[str]:
    return _members(r.zrangebyscore(index_key, _ordinal(start_date), _ordinal(end_date)))


# ---------------------------------------------------------------------------
# Usage entries
# ---------------------------------------------------------------------------

def save_usage_entry(entry: UsageEntry, r: redis.Redis | None = None) -> None:
    """Upsert the usage entry for ``entry.date``."""
    r = r or _get_redis()
    _save(r, USAGE_PREFIX, USAGE_INDEX_KEY, entry.date, entry.to_dict())
    logger.info("Saved usage entry for %s", entry.date)


def get_usage_for_date(day: str, r: redis.Redis | None = None) -> Optional[UsageEntry]:
    r = r or _get_redis()
    data = r.hgetall(f"{USAGE_PREFIX}{day}")
    if not data:
        return None
    return UsageEntry.from_dict(_decode(data))


def get_usage_for_range(
    start_date: str, end_date: str, r: redis.Redis | None = None,
) -> list[UsageEntry]:
    """Usage entries with start_date <= date <= end_date, oldest first."""
    r = r or _get_redis()
    entries = []
    for day in _dates_in_range(r, USAGE_INDEX_KEY, start_date, end_date):
        entry = get_usage_for_date(day, r)
        if entry:
            entries.append(entry)
    return entries


# ---------------------------------------------------------------------------
# Check-ins
# ---------------------------------------------------------------------------

def save_check_in(check_in: CheckIn, r: redis.Redis | None = None) -> None:
    """Upsert the check-in for ``check_in.date``."""
    r = r or _get_redis()
    _save(r, CHECKIN_PREFIX, CHECKIN_INDEX_KEY, check_in.date, check_in.to_redis())
    logger.info("Saved check-in for %s (theme=%s)", check_in.date, check_in.primary_theme)


def get_check_in_for_date(day: str, r: redis.Redis | None = None) -> Optional[CheckIn]:
    r = r or _get_redis()
    data = r.hgetall(f"{CHECKIN_PREFIX}{day}")
    if not data:
        return None
    return CheckIn.from_dict(_decode(data))


def get_check_ins_for_range(
    start_date: str, end_date: str, r: redis.Redis | None = None,
) -> list[CheckIn]:
    r = r or _get_redis()
    check_ins = []
    for day in _dates_in_range(r, CHECKIN_INDEX_KEY, start_date, end_date):
        check_in = get_check_in_for_date(day, r)
        if check_in:
            check_ins.append(check_in)
    return check_ins


def list_check_in_dates(r: redis.Redis | None = None) -> list[str]:
    """All check-in dates, most recent first."""
    r = r or _get_redis()
    return _members(r.zrevrange(CHECKIN_INDEX_KEY, 0, -1))


def list_check_ins(r: redis.Redis | None = None) -> list[CheckIn]:
    """All check-ins, most recent first."""
    r = r or _get_redis()
    check_ins = []
    for day in list_check_in_dates(r):
        check_in = get_check_in_for_date(day, r)
        if check_in:
            check_ins.append(check_in)
    return check_ins


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------

def clear_all(r: redis.Redis | None = None) -> int:
    """Remove every usage entry and check-in. Returns the number of keys deleted."""
    r = r or _get_redis()
    keys = list(r.scan_iter(f"{USAGE_PREFIX}*")) + list(r.scan_iter(f"{CHECKIN_PREFIX}*"))
    deleted = r.delete(*keys) if keys else 0
    logger.info("Cleared %d keys from the record store", deleted)
    return deleted


def export_all(r: redis.Redis | None = None) -> dict[str, Any]:
    """Dump every record as plain dicts, oldest first."""
    r = r or _get_redis()
    usage_dates = _members(r.zrange(USAGE_INDEX_KEY, 0, -1))
    usage = [get_usage_for_date(d, r) for d in usage_dates]
    check_ins = list(reversed(list_check_ins(r)))
    return {
        "export_date": datetime.now(timezone.utc).isoformat(),
        "daily_usage": [u.to_dict() for u in usage if u],
        "daily_check_ins": [c.to_dict() for c in check_ins],
    }
