"""Daily usage entry and the feature record derived from it."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

CATEGORY_FIELDS = (
    "social_media_minutes",
    "shopping_minutes",
    "entertainment_minutes",
    "dating_apps_minutes",
    "productivity_minutes",
    "news_minutes",
    "games_minutes",
)

_INT_FIELDS = CATEGORY_FIELDS + (
    "phone_pickups",
    "late_night_usage_minutes",
    "steps",
)


@dataclass
class UsageEntry:
    """Self-reported usage for one calendar date (unique per date)."""

    date: str                           # YYYY-MM-DD

    # Time in minutes per category
    social_media_minutes: int = 0
    shopping_minutes: int = 0
    entertainment_minutes: int = 0
    dating_apps_minutes: int = 0
    productivity_minutes: int = 0
    news_minutes: int = 0
    games_minutes: int = 0

    # Behavioral metrics
    phone_pickups: int = 0
    late_night_usage_minutes: int = 0   # after 11pm

    # Health metrics
    steps: int = 0
    sleep_hours: float = 0.0
    wake_time: str = "07:00"            # HH:MM, 24h

    created_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UsageEntry:
        """Build from a Redis hash. Raises ValueError on a missing or malformed field."""
        data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        for int_field in _INT_FIELDS:
            if int_field in data:
                data[int_field] = int(float(data[int_field]))
        for float_field in ("sleep_hours", "created_at"):
            if float_field in data:
                data[float_field] = float(data[float_field])
        try:
            return cls(**data)
        except TypeError as exc:
            raise ValueError(f"Malformed usage record: {exc!r}") from exc


@dataclass
class ExtractedFeatures:
    """Derived, never persisted. One per date, built by the feature extractor."""

    date: str

    # Category time (minutes)
    social_media_minutes: int = 0
    shopping_minutes: int = 0
    entertainment_minutes: int = 0
    dating_apps_minutes: int = 0
    productivity_minutes: int = 0
    news_minutes: int = 0
    games_minutes: int = 0

    # Derived metrics
    total_screen_time_minutes: int = 0
    passive_consumption_minutes: int = 0    # entertainment + social + news
    phone_pickups: int = 0
    late_night_usage_minutes: int = 0

    # Health metrics
    steps: int = 0
    sleep_hours: float = 0.0
    wake_time_hour: int = 0                 # 0-23

    # Self-report (from check-in if available)
    self_reported_theme: Optional[str] = None
    mood_score: Optional[int] = None

    # Derived patterns
    is_low_activity: bool = False           # steps < 3000
    is_high_screen_time: bool = False       # > 4 hours
    is_late_wake: bool = False              # 9am or later
    is_high_late_night: bool = False        # > 60 min late-night usage

    has_usage: bool = False
    has_check_in: bool = False
