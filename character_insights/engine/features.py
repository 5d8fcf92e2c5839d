"""Feature extraction: one day's raw usage + check-in -> ExtractedFeatures.

Every "what counts as high/low" threshold lives here so the scorers only
ever see numbers and flags.
"""

from __future__ import annotations

from typing import Optional

from character_insights.models.checkin import CheckIn
from character_insights.models.usage import CATEGORY_FIELDS, ExtractedFeatures, UsageEntry

LOW_ACTIVITY_STEPS = 3000
HIGH_SCREEN_TIME_MINUTES = 240
LATE_WAKE_HOUR = 9
HIGH_LATE_NIGHT_MINUTES = 60


def parse_wake_hour(wake_time: str) -> int:
    """Hour of an ``HH:MM`` string; 0 when it cannot be parsed."""
    try:
        hour = int(wake_time.split(":", 1)[0])
    except (ValueError, AttributeError):
        return 0
    return hour if 0 <= hour <= 23 else 0


class FeatureExtractor:
    """Pure and total: absent inputs give zeroed values and false flags."""

    def extract(
        self,
        usage: Optional[UsageEntry],
        check_in: Optional[CheckIn],
        day: Optional[str] = None,
    ) -> ExtractedFeatures:
        day = day or (usage.date if usage else check_in.date if check_in else "")
        features = ExtractedFeatures(date=day)

        if usage is not None:
            features.has_usage = True
            for name in CATEGORY_FIELDS:
                setattr(features, name, getattr(usage, name))

            features.total_screen_time_minutes = sum(getattr(usage, n) for n in CATEGORY_FIELDS)
            features.passive_consumption_minutes = (
                usage.entertainment_minutes + usage.social_media_minutes + usage.news_minutes
            )
            features.phone_pickups = usage.phone_pickups
            features.late_night_usage_minutes = usage.late_night_usage_minutes
            features.steps = usage.steps
            features.sleep_hours = usage.sleep_hours
            features.wake_time_hour = parse_wake_hour(usage.wake_time)

            features.is_low_activity = usage.steps < LOW_ACTIVITY_STEPS
            features.is_high_screen_time = features.total_screen_time_minutes > HIGH_SCREEN_TIME_MINUTES
            features.is_late_wake = features.wake_time_hour >= LATE_WAKE_HOUR
            features.is_high_late_night = usage.late_night_usage_minutes > HIGH_LATE_NIGHT_MINUTES

        if check_in is not None:
            features.has_check_in = True
            features.mood_score = check_in.mood_score
            features.self_reported_theme = check_in.primary_theme

        return features


feature_extractor = FeatureExtractor()
