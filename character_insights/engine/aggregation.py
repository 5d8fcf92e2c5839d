"""Weekly aggregation and week-over-week trend."""

from __future__ import annotations

from collections import Counter

from character_insights.engine.scorers import TOP_CONTRIBUTOR_COUNT
from character_insights.models.score import ThemeScore, Trend
from character_insights.models.theme import ALL_THEMES, Theme

# Previous week must have had data on more than this share of days
MIN_TREND_CONFIDENCE = 0.3
TREND_DELTA = 1.0


def empty_scores() -> list[ThemeScore]:
    return [ThemeScore(theme=t) for t in ALL_THEMES]


def aggregate_weekly_scores(daily_scores: list[list[ThemeScore]]) -> list[ThemeScore]:
    """Average each theme over the days that had data for it.

    ``confidence`` is contributing days over days in the window. Contributors
    are tallied across the week and the three most frequent kept (first seen
    wins ties).
    """
    if not daily_scores:
        return empty_scores()

    sums: dict[Theme, float] = {t: 0.0 for t in ALL_THEMES}
    counts: dict[Theme, int] = {t: 0 for t in ALL_THEMES}
    contributors: dict[Theme, Counter] = {t: Counter() for t in ALL_THEMES}

    for day in daily_scores:
        for score in day:
            if score.confidence > 0:
                sums[score.theme] += score.score
                counts[score.theme] += 1
                contributors[score.theme].update(score.top_contributors)

    window = len(daily_scores)
    weekly = []
    for theme in ALL_THEMES:
        count = counts[theme]
        avg = sums[theme] / count if count else 0.0
        weekly.append(ThemeScore(
            theme=theme,
            score=round(avg, 1),
            confidence=count / window,
            trend=Trend.STABLE,
            top_contributors=[c for c, _ in contributors[theme].most_common(TOP_CONTRIBUTOR_COUNT)],
        ))
    return weekly


def trend_for(current: float, previous: float, previous_confidence: float) -> str:
    if previous_confidence <= MIN_TREND_CONFIDENCE:
        return Trend.STABLE
    diff = round(current - previous, 1)
    if diff >= TREND_DELTA:
        return Trend.UP
    if diff <= -TREND_DELTA:
        return Trend.DOWN
    return Trend.STABLE


def apply_trends(current: list[ThemeScore], previous: list[ThemeScore]) -> list[ThemeScore]:
    """Set each current score's trend against the prior week's aggregate."""
    by_theme = {p.theme: p for p in previous}
    for score in current:
        prev = by_theme.get(score.theme)
        score.trend = (
            trend_for(score.score, prev.score, prev.confidence) if prev else Trend.STABLE
        )
    return current
