"""Scoring Engine: daily scores, weekly reports and check-in streaks.

Everything is recomputed from the record store on each call; nothing
derived is cached between calls. A weekly report rescans the previous week
through the same pipeline to get its trend baseline.
"""

from __future__ import annotations

import logging
import random
from datetime import timedelta
from typing import Optional

import redis

from character_insights.engine.aggregation import aggregate_weekly_scores, apply_trends
from character_insights.engine.features import FeatureExtractor, feature_extractor
from character_insights.engine.highlights import generate_highlights, generate_prompts
from character_insights.engine.scorers import ALL_SCORERS, ThemeScorer
from character_insights.engine.streak import compute_streak
from character_insights.models.checkin import CheckInStreak
from character_insights.models.score import ThemeScore, WeeklyReport
from character_insights.storage import daily_store
from character_insights.utils.dates import (
    DateLike,
    get_previous_week,
    get_week_start,
    parse_date,
    week_days,
)

logger = logging.getLogger(__name__)


class ScoringError(Exception):
    """A score computation failed because the record store could not be read."""


class ScoringEngine:
    def __init__(
        self,
        r: redis.Redis | None = None,
        extractor: FeatureExtractor = feature_extractor,
        scorers: Optional[list[ThemeScorer]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._r = r
        self._extractor = extractor
        self._scorers = scorers if scorers is not None else ALL_SCORERS
        self._rng = rng

    def _redis(self) -> redis.Redis:
        if self._r is None:
            self._r = daily_store._get_redis()
        return self._r

    # -- Daily --

    def calculate_daily_scores(self, day: DateLike) -> list[ThemeScore]:
        """Score every theme for one date. Missing data gives zero-confidence scores."""
        day = parse_date(day).isoformat()
        r = self._redis()
        try:
            usage = daily_store.get_usage_for_date(day, r)
            check_in = daily_store.get_check_in_for_date(day, r)
        except (redis.RedisError, ValueError) as exc:
            logger.exception("Could not read records for %s", day)
            raise ScoringError(f"Score computation failed for {day}: {exc}") from exc

        features = self._extractor.extract(usage, check_in, day=day)
        scores = [scorer.calculate(features) for scorer in self._scorers]
        logger.debug(
            "Scored %s (usage=%s, check_in=%s)", day, usage is not None, check_in is not None,
        )
        return scores

    # -- Weekly --

    def _weekly_scores(self, week_start: str) -> list[ThemeScore]:
        daily = [self.calculate_daily_scores(day) for day in week_days(week_start)]
        return aggregate_weekly_scores(daily)

    def calculate_weekly_report(self, week_start_date: DateLike) -> WeeklyReport:
        """Aggregate a Monday-Sunday week, trend it against the prior week, and narrate it.

        A date that is not a Monday is snapped back to its week's Monday. Any
        store failure fails the whole report.
        """
        start = parse_date(get_week_start(week_start_date))
        week_start = start.isoformat()
        week_end = (start + timedelta(days=6)).isoformat()

        current = self._weekly_scores(week_start)
        previous = self._weekly_scores(get_previous_week(week_start))
        scores = apply_trends(current, previous)

        report = WeeklyReport(
            week_start_date=week_start,
            week_end_date=week_end,
            scores=scores,
            highlights=generate_highlights(scores),
            reflective_prompts=generate_prompts(scores, rng=self._rng),
        )
        logger.info(
            "Computed weekly report %s..%s (%d highlights, %d prompts)",
            week_start, week_end, len(report.highlights), len(report.reflective_prompts),
        )
        return report

    # -- Streak --

    def compute_streak(self, today: Optional[DateLike] = None) -> CheckInStreak:
        try:
            dates = daily_store.list_check_in_dates(self._redis())
        except redis.RedisError as exc:
            logger.exception("Store read failed while listing check-ins")
            raise ScoringError(f"Streak computation failed: {exc}") from exc
        return compute_streak(dates, today=today)

    @staticmethod
    def get_current_week_start() -> str:
        return get_week_start()
