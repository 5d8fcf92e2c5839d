"""Tests for the table-driven theme scorers."""

import pytest

from character_insights.engine.features import FeatureExtractor
from character_insights.engine.scorers import ALL_SCORERS, ThemeScorer, normalize
from character_insights.models.theme import ALL_THEMES, SignalSpec, Theme, load_theme_definitions


extract = FeatureExtractor().extract


def _scorer(theme):
    return next(s for s in ALL_SCORERS if s.theme == theme)


def _by_theme(scores):
    return {s.theme: s for s in scores}


# ═══════════════════════════════════════════════════════════════════════════
# Theme table
# ═══════════════════════════════════════════════════════════════════════════


class TestThemeTable:
    def test_one_scorer_per_theme(self):
        assert [s.theme for s in ALL_SCORERS] == ALL_THEMES
        assert len(ALL_SCORERS) == 12

    def test_every_theme_has_positive_weights_and_maxima(self):
        for theme, definition in load_theme_definitions().items():
            assert definition.signals, theme
            assert definition.prompts, theme
            for spec in definition.signals:
                assert spec.weight > 0
                assert spec.max_value > 0

    def test_every_signal_reads_a_known_feature(self):
        from character_insights.models.usage import ExtractedFeatures
        fields = set(ExtractedFeatures.__dataclass_fields__) | {"self_reported"}
        for definition in load_theme_definitions().values():
            for spec in definition.signals:
                assert spec.field in fields, spec.field

    def test_unknown_theme_value(self):
        with pytest.raises(ValueError, match="Unknown theme"):
            Theme.from_value("vanity")


# ═══════════════════════════════════════════════════════════════════════════
# Normalization
# ═══════════════════════════════════════════════════════════════════════════


class TestNormalize:
    def test_clamped_at_one(self):
        assert normalize(500, 100) == 1.0

    def test_proportional(self):
        assert normalize(45, 90) == pytest.approx(0.5)

    def test_inverted_measures_deficit(self):
        assert normalize(3, 10, invert=True) == pytest.approx(0.7)
        assert normalize(20, 10, invert=True) == 0.0

    def test_zero_max(self):
        assert normalize(5, 0) == 0.0


# ═══════════════════════════════════════════════════════════════════════════
# Calculate
# ═══════════════════════════════════════════════════════════════════════════


class TestCalculate:
    def test_weighted_mean_scaled_to_ten(self, make_usage):
        """Pride: social (0.35) and pickups (0.25) maxed out of total weight 1.0 → 6.0."""
        f = extract(make_usage("2026-10-12", social_media_minutes=180, phone_pickups=100), None)
        score = _scorer(Theme.PRIDE).calculate(f)
        assert score.score == 6.0
        assert score.confidence == 1.0
        assert score.top_contributors == ["Social media time", "Phone pickups"]

    def test_all_signals_maxed_gives_ten(self, make_usage, make_check_in):
        f = extract(
            make_usage("2026-10-12", social_media_minutes=300, phone_pickups=200, dating_apps_minutes=60),
            make_check_in("2026-10-12", primary_theme="pride"),
        )
        score = _scorer(Theme.PRIDE).calculate(f)
        assert score.score == 10.0
        assert len(score.top_contributors) == 3

    def test_rounded_to_one_decimal(self, make_usage):
        f = extract(make_usage("2026-10-12", shopping_minutes=30), None)
        score = _scorer(Theme.GREED).calculate(f)
        assert score.score == round(score.score, 1)
        assert score.score == pytest.approx(1.5)

    def test_breakdown_lists_every_configured_signal(self, make_usage):
        f = extract(make_usage("2026-10-12", news_minutes=60), None)
        score = _scorer(Theme.FEAR).calculate(f)
        definition = load_theme_definitions()[Theme.FEAR]
        assert [c.label for c in score.signal_breakdown] == [s.label for s in definition.signals]
        news = score.signal_breakdown[0]
        assert news.source == "news_minutes"
        assert news.raw_value == 60
        assert news.normalized_value == pytest.approx(0.5)
        assert news.weight == 0.3

    def test_zero_signals_are_not_contributors(self, make_usage):
        f = extract(make_usage("2026-10-12", social_media_minutes=90), None)
        score = _scorer(Theme.PRIDE).calculate(f)
        assert score.top_contributors == ["Social media time"]

    def test_self_reported_theme_only_counts_for_that_theme(self, make_check_in):
        f = extract(None, make_check_in("2026-10-12", mood_score=10, primary_theme="dishonesty"))
        scores = _by_theme(s.calculate(f) for s in ALL_SCORERS)
        assert scores[Theme.DISHONESTY].score == 4.0
        assert scores[Theme.DISHONESTY].top_contributors == ["Self-reported dishonesty"]
        assert scores[Theme.PRIDE].score == 0.0

    def test_low_mood_raises_mood_driven_themes(self, make_check_in):
        low = extract(None, make_check_in("2026-10-12", mood_score=1, primary_theme="pride"))
        high = extract(None, make_check_in("2026-10-12", mood_score=10, primary_theme="pride"))
        scorer = _scorer(Theme.SELF_PITY)
        assert scorer.calculate(low).score > scorer.calculate(high).score


class TestConfidence:
    def test_no_data_gives_zero_score_and_confidence(self):
        f = extract(None, None, day="2026-10-12")
        for score in (s.calculate(f) for s in ALL_SCORERS):
            assert score.score == 0.0
            assert score.confidence == 0.0
            assert score.top_contributors == []

    def test_usage_present_gives_full_confidence(self, make_usage):
        f = extract(make_usage("2026-10-12"), None)
        assert all(s.calculate(f).confidence == 1.0 for s in ALL_SCORERS)

    def test_inverted_signal_ignored_without_its_source(self, make_usage):
        """Usage without a check-in must not read a missing mood as 'very low mood'."""
        f = extract(make_usage("2026-10-12"), None)
        score = _scorer(Theme.ENVY).calculate(f)
        mood = next(c for c in score.signal_breakdown if c.source == "mood_score")
        assert mood.normalized_value == 0.0
        assert score.score == 0.0

    def test_check_in_only_theme_without_check_in_signals_still_confident(self, make_check_in):
        f = extract(None, make_check_in("2026-10-12", primary_theme="anger"))
        score = _scorer(Theme.GREED).calculate(f)
        assert score.confidence == 1.0
        assert score.score == 0.0

    def test_scorer_with_only_usage_signals_ignores_check_in_only_days(self, make_check_in):
        scorer = ThemeScorer(
            theme=Theme.SLOTH,
            signals=(SignalSpec(field="steps", label="Steps", weight=1.0, max_value=10000),),
        )
        f = extract(None, make_check_in("2026-10-12"))
        assert scorer.calculate(f).confidence == 0.0


class TestScoreBounds:
    @pytest.mark.parametrize("profile", [
        {},
        {"steps": 0, "sleep_hours": 0},
        {"social_media_minutes": 10_000, "shopping_minutes": 10_000, "entertainment_minutes": 10_000,
         "dating_apps_minutes": 10_000, "news_minutes": 10_000, "games_minutes": 10_000,
         "phone_pickups": 10_000, "late_night_usage_minutes": 10_000, "sleep_hours": 24,
         "wake_time": "13:00"},
        {"productivity_minutes": 10_000, "steps": 50_000, "sleep_hours": 8},
    ])
    def test_scores_within_zero_and_ten(self, profile, make_usage, make_check_in):
        for check_in in (None, make_check_in("2026-10-12", mood_score=1), make_check_in("2026-10-12", mood_score=10)):
            f = extract(make_usage("2026-10-12", **profile), check_in)
            for score in (s.calculate(f) for s in ALL_SCORERS):
                assert 0.0 <= score.score <= 10.0
                assert len(score.top_contributors) <= 3

    def test_high_sloth_day_peaks_on_sloth(self, make_usage, high_sloth):
        f = extract(make_usage("2026-10-12", **high_sloth), None)
        scores = [s.calculate(f) for s in ALL_SCORERS]
        top = max(scores, key=lambda s: s.score)
        assert top.theme == Theme.SLOTH
        assert top.score == 7.6
