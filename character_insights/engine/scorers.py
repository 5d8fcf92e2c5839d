"""Theme scorers.

All twelve themes share one scorer; only the signal table loaded from
``themes.yaml`` differs. A day's score is the weighted mean of the
normalized signals, scaled to 0-10 and rounded to one decimal.
"""

from __future__ import annotations

from dataclasses import dataclass

from character_insights.models.score import SignalContribution, ThemeScore
from character_insights.models.theme import (
    ALL_THEMES,
    SignalSpec,
    Theme,
    load_theme_definitions,
)
from character_insights.models.usage import ExtractedFeatures

TOP_CONTRIBUTOR_COUNT = 3


def _has_source(features: ExtractedFeatures, spec: SignalSpec) -> bool:
    return features.has_check_in if spec.source == "check_in" else features.has_usage


def _raw_value(features: ExtractedFeatures, spec: SignalSpec, theme: Theme) -> float:
    if spec.field == "self_reported":
        return 1.0 if features.self_reported_theme == theme.value else 0.0
    value = getattr(features, spec.field)
    if value is None:
        return 0.0
    return float(value)


def normalize(raw: float, max_value: float, invert: bool = False) -> float:
    """Map ``raw`` into [0, 1] against ``max_value``; inverted signals measure the deficit."""
    if max_value <= 0:
        return 0.0
    ratio = min(max(raw / max_value, 0.0), 1.0)
    return 1.0 - ratio if invert else ratio


@dataclass(frozen=True)
class ThemeScorer:
    theme: Theme
    signals: tuple[SignalSpec, ...]

    def calculate(self, features: ExtractedFeatures) -> ThemeScore:
        breakdown: list[SignalContribution] = []
        has_data = False

        for spec in self.signals:
            present = _has_source(features, spec)
            has_data = has_data or present
            raw = _raw_value(features, spec, self.theme) if present else 0.0
            normalized = normalize(raw, spec.max_value, spec.invert) if present else 0.0
            breakdown.append(SignalContribution(
                source=spec.field,
                label=spec.label,
                weight=spec.weight,
                raw_value=raw,
                normalized_value=round(normalized, 4),
            ))

        if not has_data:
            return ThemeScore(theme=self.theme, signal_breakdown=breakdown)

        total_weight = sum(c.weight for c in breakdown)
        weighted = sum(c.weight * c.normalized_value for c in breakdown)
        score = (weighted / total_weight) * 10 if total_weight > 0 else 0.0
        score = round(min(max(score, 0.0), 10.0), 1)

        # sorted() is stable, so ties keep table order
        ranked = sorted(
            (c for c in breakdown if c.normalized_value > 0),
            key=lambda c: -c.normalized_value,
        )
        return ThemeScore(
            theme=self.theme,
            score=score,
            confidence=1.0,
            top_contributors=[c.label for c in ranked[:TOP_CONTRIBUTOR_COUNT]],
            signal_breakdown=breakdown,
        )


def build_scorers() -> list[ThemeScorer]:
    definitions = load_theme_definitions()
    return [ThemeScorer(theme=t, signals=definitions[t].signals) for t in ALL_THEMES]


ALL_SCORERS: list[ThemeScorer] = build_scorers()
