"""Scoring output records: per-theme scores, highlights, prompts, weekly report."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from character_insights.models.theme import Theme


class Trend:
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class HighlightKind:
    HIGHEST = "highest"
    MOST_IMPROVED = "most_improved"
    NEEDS_ATTENTION = "needs_attention"


@dataclass
class SignalContribution:
    """One scorer's accounting of a single input signal."""

    source: str             # feature field the value was read from
    label: str
    weight: float
    raw_value: float
    normalized_value: float  # 0.0 - 1.0


@dataclass
class ThemeScore:
    theme: Theme
    score: float = 0.0          # 0 - 10
    confidence: float = 0.0     # 0 - 1, share of the window with usable data
    trend: str = Trend.STABLE
    top_contributors: list[str] = field(default_factory=list)
    signal_breakdown: list[SignalContribution] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["theme"] = self.theme.value
        return d


@dataclass
class ThemeHighlight:
    theme: Theme
    kind: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"theme": self.theme.value, "kind": self.kind, "message": self.message}


@dataclass
class GeneratedPrompt:
    theme: Theme
    prompt: str

    def to_dict(self) -> dict[str, Any]:
        return {"theme": self.theme.value, "prompt": self.prompt}


@dataclass
class WeeklyReport:
    week_start_date: str
    week_end_date: str
    scores: list[ThemeScore] = field(default_factory=list)
    highlights: list[ThemeHighlight] = field(default_factory=list)
    reflective_prompts: list[GeneratedPrompt] = field(default_factory=list)

    def score_for(self, theme: Theme) -> ThemeScore:
        for s in self.scores:
            if s.theme == theme:
                return s
        raise KeyError(theme)

    def to_dict(self) -> dict[str, Any]:
        return {
            "week_start_date": self.week_start_date,
            "week_end_date": self.week_end_date,
            "scores": [s.to_dict() for s in self.scores],
            "highlights": [h.to_dict() for h in self.highlights],
            "reflective_prompts": [p.to_dict() for p in self.reflective_prompts],
        }
