"""Narrative highlights and reflective prompts for a trended week."""

from __future__ import annotations

import random
from typing import Optional

from character_insights.models.score import (
    GeneratedPrompt,
    HighlightKind,
    ThemeHighlight,
    ThemeScore,
    Trend,
)
from character_insights.models.theme import get_theme_definition

MAX_HIGHLIGHTS = 3
MAX_PROMPTS = 3
HIGHEST_MIN_SCORE = 3.0
NEEDS_ATTENTION_MIN_SCORE = 5.0
PROMPT_MIN_SCORE = 2.0


def _name(score: ThemeScore) -> str:
    return get_theme_definition(score.theme).name


def _by_score_desc(scores: list[ThemeScore]) -> list[ThemeScore]:
    return sorted(scores, key=lambda s: -s.score)


def generate_highlights(scores: list[ThemeScore]) -> list[ThemeHighlight]:
    if not scores:
        return []
    highlights: list[ThemeHighlight] = []

    top = _by_score_desc(scores)[0]
    if top.score > HIGHEST_MIN_SCORE:
        highlights.append(ThemeHighlight(
            theme=top.theme,
            kind=HighlightKind.HIGHEST,
            message=f"{_name(top)} was your most prominent theme this week ({top.score}/10)",
        ))

    # Falling theme with the best (lowest) reading
    improved = sorted((s for s in scores if s.trend == Trend.DOWN), key=lambda s: s.score)
    if improved:
        highlights.append(ThemeHighlight(
            theme=improved[0].theme,
            kind=HighlightKind.MOST_IMPROVED,
            message=f"{_name(improved[0])} showed improvement this week",
        ))

    rising = _by_score_desc([
        s for s in scores if s.trend == Trend.UP and s.score > NEEDS_ATTENTION_MIN_SCORE
    ])
    if rising:
        highlights.append(ThemeHighlight(
            theme=rising[0].theme,
            kind=HighlightKind.NEEDS_ATTENTION,
            message=f"{_name(rising[0])} is trending upward - consider reflection",
        ))

    return highlights[:MAX_HIGHLIGHTS]


def generate_prompts(
    scores: list[ThemeScore],
    rng: Optional[random.Random] = None,
) -> list[GeneratedPrompt]:
    """One random reflective prompt for each of the top three themes scoring above 2."""
    choose = (rng or random).choice
    top = [s for s in _by_score_desc(scores)[:MAX_PROMPTS] if s.score > PROMPT_MIN_SCORE]
    return [
        GeneratedPrompt(theme=s.theme, prompt=choose(get_theme_definition(s.theme).prompts))
        for s in top
    ]
