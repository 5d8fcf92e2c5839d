"""Character themes and the data-driven scorer table behind them.

The catalogue (display name, description, reflective prompts) and each
theme's signal list live in ``config/themes.yaml`` so the weights can be
reviewed without touching scoring code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from character_insights.config.settings import THEMES_FILE


class Theme(str, Enum):
    PRIDE = "pride"
    GREED = "greed"
    LUST = "lust"
    ANGER = "anger"
    GLUTTONY = "gluttony"
    ENVY = "envy"
    SLOTH = "sloth"
    FEAR = "fear"
    SELF_PITY = "self_pity"
    GUILT = "guilt"
    SHAME = "shame"
    DISHONESTY = "dishonesty"

    @classmethod
    def from_value(cls, value: str) -> Theme:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown theme: {value!r}") from None


ALL_THEMES: list[Theme] = list(Theme)

# Fields fed by the day's check-in rather than its usage entry
CHECK_IN_FIELDS = {"mood_score", "self_reported"}


@dataclass(frozen=True)
class SignalSpec:
    """One row of a theme's scorer table."""

    field: str
    label: str
    weight: float
    max_value: float
    invert: bool = False

    @property
    def source(self) -> str:
        return "check_in" if self.field in CHECK_IN_FIELDS else "usage"


@dataclass(frozen=True)
class ThemeDefinition:
    theme: Theme
    name: str
    description: str
    prompts: tuple[str, ...]
    signals: tuple[SignalSpec, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.theme.value,
            "name": self.name,
            "description": self.description,
            "reflective_prompts": list(self.prompts),
        }


def _parse_definition(theme: Theme, raw: dict[str, Any]) -> ThemeDefinition:
    signals = tuple(
        SignalSpec(
            field=s["field"],
            label=s["label"],
            weight=float(s["weight"]),
            max_value=float(s["max"]),
            invert=bool(s.get("invert", False)),
        )
        for s in raw.get("signals", [])
    )
    prompts = tuple(raw.get("prompts", []))
    if not signals:
        raise ValueError(f"Theme {theme.value} has no signals configured")
    if not prompts:
        raise ValueError(f"Theme {theme.value} has no reflective prompts")
    return ThemeDefinition(
        theme=theme,
        name=raw["name"],
        description=" ".join(str(raw.get("description", "")).split()),
        prompts=prompts,
        signals=signals,
    )


@lru_cache(maxsize=None)
def load_theme_definitions(path: Path = THEMES_FILE) -> dict[Theme, ThemeDefinition]:
    """Load and validate the theme table; every theme must be present."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    missing = [t.value for t in ALL_THEMES if t.value not in raw]
    if missing:
        raise ValueError(f"Theme table {path} is missing: {', '.join(missing)}")

    return {theme: _parse_definition(theme, raw[theme.value]) for theme in ALL_THEMES}


def get_theme_definition(theme: Theme) -> ThemeDefinition:
    return load_theme_definitions()[theme]
