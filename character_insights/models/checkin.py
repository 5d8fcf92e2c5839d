"""Daily check-in record and streak summary."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class CheckIn:
    date: str                               # YYYY-MM-DD
    mood_score: int                         # 1-10
    primary_theme: str                      # Theme value
    journal_entry: Optional[str] = None
    created_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_redis(self) -> dict[str, Any]:
        """Flatten for a Redis hash (no None values allowed)."""
        d = self.to_dict()
        if d["journal_entry"] is None:
            del d["journal_entry"]
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckIn:
        """Build from a Redis hash. Raises ValueError on a missing or malformed field."""
        data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        try:
            data["mood_score"] = int(data["mood_score"])
            if "created_at" in data:
                data["created_at"] = float(data["created_at"])
            if not data.get("journal_entry"):
                data["journal_entry"] = None
            return cls(**data)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed check-in record: {exc!r}") from exc


@dataclass
class CheckInStreak:
    current_streak: int = 0
    longest_streak: int = 0
    last_check_in_date: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
