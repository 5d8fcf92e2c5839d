"""Application-wide configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Redis
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
KEY_PREFIX: str = os.getenv("KEY_PREFIX", "insights")

# Theme catalogue + scorer table
THEMES_FILE: Path = Path(
    os.getenv("THEMES_FILE", str(Path(__file__).resolve().parent / "themes.yaml"))
)

# ── Demo data / export ───────────────────────────────────────────────────

DEMO_DAYS: int = int(os.getenv("DEMO_DAYS", "14"))
EXPORT_DIR: Path = Path(os.getenv("EXPORT_DIR", "."))

# ── Server Configuration ─────────────────────────────────────────────────

SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
