"""Export every usage entry and check-in to a JSON file.

Run: python -m character_insights.scripts.export_data [--out-dir DIR]
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import redis

from character_insights.config.settings import EXPORT_DIR, REDIS_URL
from character_insights.storage.daily_store import export_all
from character_insights.utils.dates import get_today

logger = logging.getLogger("export_data")


def export_to_file(out_dir: Path = EXPORT_DIR, r: redis.Redis | None = None) -> Path:
    r = r or redis.Redis.from_url(REDIS_URL, decode_responses=True)
    data = export_all(r)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"character-insights-export-{get_today()}.json"
    path.write_text(json.dumps(data, indent=2))
    logger.info(
        "Exported %d usage entries and %d check-ins to %s",
        len(data["daily_usage"]), len(data["daily_check_ins"]), path,
    )
    return path


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(name)-22s  %(message)s",
        datefmt="%H:%M:%S",
    )
    parser = argparse.ArgumentParser(description="Export stored data to JSON")
    parser.add_argument("--out-dir", type=Path, default=EXPORT_DIR)
    args = parser.parse_args()
    export_to_file(args.out_dir)


if __name__ == "__main__":
    main()
