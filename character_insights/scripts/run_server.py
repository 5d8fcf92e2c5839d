#!/usr/bin/env python3
"""Launch the FastAPI server.

Usage:
    python -m character_insights.scripts.run_server
"""

from __future__ import annotations

import logging

from character_insights.config.settings import SERVER_HOST, SERVER_PORT


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(name)-22s  %(message)s",
        datefmt="%H:%M:%S",
    )
    import uvicorn
    uvicorn.run(
        "character_insights.server:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        log_level="info",
        reload=False,
    )


if __name__ == "__main__":
    main()
