"""MyBest scraper API: main entry point.

Request flow:
  1. Route the request (api.py)
  2. Fetch the source page from id.my-best.com
  3. Extract articles / products / categories from the parsed page
  4. Respond with JSON
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

import uvicorn

from mybest.config import HOST, LOG_DIR, LOG_LEVEL, PORT


def setup_logging() -> None:
    """Initial logging setup."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"api_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def run() -> None:
    """Start the API server."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Server ready at http://%s:%d", HOST, PORT)
    uvicorn.run("mybest.api:app", host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()
