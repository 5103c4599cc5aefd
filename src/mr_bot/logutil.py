"""
Logging setup and one-line JSON event records.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

logger = logging.getLogger("mr_bot")


def configure_logging(slack_debug: bool = False) -> None:
    level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logger.setLevel(level)
    if root.level and root.level > level:
        root.setLevel(level)
    if slack_debug:
        logging.getLogger("slack_sdk").setLevel(logging.DEBUG)


def log_event(msg: str, level: int = logging.INFO, **fields: Any) -> None:
    try:
        rec = {"msg": msg, **fields}
        logger.log(level, json.dumps(rec, ensure_ascii=False))
    except (TypeError, ValueError):
        # Fallback to plain log
        logger.log(level, "%s | %s", msg, fields)
