from __future__ import annotations

import logging
import os
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from platformdirs import user_log_dir

LOG_LEVEL = os.getenv("GRASSROOTS_LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("GRASSROOTS_LOG_DIR") or user_log_dir("grassroots", appauthor=False))
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Client libraries that log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "hpack", "hypercorn.access")


def daily_log_path(log_dir: Path, day: Optional[date] = None) -> Path:
    stamp = (day or date.today()).strftime("%Y%m%d")
    return log_dir / f"grassroots-{stamp}.log"


def build_handlers(log_path: Path) -> List[logging.Handler]:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return [
        logging.StreamHandler(),
        RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8"),
    ]


def configure_logging(*, level: Optional[str] = None, log_path: Optional[Path] = None) -> Path:
    """Send application logs to stderr and a per-day file; returns the file path.

    Calling it again is harmless: ``basicConfig`` leaves an already configured
    root logger alone.
    """

    resolved_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    target = log_path or daily_log_path(LOG_DIR)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=resolved_level, format=LOG_FORMAT, handlers=build_handlers(target))
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))
    return target
