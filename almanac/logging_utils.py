"""Logging helpers for the almanac CLI."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "ALMANAC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(verbose: bool = False) -> int:
    """DEBUG when verbose, else $ALMANAC_LOG_LEVEL, else WARNING."""
    if verbose:
        return logging.DEBUG
    name = (os.getenv(LOG_LEVEL_ENV) or "").strip().upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: Optional[int] = None) -> None:
    """Configure default logging if no handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=resolve_level() if level is None else level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
