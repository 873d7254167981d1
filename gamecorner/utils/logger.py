"""Logging utilities shared by the engines, adapters and CLI."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str, None]) -> int:
    """Accept ``"debug"``, ``"INFO"``, ``10`` and similar; unknown names fall back to INFO."""

    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install a single stderr handler on the root logger.

    Engines log state transitions at DEBUG and session lifecycle at INFO, so
    the default level keeps a play session quiet.
    """

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "gamecorner")
