"""Logging setup.  All modules log through ``loguru.logger``."""

from __future__ import annotations

import sys

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

_configured = False


def configure_logging(level: str = "INFO", *, force: bool = False) -> None:
    """Install a single stderr sink at *level*.

    Safe to call more than once; later calls are ignored unless *force*.
    """
    global _configured
    if _configured and not force:
        return
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT, backtrace=False)
    _configured = True


def snippet(text: str, limit: int = 40) -> str:
    """Shorten user text before it goes into a log line."""
    text = " ".join(text.split())
    return text if len(text) <= limit else text[:limit] + "..."
