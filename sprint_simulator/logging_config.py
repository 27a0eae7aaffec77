"""
Logging setup for Sprint Simulator.
"""

import logging
from typing import Optional


DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int | str = logging.INFO, fmt: Optional[str] = None) -> None:
    """Configure standard library logging for the API and scripts."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=fmt or DEFAULT_LOG_FORMAT,
        handlers=[logging.StreamHandler()]
    )
