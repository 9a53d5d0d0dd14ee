"""Logging configuration shared by the server and the CLI."""

import logging
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure logging for renderer operations."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
