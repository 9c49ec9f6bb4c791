"""Route loguru output according to the stage configuration."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from surface_mapper.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> int:
    """Replace loguru's default sink; returns the new handler id.

    ``output`` is ``stdout``, ``stderr`` or a file path.
    """
    logger.remove()
    output = config.output.lower()
    level = config.level.upper()
    if output == "stdout":
        return logger.add(sys.stdout, level=level)
    if output == "stderr":
        return logger.add(sys.stderr, level=level)
    path = Path(config.output)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logger.add(path, level=level)
