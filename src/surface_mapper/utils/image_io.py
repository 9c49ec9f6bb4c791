"""Image IO helper routines."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import cv2
from loguru import logger


def save_frame(frame, directory: Path, stem: Optional[str] = None) -> Path:
    """Persist an OpenCV BGR frame to disk."""
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
    stem = stem or "stage"
    path = directory / f"{stem}_{timestamp}.png"
    if not cv2.imwrite(str(path), frame):
        raise RuntimeError(f"Failed to write frame to {path}")
    logger.debug("Saved frame to {}", path)
    return path
