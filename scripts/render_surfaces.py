"""Render a test pattern through every configured surface and save the stage image."""

from __future__ import annotations

import argparse
from pathlib import Path

import cv2
import numpy as np
from loguru import logger

from surface_mapper.config import load_config
from surface_mapper.logging_setup import configure_logging
from surface_mapper.projection import SurfaceMapper
from surface_mapper.utils.image_io import save_frame


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview surface mapping for a stage configuration")
    parser.add_argument("--config", type=Path, required=True, help="Path to stage YAML")
    parser.add_argument("--output", type=Path, default=Path("output"), help="Directory for the rendered PNG")
    parser.add_argument("--pattern", choices=["checker", "grid"], default="checker", help="Test pattern to map")
    parser.add_argument("--cell", type=int, default=40, help="Pattern cell size in surface pixels (default: 40)")
    return parser.parse_args()


def make_pattern(width: int, height: int, kind: str, cell: int, label: str) -> np.ndarray:
    image = np.full((height, width, 3), 30, dtype=np.uint8)
    if kind == "checker":
        ys, xs = np.mgrid[0:height, 0:width]
        squares = ((xs // cell) + (ys // cell)) % 2 == 0
        image[squares] = (200, 200, 200)
    else:
        image[::cell, :] = (0, 255, 0)
        image[:, ::cell] = (0, 255, 0)
    cv2.rectangle(image, (0, 0), (width - 1, height - 1), (0, 0, 255), 3)
    cv2.putText(image, label, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (255, 128, 0), 2)
    return image


def main() -> None:
    args = parse_args()
    config = load_config(args.config)
    configure_logging(config.logging)

    mapper = SurfaceMapper.from_config(config)
    contents = {}
    for surface_id in mapper.surface_ids():
        width, height = mapper.surface(surface_id).pixel_size
        contents[surface_id] = make_pattern(width, height, args.pattern, max(2, args.cell), surface_id)
        logger.info("{}: {}", surface_id, mapper.css_transform(surface_id))

    stage = mapper.render_stage(contents)
    path = save_frame(stage, args.output, stem="stage")
    logger.info("Stage preview written to {}", path)


if __name__ == "__main__":
    main()
