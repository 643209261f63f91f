from __future__ import annotations

import logging
from typing import Iterable, Tuple

import numpy as np
from PIL import Image

from atlas_core.models import Rectangle

logger = logging.getLogger(__name__)


def compose(
    tiles: Iterable[Tuple[Rectangle, np.ndarray]], width: int, height: int
) -> np.ndarray:
    """Blit glyph bitmaps into a ``(height, width, 3)`` canvas.

    Placements use a bottom-left origin while bitmap and canvas rows run top
    to bottom, so a tile at ``y`` lands ``height - y - tile_height`` rows down.
    """
    canvas = np.zeros((height, width, 3), dtype=np.float32)
    for rect, bitmap in tiles:
        if not rect.placed:
            raise ValueError(f"glyph {rect.id!r} has no placement")
        if bitmap.shape[:2] != (rect.height, rect.width):
            raise ValueError(
                "bitmap for glyph {!r} is {}x{}, expected {}x{}".format(
                    rect.id, bitmap.shape[1], bitmap.shape[0], rect.width, rect.height
                )
            )
        row = height - rect.top
        canvas[row : row + rect.height, rect.x : rect.right] = bitmap
    return canvas


def to_image(canvas: np.ndarray) -> Image.Image:
    data = (np.clip(canvas, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    return Image.fromarray(data)


def save_png(canvas: np.ndarray, path: str) -> str:
    to_image(canvas).save(path, format="PNG")
    logger.info("wrote atlas image %s", path)
    return path
