from __future__ import annotations

import math

import freetype
import numpy as np

from .glyphs import GlyphShape

OVERSAMPLE = 4


def signed_distance(inside: np.ndarray, radius: int) -> np.ndarray:
    """Distance in samples to the nearest sample of the other class.

    Positive inside, negative outside, limited to ``radius``.
    """
    rows, cols = inside.shape
    best = np.full(inside.shape, float(radius), dtype=np.float32)
    padded = np.pad(inside, radius, mode="edge")
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            dist = math.hypot(dx, dy)
            if dist == 0 or dist > radius:
                continue
            neighbour = padded[radius + dy : radius + dy + rows, radius + dx : radius + dx + cols]
            differs = neighbour != inside
            np.minimum(best, np.where(differs, dist - 0.5, radius), out=best)
    return np.where(inside, best, -best)


def encode_distance(distance: np.ndarray, pixel_range: float) -> np.ndarray:
    return np.clip(0.5 + distance / pixel_range, 0.0, 1.0).astype(np.float32)


def rasterize(
    face: freetype.Face,
    shape: GlyphShape,
    scale: float,
    size: tuple,
    smooth_pixels: int,
    oversample: int = OVERSAMPLE,
) -> np.ndarray:
    """Coverage mask of ``shape`` on a canvas of ``size`` texels, oversampled.

    Rows run top to bottom. The glyph's bounding box starts ``smooth_pixels``
    texels in from the left and bottom edges.
    """
    width, height = size
    canvas = np.zeros((height * oversample, width * oversample), dtype=bool)
    # 26.6 char size at 72 dpi; scale is texels per 1/64 font unit
    char_size = face.units_per_EM * scale * oversample
    face.set_char_size(0, max(int(round(char_size)), 1), 72, 72)
    face.load_char(chr(shape.codepoint), freetype.FT_LOAD_RENDER | freetype.FT_LOAD_NO_HINTING)
    glyph = face.glyph
    bitmap = glyph.bitmap
    if bitmap.width == 0 or bitmap.rows == 0:
        return canvas

    pixels = np.array(bitmap.buffer, dtype=np.uint8).reshape(bitmap.rows, bitmap.pitch)
    mask = pixels[:, : bitmap.width] >= 128

    origin_x = (shape.x * scale - smooth_pixels) * oversample
    canvas_top = (shape.y * scale - smooth_pixels + height) * oversample
    col = int(round(glyph.bitmap_left - origin_x))
    row = int(round(canvas_top - glyph.bitmap_top))

    src_r0 = max(0, -row)
    src_c0 = max(0, -col)
    dst_r0 = max(0, row)
    dst_c0 = max(0, col)
    n_rows = min(mask.shape[0] - src_r0, canvas.shape[0] - dst_r0)
    n_cols = min(mask.shape[1] - src_c0, canvas.shape[1] - dst_c0)
    if n_rows > 0 and n_cols > 0:
        canvas[dst_r0 : dst_r0 + n_rows, dst_c0 : dst_c0 + n_cols] = mask[
            src_r0 : src_r0 + n_rows, src_c0 : src_c0 + n_cols
        ]
    return canvas


def render_glyph(
    face: freetype.Face,
    shape: GlyphShape,
    scale: float,
    size: tuple,
    smooth_pixels: int,
    pixel_range: float,
    oversample: int = OVERSAMPLE,
) -> np.ndarray:
    """Distance-field bitmap of ``shape`` as a ``(height, width, 3)`` float array."""
    inside = rasterize(face, shape, scale, size, smooth_pixels, oversample)
    radius = max(int(math.ceil(pixel_range * oversample)) + 1, 1)
    distance = signed_distance(inside, radius) / oversample
    offset = oversample // 2
    width, height = size
    sampled = distance[offset::oversample, offset::oversample][:height, :width]
    encoded = encode_distance(sampled, pixel_range)
    return np.repeat(encoded[:, :, np.newaxis], 3, axis=2)
