"""Glyph shapes read from a font face with FreeType.

Shape coordinates are in FreeType 26.6 units divided by 64, the unit the
distance-field range is expressed in.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import freetype

from atlas_core.errors import FontLoadError
from atlas_core.models import Rectangle

logger = logging.getLogger(__name__)

WHITESPACE = (ord(" "), ord("\t"))
DEFAULT_CODEPOINTS = range(256)


@dataclass
class GlyphShape:
    codepoint: int
    x: float
    y: float
    width: float
    height: float
    advance: float
    outlined: bool = True

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height


def open_face(path: str) -> freetype.Face:
    try:
        return freetype.Face(path)
    except (freetype.FT_Exception, OSError) as e:
        raise FontLoadError(f'Could not open font "{path}": {e}') from e


def _whitespace_advance(face: freetype.Face, codepoint: int) -> float:
    face.load_char(chr(codepoint), freetype.FT_LOAD_NO_SCALE)
    return face.glyph.advance.x / 64.0


def read_shapes(
    face: freetype.Face, codepoints: Iterable[int] = DEFAULT_CODEPOINTS
) -> List[GlyphShape]:
    """Collect advance-only whitespace entries and every outlined glyph."""
    shapes: List[GlyphShape] = []
    for cp in codepoints:
        if face.get_char_index(cp) == 0:
            continue
        if cp in WHITESPACE:
            shapes.append(GlyphShape(cp, 0.0, 0.0, 0.0, 0.0, _whitespace_advance(face, cp), False))
            continue
        face.load_char(chr(cp), freetype.FT_LOAD_NO_SCALE)
        outline = face.glyph.outline
        if outline.n_contours <= 0:
            continue
        bbox = outline.get_bbox()
        width = (bbox.xMax - bbox.xMin) / 64.0
        height = (bbox.yMax - bbox.yMin) / 64.0
        if width <= 0:
            continue
        shapes.append(
            GlyphShape(
                cp,
                bbox.xMin / 64.0,
                bbox.yMin / 64.0,
                width,
                height,
                face.glyph.advance.x / 64.0,
            )
        )
    logger.debug("read %d glyph shapes", len(shapes))
    return shapes


def glyph_scale(shapes: Sequence[GlyphShape], height: int) -> float:
    """Pixels per shape unit so the tallest glyph is ``height`` texels tall."""
    tallest = max((shape.height for shape in shapes if shape.outlined), default=0.0)
    if tallest <= 0:
        raise FontLoadError("font has no outlined glyphs")
    return height / tallest


def glyph_size(shape: GlyphShape, scale: float, smooth_pixels: int) -> tuple:
    width = int(math.ceil(shape.width * scale)) + 2 * smooth_pixels
    height = int(math.ceil(shape.height * scale)) + 2 * smooth_pixels
    return max(width, 1), max(height, 1)


def glyph_batch(shapes: Sequence[GlyphShape], height: int, smooth_pixels: int) -> List[Rectangle]:
    """One fresh rectangle per outlined glyph at the given char height."""
    scale = glyph_scale(shapes, height)
    batch: List[Rectangle] = []
    for shape in shapes:
        if not shape.outlined:
            continue
        width, rect_height = glyph_size(shape, scale, smooth_pixels)
        batch.append(Rectangle(shape.codepoint, width, rect_height))
    return batch
