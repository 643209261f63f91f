"""Atlas description files.

The ``.msdf`` file is a little-endian float32 stream: glyph padding, pixel
range and ascent, followed by one record per codepoint 0-255 holding the
plane bounds (min x, min y, max x, max y), the uv bounds in the same order
and the advance. Plane coordinates are normalized by the full glyph extent
with y pointing down; uv coordinates sample texel centres with v flipped.
"""

from __future__ import annotations

import json
import logging
import struct
from dataclasses import asdict, dataclass, field
from typing import Dict, Mapping, Sequence, Tuple

from atlas_core.models import Rectangle

from .glyphs import GlyphShape

logger = logging.getLogger(__name__)

GLYPH_SLOTS = 256
_HEADER = struct.Struct("<3f")
_GLYPH = struct.Struct("<9f")

Bounds = Tuple[float, float, float, float]
EMPTY_BOUNDS: Bounds = (0.0, 0.0, 0.0, 0.0)


@dataclass
class GlyphRecord:
    bounds: Bounds = EMPTY_BOUNDS
    uv_bounds: Bounds = EMPTY_BOUNDS
    advance: float = 0.0


@dataclass
class FontDescriptor:
    glyph_padding: float
    pixel_range: float
    ascent: float
    glyphs: Dict[int, GlyphRecord] = field(default_factory=dict)


def build_descriptor(
    shapes: Sequence[GlyphShape],
    placements: Mapping[int, Rectangle],
    scaling: float,
    texture_size: Tuple[int, int],
    smooth_pixels: int,
    distance_range: float,
) -> FontDescriptor:
    if not shapes:
        raise ValueError("cannot describe an empty glyph set")
    tex_w, tex_h = texture_size
    max_top = max(shape.top * scaling for shape in shapes)
    min_y = min(shape.y * scaling for shape in shapes)
    if max_top <= min_y:
        raise ValueError("glyph set has no vertical extent")
    scale = 1.0 / (max_top - min_y)

    descriptor = FontDescriptor(
        glyph_padding=smooth_pixels * scale,
        pixel_range=scaling * distance_range,
        ascent=scale * max_top,
    )
    for shape in shapes:
        if not 0 <= shape.codepoint < GLYPH_SLOTS:
            continue
        x = shape.x * scaling
        y = shape.y * scaling
        record = GlyphRecord(
            bounds=(
                scale * x,
                -scale * shape.top * scaling,
                scale * shape.right * scaling,
                -scale * y,
            ),
            advance=scale * shape.advance * scaling,
        )
        placed = placements.get(shape.codepoint)
        if placed is not None and placed.placed:
            record.uv_bounds = (
                (placed.x + 0.5) / tex_w,
                1.0 - (placed.top + 0.5) / tex_h,
                (placed.right + 0.5) / tex_w,
                1.0 - (placed.y + 0.5) / tex_h,
            )
        descriptor.glyphs[shape.codepoint] = record
    return descriptor


def encode_msdf(descriptor: FontDescriptor) -> bytes:
    chunks = [_HEADER.pack(descriptor.glyph_padding, descriptor.pixel_range, descriptor.ascent)]
    empty = GlyphRecord()
    for codepoint in range(GLYPH_SLOTS):
        record = descriptor.glyphs.get(codepoint, empty)
        chunks.append(_GLYPH.pack(*record.bounds, *record.uv_bounds, record.advance))
    return b"".join(chunks)


def decode_msdf(data: bytes) -> FontDescriptor:
    expected = _HEADER.size + GLYPH_SLOTS * _GLYPH.size
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(data)}")
    padding, pixel_range, ascent = _HEADER.unpack_from(data, 0)
    descriptor = FontDescriptor(padding, pixel_range, ascent)
    for codepoint in range(GLYPH_SLOTS):
        values = _GLYPH.unpack_from(data, _HEADER.size + codepoint * _GLYPH.size)
        if any(values):
            descriptor.glyphs[codepoint] = GlyphRecord(
                bounds=tuple(values[0:4]), uv_bounds=tuple(values[4:8]), advance=values[8]
            )
    return descriptor


def write_msdf(descriptor: FontDescriptor, path: str) -> str:
    with open(path, "wb") as f:
        f.write(encode_msdf(descriptor))
    logger.info("wrote description file %s", path)
    return path


def to_dict(descriptor: FontDescriptor) -> dict:
    data = asdict(descriptor)
    data["glyphs"] = {
        str(codepoint): asdict(record) for codepoint, record in sorted(descriptor.glyphs.items())
    }
    return data


def write_json(descriptor: FontDescriptor, path: str) -> str:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_dict(descriptor), f, ensure_ascii=False, indent=2)
    logger.info("wrote description file %s", path)
    return path
