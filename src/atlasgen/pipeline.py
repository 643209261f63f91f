"""Font to atlas: read shapes, size and pack them, render, write outputs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from atlas_core.errors import InsufficientSpace
from atlas_core.metrics import bounding_area, occupancy
from atlas_core.models import Rectangle, Surface
from atlas_core.packer import Packer
from atlas_core.search import find_max_height

from . import compositor, descriptor
from .glyphs import GlyphShape, glyph_batch, glyph_scale, open_face, read_shapes
from .preview import save_preview
from .sdf import render_glyph
from .settings import AtlasSettings

logger = logging.getLogger(__name__)


@dataclass
class AtlasResult:
    char_height: int
    scaling: float
    surface: Surface
    rectangles: List[Rectangle]
    outputs: Dict[str, str] = field(default_factory=dict)


def surface_for(settings: AtlasSettings) -> Surface:
    return Surface(settings.texture_width, settings.texture_height, settings.spacing)


def choose_height(
    shapes: List[GlyphShape], settings: AtlasSettings, packer: Packer
) -> tuple:
    """Return the char height and its packed batch."""

    def build(height: int) -> List[Rectangle]:
        return glyph_batch(shapes, height, settings.smooth_pixels)

    if settings.auto_height:
        result = find_max_height(build, packer.surface, settings.char_height, packer=packer)
        return result.height, result.rectangles
    batch = build(settings.char_height)
    packer.pack_or_raise(batch)
    return settings.char_height, batch


def build_atlas(settings: AtlasSettings) -> AtlasResult:
    """Build the atlas image and description files for ``settings.font``.

    Raises:
        FontLoadError: If the font cannot be read.
        InsufficientSpace: If the glyphs do not fit; nothing is written then.
    """
    settings = settings.validated()
    face = open_face(settings.font)
    shapes = read_shapes(face)
    surface = surface_for(settings)
    packer = Packer(surface, order=settings.ordering, select=settings.selection)

    if settings.auto_height:
        logger.info("searching char height from %d", settings.char_height)
    else:
        logger.info("using char height %d", settings.char_height)
    try:
        height, rectangles = choose_height(shapes, settings, packer)
    except InsufficientSpace:
        logger.error("packing atlas failed")
        raise
    scaling = glyph_scale(shapes, height)
    logger.info(
        "packed %d glyphs at height %d, occupancy %.3f, bounding area %d",
        len(rectangles),
        height,
        occupancy(rectangles, surface),
        bounding_area(rectangles),
    )

    pixel_range = scaling * settings.range
    by_codepoint = {rect.id: rect for rect in rectangles}
    tiles = []
    for shape in shapes:
        rect = by_codepoint.get(shape.codepoint)
        if rect is None:
            continue
        bitmap = render_glyph(
            face,
            shape,
            scaling,
            (rect.width, rect.height),
            settings.smooth_pixels,
            pixel_range,
        )
        tiles.append((rect, bitmap))

    result = AtlasResult(height, scaling, surface, rectangles)
    desc = descriptor.build_descriptor(
        shapes,
        by_codepoint,
        scaling,
        (surface.width, surface.height),
        settings.smooth_pixels,
        settings.range,
    )
    base = settings.output_name
    result.outputs["msdf"] = descriptor.write_msdf(desc, base + ".msdf")
    if settings.write_json:
        result.outputs["json"] = descriptor.write_json(desc, base + ".json")
    canvas = compositor.compose(tiles, surface.width, surface.height)
    result.outputs["png"] = compositor.save_png(canvas, base + ".png")
    if settings.preview:
        result.outputs["preview"] = save_preview(rectangles, surface, base + ".layout.png")
    return result
