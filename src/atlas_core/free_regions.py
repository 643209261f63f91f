"""Maximal-rectangles bookkeeping of unallocated surface area.

The pool is an over-approximating cover: regions may overlap each other, but
no region ever overlaps a placed rectangle once spacing is accounted for.
"""

from __future__ import annotations

import logging
from typing import List, Union

from .models import FreeRegion, Rectangle, Surface
from .units import Texels

logger = logging.getLogger(__name__)

Box = Union[FreeRegion, Rectangle]


def overlaps(a: Box, b: Box, spacing: Texels = 0) -> bool:
    """Return ``False`` only when ``a`` and ``b`` are at least ``spacing`` apart."""
    return not (
        a.right + spacing <= b.x
        or b.right + spacing <= a.x
        or a.top + spacing <= b.y
        or b.top + spacing <= a.y
    )


def fits(region: FreeRegion, rect: Rectangle) -> bool:
    return region.width >= rect.width and region.height >= rect.height


def contains(outer: FreeRegion, inner: FreeRegion) -> bool:
    return (
        inner.x >= outer.x
        and inner.y >= outer.y
        and inner.right <= outer.right
        and inner.top <= outer.top
    )


def split(region: FreeRegion, placed: Box, spacing: Texels = 0) -> List[FreeRegion]:
    """Residual regions of ``region`` left, right, above and below ``placed``.

    Each residual spans the whole of ``region`` along the other axis, so the
    residuals may overlap each other. Degenerate residuals are dropped.
    """
    pieces: List[FreeRegion] = []

    if region.x + spacing < placed.x:
        pieces.append(
            FreeRegion(region.x, region.y, placed.x - region.x - spacing, region.height)
        )

    if region.right > placed.right + spacing:
        pieces.append(
            FreeRegion(
                placed.right + spacing,
                region.y,
                region.right - placed.right - spacing,
                region.height,
            )
        )

    if region.top > placed.top + spacing:
        pieces.append(
            FreeRegion(
                region.x,
                placed.top + spacing,
                region.width,
                region.top - placed.top - spacing,
            )
        )

    if region.y + spacing < placed.y:
        pieces.append(
            FreeRegion(region.x, region.y, region.width, placed.y - region.y - spacing)
        )

    return [piece for piece in pieces if piece.width > 0 and piece.height > 0]


class FreeRegionPool:
    """Free regions of one packing attempt, seeded with the whole surface."""

    def __init__(self, surface: Surface) -> None:
        self.spacing = surface.spacing
        self.regions: List[FreeRegion] = [surface.root_region()]

    def __len__(self) -> int:
        return len(self.regions)

    def candidates(self, rect: Rectangle) -> List[FreeRegion]:
        return [region for region in self.regions if fits(region, rect)]

    def place(self, placed: Box) -> None:
        """Replace every region touching ``placed`` with its residuals."""
        kept: List[FreeRegion] = []
        added: List[FreeRegion] = []
        for region in self.regions:
            if overlaps(region, placed, self.spacing):
                added.extend(split(region, placed, self.spacing))
            else:
                kept.append(region)
        self.regions = kept + added

    def prune(self) -> None:
        """Drop every region contained in another region of the pool."""
        regions = self.regions
        removed = [False] * len(regions)
        for i, region in enumerate(regions):
            if removed[i]:
                continue
            for j in range(i + 1, len(regions)):
                if removed[j]:
                    continue
                other = regions[j]
                if contains(region, other):
                    removed[j] = True
                elif contains(other, region):
                    removed[i] = True
                    break
        before = len(regions)
        self.regions = [region for i, region in enumerate(regions) if not removed[i]]
        if len(self.regions) != before:
            logger.debug("pruned %d of %d free regions", before - len(self.regions), before)
