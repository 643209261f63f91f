"""Single-surface MaxRects packer.

Rectangles are visited in the order produced by an ordering policy and each
one goes to the free region chosen by a selection policy, at that region's
origin corner. The first rectangle with no fitting region fails the whole
batch.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .errors import InsufficientSpace
from .free_regions import FreeRegionPool
from .metrics import bounding_area, occupancy, used_area
from .models import FreeRegion, Rectangle, Surface
from .policies import (
    DEFAULT_ORDERING,
    DEFAULT_SELECTION,
    Ordering,
    Selection,
    get_ordering,
    get_selection,
)
from .validation import validate_rectangles, validate_surface

logger = logging.getLogger(__name__)

Placement = Tuple[int, int]


def _resolve_ordering(order: Union[str, Ordering]) -> Ordering:
    return get_ordering(order) if isinstance(order, str) else order


def _resolve_selection(select: Union[str, Selection]) -> Selection:
    return get_selection(select) if isinstance(select, str) else select


def compute_placements(
    rectangles: Sequence[Rectangle],
    surface: Surface,
    *,
    order: Union[str, Ordering] = DEFAULT_ORDERING,
    select: Union[str, Selection] = DEFAULT_SELECTION,
) -> Optional[Dict[int, Placement]]:
    """Return placements keyed by input index, or ``None`` if the batch does not fit.

    The rectangles themselves are not modified.
    """
    validate_surface(surface)
    validate_rectangles(rectangles)
    order_fn = _resolve_ordering(order)
    select_fn = _resolve_selection(select)

    if used_area(rectangles) > surface.area:
        logger.debug("batch area exceeds surface area %d", surface.area)
        return None

    pool = FreeRegionPool(surface)
    placements: Dict[int, Placement] = {}
    for index in order_fn(rectangles):
        rect = rectangles[index]
        candidates = pool.candidates(rect)
        region = select_fn(candidates, rect) if candidates else None
        if region is None:
            logger.debug(
                "no free region for %r (%dx%d) after %d of %d placements",
                rect.id,
                rect.width,
                rect.height,
                len(placements),
                len(rectangles),
            )
            return None
        placements[index] = (region.x, region.y)
        pool.place(FreeRegion(region.x, region.y, rect.width, rect.height))
        pool.prune()
    return placements


def pack(
    rectangles: Sequence[Rectangle],
    surface: Surface,
    *,
    order: Union[str, Ordering] = DEFAULT_ORDERING,
    select: Union[str, Selection] = DEFAULT_SELECTION,
) -> bool:
    """Place every rectangle of the batch on ``surface``.

    On success each rectangle's ``x``/``y`` is written and ``True`` is
    returned. On failure every placement is reset to ``None``; a batch is
    never partially placed.

    Raises:
        InvalidRectangle: If a rectangle has non-positive dimensions.
        InvalidSurface: If the surface itself is malformed.
    """
    placements = compute_placements(rectangles, surface, order=order, select=select)
    if placements is None:
        for rect in rectangles:
            rect.clear_placement()
        return False
    for index, (x, y) in placements.items():
        rectangles[index].x = x
        rectangles[index].y = y
    return True


class Packer:
    """A surface bundled with its ordering and selection policies."""

    def __init__(
        self,
        surface: Surface,
        *,
        order: Union[str, Ordering] = DEFAULT_ORDERING,
        select: Union[str, Selection] = DEFAULT_SELECTION,
    ) -> None:
        validate_surface(surface)
        self.surface = surface
        self.order = _resolve_ordering(order)
        self.select = _resolve_selection(select)

    def pack(self, rectangles: List[Rectangle]) -> bool:
        return pack(rectangles, self.surface, order=self.order, select=self.select)

    def pack_or_raise(self, rectangles: List[Rectangle]) -> List[Rectangle]:
        if not self.pack(rectangles):
            raise InsufficientSpace(
                "{} rectangles do not fit a {}x{} surface with spacing {}".format(
                    len(rectangles),
                    self.surface.width,
                    self.surface.height,
                    self.surface.spacing,
                )
            )
        logger.debug(
            "packed %d rectangles, occupancy %.3f, bounding area %d",
            len(rectangles),
            occupancy(rectangles, self.surface),
            bounding_area(rectangles),
        )
        return rectangles
