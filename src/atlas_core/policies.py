"""Replaceable ordering and region-selection rules for the packer.

An ordering turns a batch into the sequence of indices the packer visits.
A selection picks one free region for a rectangle, or ``None`` when nothing
fits. Both must be deterministic; ties fall back to input index and to the
region position ``(y, x)``.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .free_regions import fits
from .models import FreeRegion, Rectangle

Ordering = Callable[[Sequence[Rectangle]], List[int]]
Selection = Callable[[Sequence[FreeRegion], Rectangle], Optional[FreeRegion]]


def input_order(rectangles: Sequence[Rectangle]) -> List[int]:
    return list(range(len(rectangles)))


def _descending(key: Callable[[Rectangle], Tuple[int, ...]]) -> Ordering:
    def order(rectangles: Sequence[Rectangle]) -> List[int]:
        # sorted() is stable, so equal keys keep their input order
        return sorted(range(len(rectangles)), key=lambda i: tuple(-k for k in key(rectangles[i])))

    return order


largest_side_first = _descending(
    lambda r: (max(r.width, r.height), min(r.width, r.height))
)
largest_area_first = _descending(lambda r: (r.area, max(r.width, r.height)))
tallest_first = _descending(lambda r: (r.height, r.width))
largest_perimeter_first = _descending(lambda r: (r.width + r.height, r.area))


def _select_min(score: Callable[[FreeRegion, Rectangle], Tuple]) -> Selection:
    def select(regions: Sequence[FreeRegion], rect: Rectangle) -> Optional[FreeRegion]:
        best = None
        best_key = None
        for region in regions:
            if not fits(region, rect):
                continue
            key = score(region, rect) + (region.y, region.x)
            if best_key is None or key < best_key:
                best = region
                best_key = key
        return best

    return select


def _area_score(region: FreeRegion, rect: Rectangle) -> Tuple:
    leftover_w = region.width - rect.width
    leftover_h = region.height - rect.height
    return (region.area - rect.area, min(leftover_w, leftover_h))


def _short_side_score(region: FreeRegion, rect: Rectangle) -> Tuple:
    leftover_w = region.width - rect.width
    leftover_h = region.height - rect.height
    return (min(leftover_w, leftover_h), max(leftover_w, leftover_h))


def _long_side_score(region: FreeRegion, rect: Rectangle) -> Tuple:
    leftover_w = region.width - rect.width
    leftover_h = region.height - rect.height
    return (max(leftover_w, leftover_h), min(leftover_w, leftover_h))


def _bottom_left_score(region: FreeRegion, rect: Rectangle) -> Tuple:
    return (region.y + rect.height, region.x)


best_area_fit = _select_min(_area_score)
best_short_side_fit = _select_min(_short_side_score)
best_long_side_fit = _select_min(_long_side_score)
bottom_left = _select_min(_bottom_left_score)

ORDERINGS: Dict[str, Ordering] = {
    "input": input_order,
    "largest_side": largest_side_first,
    "largest_area": largest_area_first,
    "tallest": tallest_first,
    "largest_perimeter": largest_perimeter_first,
}

SELECTIONS: Dict[str, Selection] = {
    "best_area_fit": best_area_fit,
    "best_short_side_fit": best_short_side_fit,
    "best_long_side_fit": best_long_side_fit,
    "bottom_left": bottom_left,
}

DEFAULT_ORDERING = "largest_side"
DEFAULT_SELECTION = "best_area_fit"


def get_ordering(name: str) -> Ordering:
    try:
        return ORDERINGS[name]
    except KeyError:
        raise ValueError(
            f"unknown ordering {name!r}, expected one of {sorted(ORDERINGS)}"
        ) from None


def get_selection(name: str) -> Selection:
    try:
        return SELECTIONS[name]
    except KeyError:
        raise ValueError(
            f"unknown selection {name!r}, expected one of {sorted(SELECTIONS)}"
        ) from None
