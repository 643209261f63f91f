from __future__ import annotations

from typing import Sequence

from .models import Rectangle, Surface


def used_area(rectangles: Sequence[Rectangle]) -> int:
    return sum(rect.area for rect in rectangles)


def bounding_area(rectangles: Sequence[Rectangle]) -> int:
    """Area of the bounding box around the placed rectangles."""
    placed = [rect for rect in rectangles if rect.placed]
    if not placed:
        return 0
    min_x = min(rect.x for rect in placed)
    min_y = min(rect.y for rect in placed)
    max_right = max(rect.right for rect in placed)
    max_top = max(rect.top for rect in placed)
    return (max_right - min_x) * (max_top - min_y)


def occupancy(rectangles: Sequence[Rectangle], surface: Surface) -> float:
    if surface.area <= 0:
        return 0.0
    return used_area(rectangles) / surface.area
