from __future__ import annotations

from numbers import Integral
from typing import Sequence

from .errors import InvalidRectangle, InvalidSurface
from .models import Rectangle, Surface


def _is_int(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_surface(surface: Surface) -> None:
    if not (_is_int(surface.width) and _is_int(surface.height)):
        raise InvalidSurface(
            f"surface dimensions must be integers, got {surface.width!r}x{surface.height!r}"
        )
    if surface.width <= 0 or surface.height <= 0:
        raise InvalidSurface(
            f"surface has non-positive dimensions: ({surface.width}x{surface.height})"
        )
    if not _is_int(surface.spacing) or surface.spacing < 0:
        raise InvalidSurface(f"spacing must be a non-negative integer, got {surface.spacing!r}")


def validate_rectangles(rectangles: Sequence[Rectangle]) -> None:
    """Reject rectangles the packer cannot place in any surface."""
    for rect in rectangles:
        if not (_is_int(rect.width) and _is_int(rect.height)):
            raise InvalidRectangle(
                f"rectangle {rect.id!r} has non-integer dimensions: "
                f"({rect.width!r}x{rect.height!r})"
            )
        if rect.width <= 0 or rect.height <= 0:
            raise InvalidRectangle(
                f"rectangle {rect.id!r} has non-positive dimensions: "
                f"({rect.width}x{rect.height})"
            )
