from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .units import Texels


@dataclass
class Rectangle:
    """A placement request for one glyph bitmap.

    ``x`` and ``y`` stay ``None`` until a packing attempt succeeds. The origin
    is the bottom-left corner, so ``top`` is ``y + height``.
    """

    id: Hashable
    width: Texels
    height: Texels
    x: Optional[Texels] = None
    y: Optional[Texels] = None

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def placed(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def right(self) -> Texels:
        if self.x is None:
            raise ValueError(f"rectangle {self.id!r} has not been placed")
        return self.x + self.width

    @property
    def top(self) -> Texels:
        if self.y is None:
            raise ValueError(f"rectangle {self.id!r} has not been placed")
        return self.y + self.height

    def footprint(self) -> "FreeRegion":
        """Return the placed area as a region, for overlap tests."""
        if not self.placed:
            raise ValueError(f"rectangle {self.id!r} has not been placed")
        return FreeRegion(self.x, self.y, self.width, self.height)

    def clear_placement(self) -> None:
        self.x = None
        self.y = None


@dataclass(frozen=True)
class FreeRegion:
    """Axis-aligned piece of unallocated surface."""

    x: Texels
    y: Texels
    width: Texels
    height: Texels

    @property
    def right(self) -> Texels:
        return self.x + self.width

    @property
    def top(self) -> Texels:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Surface:
    """Fixed-size packing area.

    ``spacing`` is the minimum gap between any two placed rectangles; it is
    not enforced against the surface border.
    """

    width: Texels
    height: Texels
    spacing: Texels = 0

    @property
    def area(self) -> int:
        return self.width * self.height

    def root_region(self) -> FreeRegion:
        return FreeRegion(0, 0, self.width, self.height)
