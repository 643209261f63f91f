"""Rectangle packing for glyph atlases."""

from .errors import (
    AtlasError,
    FontLoadError,
    InsufficientSpace,
    InvalidRectangle,
    InvalidSurface,
    SettingsError,
)
from .free_regions import FreeRegionPool, contains, fits, overlaps, split
from .models import FreeRegion, Rectangle, Surface
from .packer import Packer, compute_placements, pack
from .search import CapacityResult, find_max_height

__all__ = [
    "AtlasError",
    "FontLoadError",
    "InsufficientSpace",
    "InvalidRectangle",
    "InvalidSurface",
    "SettingsError",
    "FreeRegion",
    "FreeRegionPool",
    "Rectangle",
    "Surface",
    "Packer",
    "pack",
    "compute_placements",
    "overlaps",
    "fits",
    "split",
    "contains",
    "CapacityResult",
    "find_max_height",
]
