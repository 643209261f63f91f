"""Distance-field glyph atlas generator."""

from .pipeline import AtlasResult, build_atlas
from .settings import AtlasSettings, load_settings

__all__ = [
    "AtlasResult",
    "AtlasSettings",
    "build_atlas",
    "load_settings",
]
