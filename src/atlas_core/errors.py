from __future__ import annotations


class AtlasError(Exception):
    """Base class for every error raised while building an atlas."""


class InsufficientSpace(AtlasError):
    """The rectangle batch does not fit the surface at the given spacing."""


class InvalidRectangle(AtlasError, ValueError):
    """A rectangle has zero, negative or non-integer dimensions."""


class InvalidSurface(AtlasError, ValueError):
    """The surface has non-positive dimensions or a negative spacing."""


class FontLoadError(AtlasError):
    """A font file could not be opened or read."""


class SettingsError(AtlasError, ValueError):
    """A settings file or option value is malformed."""
