from __future__ import annotations

from typing import Tuple

Texels = int


def parse_int(value: str) -> int:
    text = value.strip()
    if not text:
        raise ValueError("empty input")
    return int(text)


def parse_texture_size(value: str) -> Tuple[Texels, Texels]:
    """Parse ``"{width}x{height}"`` into a pair of texel counts."""
    text = value.strip().lower()
    width_text, sep, height_text = text.partition("x")
    if not sep:
        raise ValueError(f"expected WIDTHxHEIGHT, got {value!r}")
    width = parse_int(width_text)
    height = parse_int(height_text)
    if width <= 0 or height <= 0:
        raise ValueError(f"texture dimensions must be positive, got {value!r}")
    return width, height


def format_texture_size(width: Texels, height: Texels) -> str:
    return f"{width}x{height}"
