from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from atlas_core.errors import SettingsError
from atlas_core.policies import DEFAULT_ORDERING, DEFAULT_SELECTION, ORDERINGS, SELECTIONS
from atlas_core.units import Texels, parse_int, parse_texture_size

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "ATLASGEN_SETTINGS"


@dataclass(frozen=True)
class AtlasSettings:
    texture_width: Texels = 2048
    texture_height: Texels = 2048
    char_height: Texels = 32
    auto_height: bool = False
    spacing: Texels = 2
    smooth_pixels: Texels = 2
    range: float = 1.0
    font: str = ""
    output_name: str = ""
    ordering: str = DEFAULT_ORDERING
    selection: str = DEFAULT_SELECTION
    write_json: bool = False
    preview: bool = False

    def validated(self) -> "AtlasSettings":
        if self.texture_width <= 0 or self.texture_height <= 0:
            raise SettingsError(
                f"texture size must be positive, got {self.texture_width}x{self.texture_height}"
            )
        if self.char_height <= 0:
            raise SettingsError(f"char height must be positive, got {self.char_height}")
        if self.spacing < 0 or self.smooth_pixels < 0:
            raise SettingsError("spacing and smooth pixels must not be negative")
        if self.range <= 0:
            raise SettingsError(f"range must be positive, got {self.range}")
        if self.ordering not in ORDERINGS:
            raise SettingsError(f"unknown ordering {self.ordering!r}")
        if self.selection not in SELECTIONS:
            raise SettingsError(f"unknown selection {self.selection!r}")
        if not self.font:
            raise SettingsError("a font file is required")
        if not self.output_name:
            raise SettingsError("an output name is required")
        return self


_FIELD_TYPES = {f.name: f.type for f in fields(AtlasSettings)}


_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _coerce(key: str, value: Any) -> Any:
    kind = _FIELD_TYPES[key]
    invalid = SettingsError(f"invalid value for {key!r}: {value!r}")
    if kind == "bool":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
        raise invalid
    if kind == "str":
        return str(value)
    # bool is an int subclass
    if isinstance(value, bool):
        raise invalid
    try:
        if kind == "Texels":
            if isinstance(value, int):
                return value
            if isinstance(value, str):
                return parse_int(value)
            raise invalid
        return float(value)
    except (TypeError, ValueError) as e:
        raise invalid from e


def settings_from_mapping(data: Dict[str, Any], base: Optional[AtlasSettings] = None) -> AtlasSettings:
    """Overlay ``data`` on ``base``; ``texture_size`` accepts ``"WxH"``."""
    values: Dict[str, Any] = {}
    for key, value in data.items():
        key = key.replace("-", "_")
        if value is None:
            continue
        if key == "texture_size":
            try:
                values["texture_width"], values["texture_height"] = parse_texture_size(str(value))
            except ValueError as e:
                raise SettingsError(str(e)) from e
            continue
        if key not in _FIELD_TYPES:
            raise SettingsError(f"unknown setting {key!r}")
        values[key] = _coerce(key, value)
    return replace(base or AtlasSettings(), **values)


def default_settings_path() -> Optional[str]:
    env_path = os.getenv(SETTINGS_ENV_VAR)
    if env_path:
        return str(Path(env_path).expanduser().resolve())
    return None


def load_settings(path: Optional[str] = None, base: Optional[AtlasSettings] = None) -> AtlasSettings:
    """Load settings from a YAML file.

    Without ``path`` the file named by ``ATLASGEN_SETTINGS`` is used, and with
    neither the defaults are returned.
    """
    path = path or default_settings_path()
    if path is None:
        return base or AtlasSettings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except OSError as e:
        raise SettingsError(f"cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"malformed settings file {path}: {e}") from e
    if not isinstance(loaded, dict):
        raise SettingsError(f"settings file {path} must contain a mapping")
    logger.debug("loaded %d settings from %s", len(loaded), path)
    return settings_from_mapping(loaded, base)
