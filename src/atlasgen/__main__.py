import argparse
import logging
import sys
from importlib import metadata
from typing import List, Optional

from atlas_core.errors import AtlasError
from atlas_core.policies import ORDERINGS, SELECTIONS
from atlas_core.units import format_texture_size

from .pipeline import build_atlas
from .settings import AtlasSettings, load_settings, settings_from_mapping

logger = logging.getLogger(__name__)


def _get_app_version() -> str:
    try:
        return metadata.version("msdf-atlasgen")
    except metadata.PackageNotFoundError:
        return "dev"


def _str_to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    defaults = AtlasSettings()
    p = argparse.ArgumentParser(
        prog="msdf-atlasgen",
        description="Render a font's glyphs as distance fields and pack them into one texture.",
    )
    p.add_argument("--version", action="version", version=_get_app_version())
    p.add_argument("--config", help="YAML settings file (default: $ATLASGEN_SETTINGS)")
    p.add_argument(
        "-T",
        "--texture-size",
        help="texture dimensions WIDTHxHEIGHT (default {})".format(
            format_texture_size(defaults.texture_width, defaults.texture_height)
        ),
    )
    p.add_argument(
        "-L",
        "--char-height",
        type=int,
        help=f"maximum character height in texels (default {defaults.char_height})",
    )
    p.add_argument(
        "--smooth-pixels", type=int, help=f"smoothing pixels (default {defaults.smooth_pixels})"
    )
    p.add_argument("-R", "--range", type=float, help=f"smoothing range (default {defaults.range})")
    p.add_argument(
        "-S",
        "--spacing",
        type=int,
        help=f"inter-character spacing in texels (default {defaults.spacing})",
    )
    p.add_argument("-F", "--font", help="font file name")
    p.add_argument("-O", "--output-name", help="base filename of output files")
    p.add_argument(
        "--auto-height",
        nargs="?",
        const=True,
        type=_str_to_bool,
        help="automatically determine the best char height (might consume time)",
    )
    p.add_argument("--ordering", choices=sorted(ORDERINGS), help="rectangle ordering policy")
    p.add_argument("--selection", choices=sorted(SELECTIONS), help="free region selection policy")
    p.add_argument(
        "--json", dest="write_json", action="store_const", const=True, help="also write a JSON description"
    )
    p.add_argument(
        "--preview", action="store_const", const=True, help="also write a layout preview image"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return p


def settings_from_args(args: argparse.Namespace) -> AtlasSettings:
    base = load_settings(args.config)
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key not in ("config", "verbose") and value is not None
    }
    return settings_from_mapping(overrides, base)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = settings_from_args(args)
        result = build_atlas(settings)
    except AtlasError as e:
        logger.error("%s", e)
        return 1
    for kind, path in sorted(result.outputs.items()):
        logger.info("%s: %s", kind, path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
