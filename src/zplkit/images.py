"""
Image placement token builders.

Turn RGBA pixel data into ready-to-splice token chunks:
- inline:  ^FO<x>,<y>^GFA,...^FS
- cached:  ~DG<name>,...^FO<x>,<y>^XG<name>,1,1^FS

Pass an ImageRegistry to the cached builder to skip the ~DG download
when the same bitmap was already stored earlier in the session.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .graphics import encode_dg, encode_gf
from .image import DEFAULT_THRESHOLD, DitherMode, MonoBitmap, mono_from_rgba
from .parse import tokenize
from .registry import ImageRegistry, content_hash
from .tokens import Token
from .units import DEFAULT_DPI, Units, to_dots

logger = logging.getLogger(__name__)


@dataclass
class ImageOptions:
    """Pixel data and placement for one image."""

    rgba: bytes  # interleaved RGBA
    width: int   # pixels
    height: int  # pixels
    at: tuple[float, float] = (0, 0)  # in label units
    mode: Union[str, DitherMode] = DitherMode.THRESHOLD
    threshold: int = DEFAULT_THRESHOLD
    invert: bool = False

    def to_mono(self) -> MonoBitmap:
        return mono_from_rgba(
            self.rgba, self.width, self.height, self.mode, self.threshold, self.invert
        )


def _origin(at: tuple[float, float], dpi: int, units: Union[str, Units]) -> tuple[int, int]:
    return to_dots(at[0], dpi, units), to_dots(at[1], dpi, units)


def build_image_inline_tokens(
    opts: ImageOptions,
    dpi: int = DEFAULT_DPI,
    units: Union[str, Units] = Units.DOT,
) -> list[Token]:
    """Build tokens for an inline ^GF image at opts.at."""
    gf = encode_gf(opts.to_mono())
    x, y = _origin(opts.at, dpi, units)
    return tokenize(f"^FO{x},{y}{gf.gf_command}^FS")


def build_image_cached_tokens(
    opts: ImageOptions,
    name: str,
    dpi: int = DEFAULT_DPI,
    units: Union[str, Units] = Units.DOT,
    registry: Optional[ImageRegistry] = None,
) -> list[Token]:
    """
    Build tokens for a stored (~DG) image recalled (^XG) at opts.at.

    Args:
        opts: Image data and placement
        name: Asset name, e.g. "R:LOGO.GRF" (empty = generated from content)
        dpi: Printer resolution for unit conversion
        units: Units of opts.at
        registry: Session registry; if it already holds this bitmap the
            stored asset is recalled under its registered name and no ~DG
            is emitted

    Returns:
        Token list ready to splice into a label
    """
    mono = opts.to_mono()
    x, y = _origin(opts.at, dpi, units)

    digest = content_hash(mono) if registry is not None else None
    if registry is not None and registry.has(digest):
        stored_name = registry.get(digest)
        logger.debug("Image already stored as %s, recalling", stored_name)
        return registry.recall_at(stored_name, (x, y))

    dg = encode_dg(name, mono)
    tokens = tokenize(f"{dg.dg_command}^FO{x},{y}{dg.xg_command}^FS")

    if registry is not None:
        registry.put(digest, dg.name)

    return tokens
