"""
Monochrome Image Encoding.

Converts RGBA pixel data to a 1-bit packed bitmap suitable for ZPL
graphic fields. Rows are packed MSB first (leftmost pixel in the high
bit); 1 = black (burn), 0 = white (no burn).
"""

from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import Union

from PIL import Image

from .errors import ImageError, ImageSizeError

# Image size limits to prevent memory exhaustion from malicious/malformed images
MAX_IMAGE_DIMENSION = 10000  # Maximum width or height in pixels
MAX_IMAGE_PIXELS = 10_000_000  # Maximum total pixels (10 megapixels)

DEFAULT_THRESHOLD = 128

# 4x4 Bayer matrix for ordered dithering (values 0-15)
BAYER_4X4 = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)

# Threshold offset per Bayer step, spreads the matrix over -120..+120
ORDERED_SCALE = 16


class DitherMode(str, Enum):
    """Grayscale to black/white conversion strategies."""

    NONE = "none"
    THRESHOLD = "threshold"
    FLOYD_STEINBERG = "fs"
    ORDERED = "ordered"


_MODE_ALIASES = {
    "floyd-steinberg": DitherMode.FLOYD_STEINBERG,
}


@dataclass(frozen=True)
class MonoBitmap:
    """1-bit bitmap, rows packed MSB first."""

    width: int
    height: int
    bytes_per_row: int
    data: bytes

    @classmethod
    def blank(cls, width: int, height: int) -> "MonoBitmap":
        """All-white bitmap of the given size."""
        if width <= 0 or height <= 0:
            return cls(max(width, 0), max(height, 0), 0, b"")
        bytes_per_row = (width + 7) // 8
        return cls(width, height, bytes_per_row, bytes(bytes_per_row * height))


def luminance(r: int, g: int, b: int) -> int:
    """
    Perceptual luminance of an RGB pixel (ITU-R BT.601 weights).

    Integer arithmetic keeps the result deterministic: pure white maps to
    exactly 255 and pure black to 0.
    """
    return (299 * r + 587 * g + 114 * b + 500) // 1000


def _resolve_mode(mode: Union[str, DitherMode]) -> DitherMode:
    if isinstance(mode, DitherMode):
        return mode
    if mode in _MODE_ALIASES:
        return _MODE_ALIASES[mode]
    try:
        return DitherMode(mode)
    except ValueError:
        raise ImageError(f"Unknown dither mode: {mode!r}") from None


def _luma_plane(rgba, width: int, height: int) -> list[int]:
    count = width * height
    lumas = []
    for i in range(0, count * 4, 4):
        lumas.append(luminance(rgba[i], rgba[i + 1], rgba[i + 2]))
    return lumas


def _threshold(lumas: list[int], width: int, height: int, threshold: int) -> list[bool]:
    return [v <= threshold for v in lumas]


def _ordered(lumas: list[int], width: int, height: int, threshold: int) -> list[bool]:
    black = []
    for y in range(height):
        row = BAYER_4X4[y % 4]
        base = y * width
        for x in range(width):
            t = threshold + (row[x % 4] - 7.5) * ORDERED_SCALE
            black.append(lumas[base + x] <= t)
    return black


def _floyd_steinberg(lumas: list[int], width: int, height: int, threshold: int) -> list[bool]:
    # Error accumulates in scan order, so this must stay a single ordered pass
    values = [float(v) for v in lumas]
    black = []
    for y in range(height):
        base = y * width
        has_next_row = y + 1 < height
        for x in range(width):
            i = base + x
            value = values[i]
            is_black = value <= threshold
            black.append(is_black)
            err = value - (0 if is_black else 255)

            if x + 1 < width:
                values[i + 1] += err * 7 / 16
            if has_next_row:
                below = i + width
                if x > 0:
                    values[below - 1] += err * 3 / 16
                values[below] += err * 5 / 16
                if x + 1 < width:
                    values[below + 1] += err * 1 / 16
    return black


_DITHERERS = {
    DitherMode.NONE: _threshold,
    DitherMode.THRESHOLD: _threshold,
    DitherMode.ORDERED: _ordered,
    DitherMode.FLOYD_STEINBERG: _floyd_steinberg,
}


def pack_rows(black: list[bool], width: int, height: int) -> bytes:
    """
    Pack per-pixel black flags into MSB-first rows.

    Unused low bits of the last byte in each row stay 0.
    """
    bytes_per_row = (width + 7) // 8
    result = bytearray(bytes_per_row * height)

    for row in range(height):
        row_offset = row * bytes_per_row
        base = row * width
        for col in range(width):
            if black[base + col]:
                result[row_offset + (col >> 3)] |= 0x80 >> (col & 7)

    return bytes(result)


def check_image_size(width: int, height: int) -> None:
    """
    Reject dimensions that would exhaust memory during conversion.

    Raises:
        ImageSizeError: If a side exceeds MAX_IMAGE_DIMENSION or the pixel
            count exceeds MAX_IMAGE_PIXELS
    """
    if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
        raise ImageSizeError(
            f"Image dimensions ({width}x{height}) exceed maximum "
            f"({MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION})"
        )
    if width * height > MAX_IMAGE_PIXELS:
        raise ImageSizeError(
            f"Image pixel count ({width * height:,}) exceeds "
            f"maximum ({MAX_IMAGE_PIXELS:,})"
        )


def mono_from_rgba(
    rgba: Union[bytes, bytearray, memoryview],
    width: int,
    height: int,
    mode: Union[str, DitherMode] = DitherMode.THRESHOLD,
    threshold: int = DEFAULT_THRESHOLD,
    invert: bool = False,
) -> MonoBitmap:
    """
    Convert interleaved RGBA pixels to a monochrome bitmap.

    Args:
        rgba: Pixel data, 4 bytes per pixel in row-major order
        width: Width in pixels
        height: Height in pixels
        mode: Dither mode (none, threshold, fs / floyd-steinberg, ordered)
        threshold: Luminance at or below which a pixel is black (0-255)
        invert: Swap black and white in the output

    Returns:
        MonoBitmap with ceil(width/8) bytes per row

    Raises:
        ImageError: If the mode is unknown or the buffer is too short
        ImageSizeError: If width or height exceed the safety limits

    Alpha is ignored; flatten transparency before calling if it matters
    (rgba_from_image does this).
    """
    dither = _DITHERERS[_resolve_mode(mode)]

    if width <= 0 or height <= 0:
        return MonoBitmap.blank(width, height)

    check_image_size(width, height)

    expected = width * height * 4
    if len(rgba) < expected:
        raise ImageError(
            f"RGBA buffer too short for {width}x{height}: "
            f"got {len(rgba)} bytes, need {expected}"
        )

    lumas = _luma_plane(rgba, width, height)
    black = dither(lumas, width, height, threshold)
    if invert:
        black = [not b for b in black]

    return MonoBitmap(width, height, (width + 7) // 8, pack_rows(black, width, height))


# ---- Pillow helpers ----


def load_image(source: Union[str, Path, bytes, Image.Image]) -> Image.Image:
    """
    Load an image from various sources.

    Args:
        source: File path, bytes, or PIL Image

    Returns:
        PIL Image object

    Raises:
        ImageSizeError: If image dimensions exceed safety limits
        ImageError: If source type is unsupported
    """
    if isinstance(source, Image.Image):
        img = source
    elif isinstance(source, (str, Path)):
        img = Image.open(source)
    elif isinstance(source, bytes):
        img = Image.open(BytesIO(source))
    else:
        raise ImageError(f"Unsupported source type: {type(source)}")

    check_image_size(img.width, img.height)
    return img


def rgba_from_image(image: Image.Image) -> tuple[bytes, int, int]:
    """
    Get interleaved RGBA bytes from a PIL image.

    Transparent areas are composited onto white so they encode as
    unprinted space.

    Returns:
        (rgba, width, height)
    """
    rgba = image.convert("RGBA")
    background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
    flattened = Image.alpha_composite(background, rgba)
    return flattened.tobytes(), flattened.width, flattened.height


def mono_from_image(
    source: Union[str, Path, bytes, Image.Image],
    mode: Union[str, DitherMode] = DitherMode.THRESHOLD,
    threshold: int = DEFAULT_THRESHOLD,
    invert: bool = False,
) -> MonoBitmap:
    """Load an image and convert it to a monochrome bitmap."""
    rgba, width, height = rgba_from_image(load_image(source))
    return mono_from_rgba(rgba, width, height, mode, threshold, invert)
