"""ZPL token model, image codec and RFID command builders."""

__version__ = "0.1.0"

from .emit import emit, emit_bytes
from .errors import (
    ImageError,
    ImageSizeError,
    UnsupportedBank,
    UnsupportedOperation,
    ZPLError,
)
from .graphics import GraphicField, StoredGraphic, default_asset_name, encode_dg, encode_gf
from .image import (
    MAX_IMAGE_DIMENSION,
    MAX_IMAGE_PIXELS,
    DitherMode,
    MonoBitmap,
    check_image_size,
    load_image,
    luminance,
    mono_from_image,
    mono_from_rgba,
    rgba_from_image,
)
from .images import ImageOptions, build_image_cached_tokens, build_image_inline_tokens
from .parse import find_last_xz, tokenize
from .registry import AssetRef, ImageRegistry, content_hash
from .rfid import RFIDBank, build_rfid_read_tokens, build_rfid_write_tokens
from .tokens import Command, FieldData, FieldStop, Raw, RawBytes, Token
from .units import Units, inch, mm, to_dots

__all__ = [
    "Token",
    "Command",
    "FieldData",
    "FieldStop",
    "RawBytes",
    "Raw",
    "tokenize",
    "find_last_xz",
    "emit",
    "emit_bytes",
    "MonoBitmap",
    "DitherMode",
    "luminance",
    "mono_from_rgba",
    "mono_from_image",
    "load_image",
    "rgba_from_image",
    "check_image_size",
    "MAX_IMAGE_DIMENSION",
    "MAX_IMAGE_PIXELS",
    "GraphicField",
    "StoredGraphic",
    "encode_gf",
    "encode_dg",
    "default_asset_name",
    "AssetRef",
    "ImageRegistry",
    "content_hash",
    "ImageOptions",
    "build_image_inline_tokens",
    "build_image_cached_tokens",
    "RFIDBank",
    "build_rfid_write_tokens",
    "build_rfid_read_tokens",
    "Units",
    "to_dots",
    "mm",
    "inch",
    "ZPLError",
    "UnsupportedOperation",
    "UnsupportedBank",
    "ImageError",
    "ImageSizeError",
]
