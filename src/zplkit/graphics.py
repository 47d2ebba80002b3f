"""
Graphic field encoding.

Renders a MonoBitmap as ZPL graphic commands:
- ^GFA,<total>,<total>,<bytes/row>,<HEX>  inline graphic field
- ~DG<name>,<total>,<bytes/row>,<HEX>     store graphic on the printer
- ^XG<name>,1,1                           recall stored graphic at 1x
"""

import hashlib
import logging
from dataclasses import dataclass

from .image import MonoBitmap

logger = logging.getLogger(__name__)

# Device prefix and extension used for generated asset names
DEFAULT_ASSET_DEVICE = "R:"
DEFAULT_ASSET_EXTENSION = ".GRF"
DEFAULT_ASSET_STEM_LENGTH = 8  # ZPL object names are at most 8 characters


@dataclass(frozen=True)
class GraphicField:
    """Inline ^GF encoding of a bitmap."""

    hex: str
    total_bytes: int
    bytes_per_row: int
    gf_command: str


@dataclass(frozen=True)
class StoredGraphic:
    """~DG store and ^XG recall encoding of a bitmap."""

    name: str
    hex: str
    total_bytes: int
    bytes_per_row: int
    dg_command: str
    xg_command: str


def to_hex(bitmap: MonoBitmap) -> str:
    """Uppercase hex of the bitmap bytes, two characters per byte."""
    return bitmap.data.hex().upper()


def default_asset_name(bitmap: MonoBitmap) -> str:
    """
    Generate an asset name from the bitmap content.

    Format: R:<first 8 hex digits of SHA-256 of the data>.GRF, so the same
    image always gets the same name.
    """
    digest = hashlib.sha256(bitmap.data).hexdigest().upper()
    return f"{DEFAULT_ASSET_DEVICE}{digest[:DEFAULT_ASSET_STEM_LENGTH]}{DEFAULT_ASSET_EXTENSION}"


def encode_gf(bitmap: MonoBitmap) -> GraphicField:
    """
    Encode a bitmap as an inline ^GF (ASCII hex) command.

    Args:
        bitmap: Packed monochrome bitmap

    Returns:
        GraphicField with the hex payload, sizes and the ^GFA command
    """
    hex_data = to_hex(bitmap)
    total = len(bitmap.data)
    bpr = bitmap.bytes_per_row
    return GraphicField(
        hex=hex_data,
        total_bytes=total,
        bytes_per_row=bpr,
        gf_command=f"^GFA,{total},{total},{bpr},{hex_data}",
    )


def encode_dg(asset_name: str, bitmap: MonoBitmap) -> StoredGraphic:
    """
    Encode a bitmap as a ~DG download plus an ^XG recall.

    Args:
        asset_name: Device + name, e.g. "R:LOGO.GRF". Empty means a name
            is generated with default_asset_name().
        bitmap: Packed monochrome bitmap
    """
    if not asset_name:
        asset_name = default_asset_name(bitmap)
        logger.debug("No asset name given, using %s", asset_name)

    gf = encode_gf(bitmap)
    return StoredGraphic(
        name=asset_name,
        hex=gf.hex,
        total_bytes=gf.total_bytes,
        bytes_per_row=gf.bytes_per_row,
        dg_command=f"~DG{asset_name},{gf.total_bytes},{gf.bytes_per_row},{gf.hex}",
        xg_command=f"^XG{asset_name},1,1",
    )
