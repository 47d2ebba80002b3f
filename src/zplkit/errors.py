"""Exception classes for zplkit."""


class ZPLError(Exception):
    """Base exception for all zplkit errors."""

    pass


class UnsupportedOperation(ZPLError):
    """Operation is not allowed by the protocol (e.g. writing a read-only bank)."""

    pass


class UnsupportedBank(ZPLError, ValueError):
    """RFID memory bank cannot be resolved to a protocol bank code."""

    pass


class ImageError(ZPLError, ValueError):
    """Error converting image data into a monochrome bitmap."""

    pass


class ImageSizeError(ImageError):
    """Image dimensions exceed safety limits."""

    pass
