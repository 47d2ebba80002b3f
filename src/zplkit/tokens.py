"""
Token model for ZPL command streams.

A stream is represented as a flat list of tokens. Every byte of the
source text belongs to exactly one token, so a stream can be inspected,
spliced and re-emitted without losing anything.

Token kinds:
- Command:   ^XA, ~DG..., ^FO10,20 (mark + 1-2 letter name + params)
- FieldData: the payload between ^FD and ^FS
- FieldStop: the closing ^FS of a field-data block
- RawBytes:  opaque bytes re-emitted as-is
- Raw:       text outside any command (leading whitespace, junk)
"""

from dataclasses import dataclass
from typing import Union

# Command marks
CARET = "^"
TILDE = "~"
MARKS = (CARET, TILDE)

# Field-data framing
FIELD_DATA = "^FD"
FIELD_STOP = "^FS"

# Label framing
LABEL_START = "^XA"
LABEL_END = "^XZ"


@dataclass(frozen=True)
class Command:
    """A single protocol instruction."""

    mark: str    # "^" or "~"
    name: str    # 1-2 letters, e.g. "FO", "XG", "A"
    params: str = ""

    def __post_init__(self):
        if self.mark not in MARKS:
            raise ValueError(f"Invalid command mark: {self.mark!r}")


@dataclass(frozen=True)
class FieldData:
    """Payload of a ^FD ... ^FS block."""

    data: str


@dataclass(frozen=True)
class FieldStop:
    """End of a field-data block."""


@dataclass(frozen=True)
class RawBytes:
    """Opaque binary payload."""

    buf: bytes


@dataclass(frozen=True)
class Raw:
    """Literal text outside any recognized command."""

    text: str


Token = Union[Command, FieldData, FieldStop, RawBytes, Raw]
