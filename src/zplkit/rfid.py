"""
RFID read/write command builders.

Write:
    EPC bank:       ^RFW,H^FD<epc>^FS
    USER/TID bank:  ^RFW,<U|T>,<offset>,<length>^FD<data>^FS
Read:
    Host buffer:    ^RFR,H^FD^FS
    EPC/USER/TID:   ^RFR,<E|U|T>,<offset>,<length>^FD^FS

The printer fills the empty ^FD block of a read with the tag response.
"""

import math
from enum import Enum
from typing import Optional, Union

from .errors import UnsupportedBank, UnsupportedOperation
from .parse import tokenize
from .tokens import Token

DEFAULT_READ_LENGTH = 8


class RFIDBank(str, Enum):
    """RFID tag memory banks (plus the printer's host buffer)."""

    EPC = "EPC"
    USER = "USER"
    TID = "TID"
    HOST_BUFFER = "HostBuffer"


# Single-letter bank codes for ^RFR / ^RFW
BANK_CODES = {
    RFIDBank.EPC: "E",
    RFIDBank.USER: "U",
    RFIDBank.TID: "T",
}


def bank_code(bank: Union[str, RFIDBank]) -> str:
    """
    Resolve a bank to its protocol letter (E, U or T).

    Raises:
        UnsupportedBank: For the host buffer or any unknown value
    """
    try:
        return BANK_CODES[RFIDBank(bank)]
    except (ValueError, KeyError):
        raise UnsupportedBank(f"Unsupported RFID bank: {bank}") from None


def build_rfid_write_tokens(
    epc: str,
    bank: Union[str, RFIDBank] = RFIDBank.EPC,
    offset: int = 0,
    length: Optional[int] = None,
) -> list[Token]:
    """
    Build tokens that write data to an RFID memory bank.

    Args:
        epc: Hex data to write
        bank: Target bank (EPC, USER or TID)
        offset: Start offset within the bank (USER/TID only)
        length: Number of bytes to write (USER/TID only, default covers
            the whole hex string)

    Raises:
        UnsupportedOperation: If bank is the read-only host buffer
        UnsupportedBank: If bank is not a known bank
    """
    if bank == RFIDBank.HOST_BUFFER:
        raise UnsupportedOperation(
            "HostBuffer is read-only. Use build_rfid_read_tokens() to inspect the buffer."
        )

    if bank == RFIDBank.EPC:
        # The whole EPC bank is written, offset and length do not apply
        write_cmd = "^RFW,H"
    else:
        if length is None:
            length = max(1, math.ceil(len(epc) / 2))
        write_cmd = f"^RFW,{bank_code(bank)},{offset},{length}"

    return tokenize(f"{write_cmd}^FD{epc}^FS")


def build_rfid_read_tokens(
    bank: Union[str, RFIDBank] = RFIDBank.EPC,
    offset: int = 0,
    length: int = DEFAULT_READ_LENGTH,
) -> list[Token]:
    """
    Build tokens that read an RFID memory bank into an empty field block.

    Raises:
        UnsupportedBank: If bank cannot be resolved to E, U or T
    """
    if bank == RFIDBank.HOST_BUFFER:
        return tokenize("^RFR,H^FD^FS")

    read_cmd = f"^RFR,{bank_code(bank)},{offset},{length}"
    return tokenize(f"{read_cmd}^FD^FS")
