"""
ZPL stream tokenizer.

Scans raw text into tokens. A command boundary is a mark (^ or ~)
immediately followed by one or two ASCII letters; nothing else about the
command is validated, so unknown commands pass through untouched.
"""

import logging
import string
from typing import Optional, Union

from .tokens import (
    CARET,
    FIELD_STOP,
    MARKS,
    Command,
    FieldData,
    FieldStop,
    Raw,
    Token,
)

logger = logging.getLogger(__name__)

_LETTERS = frozenset(string.ascii_letters)


def _is_letter(s: str, i: int) -> bool:
    return i < len(s) and s[i] in _LETTERS


def _find_command(s: str, start: int) -> Optional[tuple[int, int]]:
    """
    Find the next command boundary at or after start.

    Returns:
        (mark_index, name_end) or None if no command remains.
    """
    i = start
    n = len(s)
    while i < n:
        if s[i] in MARKS and _is_letter(s, i + 1):
            end = i + 2
            if _is_letter(s, end):
                end += 1
            return i, end
        i += 1
    return None


def tokenize(source: Union[str, bytes]) -> list[Token]:
    """
    Tokenize a ZPL stream.

    Args:
        source: ZPL text, or bytes decoded as UTF-8 (invalid sequences
            are replaced)

    Returns:
        List of tokens; emit() on the result reproduces the input as long
        as every ^FD block is closed by ^FS.

    An unterminated ^FD block is not an error: the rest of the input
    becomes a single FieldData token and scanning stops.
    """
    s = source if isinstance(source, str) else source.decode("utf-8", errors="replace")
    out: list[Token] = []
    pos = 0

    while pos < len(s):
        found = _find_command(s, pos)
        if found is None:
            out.append(Raw(s[pos:]))
            break

        start, name_end = found
        if start > pos:
            out.append(Raw(s[pos:start]))

        mark = s[start]
        name = s[start + 1:name_end]
        pos = name_end

        if mark == CARET and name == "FD":
            end = s.find(FIELD_STOP, pos)
            if end == -1:
                logger.debug("Unterminated ^FD at offset %d, keeping remainder as data", start)
                out.append(FieldData(s[pos:]))
                break
            out.append(FieldData(s[pos:end]))
            out.append(FieldStop())
            pos = end + len(FIELD_STOP)
            continue

        following = _find_command(s, pos)
        params_end = len(s) if following is None else following[0]
        out.append(Command(mark, name, s[pos:params_end]))
        pos = params_end

    return out


def find_last_xz(tokens: list[Token]) -> int:
    """
    Find the index of the last ^XZ command.

    Returns len(tokens) if there is none, so the result can always be
    used as an insertion point.
    """
    for idx in range(len(tokens) - 1, -1, -1):
        tok = tokens[idx]
        if isinstance(tok, Command) and tok.mark == CARET and tok.name == "XZ":
            return idx
    return len(tokens)
