"""
Serialize tokens back into a ZPL stream.

emit() is the left inverse of tokenize() for well-formed input.
"""

from .tokens import FIELD_DATA, FIELD_STOP, Command, FieldData, FieldStop, Raw, RawBytes, Token


def _render(tok: Token) -> str:
    if isinstance(tok, Command):
        return f"{tok.mark}{tok.name}{tok.params}"
    if isinstance(tok, FieldData):
        return FIELD_DATA + tok.data
    if isinstance(tok, FieldStop):
        return FIELD_STOP
    if isinstance(tok, Raw):
        return tok.text
    if isinstance(tok, RawBytes):
        # Lossy for real binary payloads, use emit_bytes() for those
        return tok.buf.decode("utf-8", errors="replace")
    raise TypeError(f"Unknown token type: {type(tok).__name__}")


def emit(tokens: list[Token]) -> str:
    """Render tokens as ZPL text."""
    return "".join(_render(tok) for tok in tokens)


def emit_bytes(tokens: list[Token], encoding: str = "utf-8") -> bytes:
    """
    Render tokens as a byte stream.

    Same as emit(), except RawBytes payloads are written verbatim instead
    of being decoded to text first.
    """
    out = bytearray()
    for tok in tokens:
        if isinstance(tok, RawBytes):
            out += tok.buf
        else:
            out += _render(tok).encode(encoding)
    return bytes(out)
