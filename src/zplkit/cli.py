"""
Command-Line Interface for zplkit.

Usage:
    zplkit tokens FILE          - Dump the token stream of a ZPL file
    zplkit check FILE           - Verify a ZPL file round-trips losslessly
    zplkit image IMAGE          - Encode an image as a ZPL label
    zplkit rfid-write EPC       - Print RFID write commands
    zplkit rfid-read            - Print RFID read commands
"""

import logging
import sys

import click

from .emit import emit
from .errors import ZPLError
from .image import DEFAULT_THRESHOLD, DitherMode, load_image, rgba_from_image
from .images import ImageOptions, build_image_cached_tokens, build_image_inline_tokens
from .parse import find_last_xz, tokenize
from .rfid import DEFAULT_READ_LENGTH, RFIDBank, build_rfid_read_tokens, build_rfid_write_tokens
from .tokens import LABEL_END, LABEL_START, FieldData
from .units import DEFAULT_DPI

DITHER_CHOICES = [m.value for m in DitherMode] + ["floyd-steinberg"]
BANK_CHOICES = [b.value for b in RFIDBank]


def wrap_label(chunk: list) -> str:
    """Splice a token chunk into an empty ^XA ... ^XZ label."""
    tokens = tokenize(LABEL_START + LABEL_END)
    at = find_last_xz(tokens)
    return emit(tokens[:at] + chunk + tokens[at:])


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug output")
def main(debug):
    """ZPL token and image codec tools."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[zplkit] %(name)s: %(message)s")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def tokens(path):
    """Dump the tokens of a ZPL file, one per line."""
    with open(path, "rb") as f:
        for tok in tokenize(f.read()):
            click.echo(repr(tok))


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def check(path):
    """Check that a ZPL file is well-formed and round-trips unchanged."""
    with open(path, "rb") as f:
        raw = f.read()

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        click.echo(f"{path}: not valid UTF-8 (byte {e.start})", err=True)
        sys.exit(1)

    toks = tokenize(text)
    if toks and isinstance(toks[-1], FieldData):
        click.echo(f"{path}: unterminated ^FD block", err=True)
        sys.exit(1)
    if emit(toks) != text:
        click.echo(f"{path}: round trip mismatch", err=True)
        sys.exit(1)

    click.echo(f"{path}: OK ({len(toks)} tokens)")


@main.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--mode",
    type=click.Choice(DITHER_CHOICES),
    default=DitherMode.THRESHOLD.value,
    help="Dither mode (default threshold)",
)
@click.option(
    "--threshold",
    type=click.IntRange(0, 255),
    default=DEFAULT_THRESHOLD,
    help=f"Black/white threshold 0-255 (default {DEFAULT_THRESHOLD})",
)
@click.option("--invert/--no-invert", default=False, help="Swap black and white")
@click.option("--x", "x", type=float, default=0, help="X position in --units")
@click.option("--y", "y", type=float, default=0, help="Y position in --units")
@click.option(
    "--units",
    type=click.Choice(["dot", "mm", "in"]),
    default="dot",
    help="Units for --x/--y (default dot)",
)
@click.option("--dpi", type=int, default=DEFAULT_DPI, help=f"Printer DPI (default {DEFAULT_DPI})")
@click.option("--name", default=None, help="Store as a named graphic (~DG) and recall it (^XG)")
def image(image, mode, threshold, invert, x, y, units, dpi, name):
    """Encode an image file as a ZPL label."""
    try:
        rgba, width, height = rgba_from_image(load_image(image))
        opts = ImageOptions(
            rgba=rgba,
            width=width,
            height=height,
            at=(x, y),
            mode=mode,
            threshold=threshold,
            invert=invert,
        )
        if name is None:
            chunk = build_image_inline_tokens(opts, dpi=dpi, units=units)
        else:
            chunk = build_image_cached_tokens(opts, name, dpi=dpi, units=units)
    except (ZPLError, OSError) as e:
        click.echo(f"Image error: {e}", err=True)
        sys.exit(1)

    click.echo(wrap_label(chunk))


@main.command("rfid-write")
@click.argument("epc")
@click.option("--bank", type=click.Choice(BANK_CHOICES), default=RFIDBank.EPC.value)
@click.option("--offset", type=click.IntRange(min=0), default=0, help="Offset (USER/TID)")
@click.option("--length", type=click.IntRange(min=1), default=None, help="Length (USER/TID)")
def rfid_write(epc, bank, offset, length):
    """Print the commands that write EPC to an RFID bank."""
    try:
        chunk = build_rfid_write_tokens(epc, bank=bank, offset=offset, length=length)
    except ZPLError as e:
        click.echo(f"RFID error: {e}", err=True)
        sys.exit(1)

    click.echo(emit(chunk))


@main.command("rfid-read")
@click.option("--bank", type=click.Choice(BANK_CHOICES), default=RFIDBank.EPC.value)
@click.option("--offset", type=click.IntRange(min=0), default=0)
@click.option("--length", type=click.IntRange(min=1), default=DEFAULT_READ_LENGTH)
def rfid_read(bank, offset, length):
    """Print the commands that read an RFID bank."""
    click.echo(emit(build_rfid_read_tokens(bank=bank, offset=offset, length=length)))


if __name__ == "__main__":
    main()
