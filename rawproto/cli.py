import logging
from pathlib import Path

import rich
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ._version import __version__
from .const import DEFAULT_RECURSION_LIMIT
from .errors import DecodeError
from .fields import decode_message
from .render import build_tree, dump_bytes


app = typer.Typer()
out = Console(highlight=False)
err = Console(stderr=True, highlight=False)


def configure_logging(verbose: bool) -> None:
    """Send the decoder's debug records to stderr, or stop sending them."""
    logger = logging.getLogger("rawproto")
    if verbose:
        logger.handlers = [RichHandler(console=err, show_path=False)]
        logger.setLevel(logging.DEBUG)
    else:
        logger.handlers = []
        logger.setLevel(logging.NOTSET)


def _read_source(source: str, hex_input: bool) -> bytes:
    if source == "-":
        data = typer.get_binary_stream("stdin").read()
    else:
        data = Path(source).read_bytes()

    if hex_input:
        return bytes.fromhex("".join(data.decode("ascii").split()))
    return data


@app.callback(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
def callback(ctx: typer.Context) -> None:
    """Inspect protobuf encoded bytes without a schema"""
    if ctx.invoked_subcommand is None:
        rich.print(ctx.get_help())


@app.command()
def version() -> None:
    rich.print("rawproto version:", __version__)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def decode(
    source: str = typer.Argument(
        ..., help="The file to decode, or - to read from stdin"
    ),
    hex_input: bool = typer.Option(
        False, "--hex", help="Whether the input is hexadecimal text"
    ),
    dump: bool = typer.Option(
        False, "--dump-bytes", help="Print every byte before decoding"
    ),
    max_depth: int = typer.Option(
        DEFAULT_RECURSION_LIMIT,
        "--max-depth",
        min=0,
        envvar="RAWPROTO_MAX_DEPTH",
        help="How deep to descend into embedded messages",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Whether or not to be verbose"
    ),
) -> None:
    """Decode a message and print its fields as a tree."""
    configure_logging(verbose)

    try:
        data = _read_source(source, hex_input)
    except (OSError, ValueError) as e:
        err.print(f"[bold red]Could not read {escape(source)}:[/] {escape(str(e))}")
        raise typer.Exit(2)

    if dump:
        for line in dump_bytes(data):
            out.print(line)

    try:
        fields = decode_message(data, max_depth=max_depth)
    except DecodeError as e:
        err.print(f"[bold red]parse error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    out.print(build_tree(fields, label=f"{source} ({len(data)} bytes)", max_depth=max_depth))
