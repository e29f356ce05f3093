"""CLI command for decoding a saved arithmetic-coded message.

Examples
--------
  arithcode decode results/abracadabra.json
  arithcode decode message.json --count 4
"""

from __future__ import annotations

from pathlib import Path
import json

import click

from arithcode.coding.arithmetic import ArithmeticCoder, EncodedMessage
from arithcode.errors import ArithmeticCodingError


@click.command(name="decode")
@click.argument("message_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "count",
    "--count",
    type=int,
    required=False,
    help="Number of symbols to decode (default: symbol_count stored in the message)",
)
@click.option(
    "half_open",
    "--half-open",
    is_flag=True,
    help="Accept a value equal to a sub-interval's lower bound",
)
def decode_command(message_file: Path, count: int | None, half_open: bool) -> None:
    """Decode the message stored in MESSAGE_FILE."""

    try:
        data = json.loads(message_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {message_file}: {e}") from e
    if not isinstance(data, dict):
        raise click.ClickException(f"Expected a JSON object in {message_file}")

    coder = ArithmeticCoder(snap_last=bool(data.get("snap_last", True)), strict=not half_open)
    try:
        message = EncodedMessage.from_dict(data)
        symbol_count = message.symbol_count if count is None else count
        decoded = coder.decode(message.encoded_value, message.probabilities, symbol_count)
    except ArithmeticCodingError as e:
        raise click.ClickException(str(e)) from e

    click.echo("".join(str(s) for s in decoded))
