"""CLI command for encoding text to a single arithmetic-coded value.

The probability table is built from the text itself. The encoded value is
printed with full float precision; ``--output`` also saves a JSON message
that ``arithcode decode`` can read back.

Examples
--------
  arithcode encode "hello world"
  arithcode encode AAB --trace
  arithcode encode "abracadabra" --output results/abracadabra.json
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import json

import click

from arithcode.coding.arithmetic import (
    ArithmeticCoder,
    compute_codelength,
    iter_intervals,
    max_safe_symbol_count,
)
from arithcode.config import Config
from arithcode.errors import ArithmeticCodingError


@click.command(name="encode")
@click.argument("text", type=str)
@click.option(
    "output",
    "--output",
    type=click.Path(path_type=Path),
    required=False,
    help="Write the encoded message as JSON to this path",
)
@click.option(
    "trace",
    "--trace",
    is_flag=True,
    help="Print the interval held after each symbol",
)
@click.option(
    "no_snap",
    "--no-snap",
    is_flag=True,
    help="Do not snap the last sub-interval to the enclosing upper bound",
)
def encode_command(text: str, output: Path | None, trace: bool, no_snap: bool) -> None:
    """Encode TEXT under its own character frequencies."""

    coder = ArithmeticCoder(snap_last=not no_snap)
    try:
        message = coder.encode_message(text)
        codelength = compute_codelength(text, message.probabilities)
        safe = max_safe_symbol_count(message.probabilities)

        if trace:
            steps = iter_intervals(text, message.probabilities, snap_last=coder.snap_last)
            for i, (symbol, interval) in enumerate(zip(text, steps)):
                click.echo(f"{i:>4} {symbol!r:>6} [{interval.lower!r}, {interval.upper!r})")
    except ArithmeticCodingError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Encoded value: {message.encoded_value!r}")
    click.echo(f"Symbols: {message.symbol_count} | Alphabet: {len(message.probabilities)}")
    click.echo(f"Ideal codelength: {codelength:.4f} bits")
    if safe is not None and message.symbol_count > safe:
        click.secho(
            f"Warning: {message.symbol_count} symbols exceeds the safe precision bound of {safe}",
            fg="yellow",
            err=True,
        )

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        results = message.to_dict()
        results.update(
            {
                "codelength_bits": codelength,
                "entropy_bits": message.probabilities.entropy(),
                "max_safe_symbols": safe,
                "snap_last": coder.snap_last,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )
        with output.open("w", encoding="utf-8") as f:
            json.dump(results, f, indent=Config.JSON_INDENT, ensure_ascii=False)
        click.echo(f"Message saved: {output}")
