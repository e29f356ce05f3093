"""CLI command that encodes text, decodes it back and shows both results.

Prompts for the text when it is not given on the command line.

Examples
--------
  arithcode roundtrip AAB
  arithcode roundtrip
"""

from __future__ import annotations

import click

from arithcode.coding.arithmetic import ArithmeticCoder, max_safe_symbol_count
from arithcode.errors import ArithmeticCodingError


def request_input() -> str:
    """Ask the user for the text to encode."""

    return click.prompt("Please enter a stream of characters to encode", type=str)


def present_result(encoded_value: float, decoded: str) -> None:
    click.echo(f"The arithmetic encoded value is: {encoded_value!r}")
    click.echo(f"The decoded string is: {decoded}")


@click.command(name="roundtrip")
@click.argument("text", type=str, required=False)
@click.option(
    "half_open",
    "--half-open",
    is_flag=True,
    help="Accept a value equal to a sub-interval's lower bound while decoding",
)
def roundtrip_command(text: str | None, half_open: bool) -> None:
    """Encode TEXT, decode it again and check the result matches."""

    if text is None:
        text = request_input()

    coder = ArithmeticCoder(strict=not half_open)
    try:
        message = coder.encode_message(text)
        decoded = "".join(coder.decode_message(message))
    except ArithmeticCodingError as e:
        safe = max_safe_symbol_count(coder.fit(text)) if text else None
        hint = f" (safe precision bound: {safe} symbols)" if safe is not None else ""
        raise click.ClickException(f"{e}{hint}") from e

    present_result(message.encoded_value, decoded)
    if decoded != text:
        raise click.ClickException("Decoded text does not match the input")
    click.secho(f"OK: {message.symbol_count} symbols round-tripped", fg="green")
