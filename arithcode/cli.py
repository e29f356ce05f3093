"""Command-line interface for arithcode using Click command groups."""

from __future__ import annotations

from typing import NoReturn
import logging

import click

from arithcode import __version__
from arithcode.config import SUPPORTED_LOG_LEVELS


@click.group()
@click.version_option(version=__version__)
@click.option(
    "log_level",
    "--log-level",
    type=click.Choice(SUPPORTED_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """arithcode: static-model arithmetic coding of text."""

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from arithcode.commands.encode import encode_command  # noqa: E402
from arithcode.commands.decode import decode_command  # noqa: E402
from arithcode.commands.roundtrip import roundtrip_command  # noqa: E402

cli.add_command(encode_command)
cli.add_command(decode_command)
cli.add_command(roundtrip_command)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
