"""Click subcommands for the arithcode CLI."""
