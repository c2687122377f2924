"""Main CLI entry point for picsplit."""

from __future__ import annotations

import click

from picsplit import __version__
from picsplit.cli.config_commands import config
from picsplit.cli.split import show_stats, split


@click.group()
@click.version_option(version=__version__, prog_name="picsplit")
def cli() -> None:
    r"""picsplit: select two balanced lists of picture stimuli.

    \b
    Examples:
        $ picsplit split norms.csv --output lists.jsonl --seed 42
        $ picsplit show-stats lists.jsonl
        $ picsplit config show
    """


cli.add_command(split)
cli.add_command(show_stats)
cli.add_command(config)
