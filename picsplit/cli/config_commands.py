"""Configuration commands for picsplit CLI."""

from __future__ import annotations

from pathlib import Path

import click
from rich.syntax import Syntax

from picsplit.cli.utils import console, print_error, print_success
from picsplit.config import get_default_config, load_config, save_yaml, to_yaml
from picsplit.errors import ConfigError


@click.group()
def config() -> None:
    r"""Configuration commands.

    \b
    Examples:
        $ picsplit config show --config picsplit.yaml
        $ picsplit config init picsplit.yaml
    """


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.pass_context
def show(ctx: click.Context, config_path: Path | None) -> None:
    """Show the effective configuration as YAML.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    config_path : Path | None
        Optional YAML configuration file.
    """
    try:
        effective = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        ctx.exit(1)
    console.print(Syntax(to_yaml(effective), "yaml"))


@click.command()
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init(ctx: click.Context, output_file: Path, force: bool) -> None:
    """Write the default configuration to a YAML file.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    output_file : Path
        Destination file.
    force : bool
        Overwrite an existing file.
    """
    if output_file.exists() and not force:
        print_error(f"{output_file} already exists (use --force to overwrite)")
        ctx.exit(1)
    save_yaml(get_default_config(), output_file)
    print_success(f"Wrote default configuration: {output_file}")


config.add_command(show)
config.add_command(init)
