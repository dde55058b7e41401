#!/usr/bin/env python3
"""
Main CLI Entry Point for the Mess Ledger

Groups the ledger commands (settle, months, validate) with a few utility
commands for inspecting the installed version and active configuration.
"""

import logging
import os

import click

from .. import __version__
from ..core.config import get_config, reload_config
from .settle import months, settle, validate


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Environment to load configuration for (overrides MESSLEDGER_ENV)",
)
@click.option("--verbose", "-v", is_flag=True, help="Print the environment and ledger file being used")
@click.option("--debug", is_flag=True, help="Log settlement details at DEBUG level")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Mess Ledger - monthly settlement of a shared meal fund

    Members deposit money, buy groceries at the bazar and log lunches and
    dinners. Each month the bazar total is split by meals eaten, and every
    member is shown as owed a refund or owing the fund.

    Commands that read a ledger take the ledger file as an argument, or use
    MESSLEDGER_LEDGER_FILE in MESSLEDGER_DATA_DIR when it is omitted.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["MESSLEDGER_ENV"] = config_env
        config = reload_config()
    else:
        config = get_config()

    if debug:
        logging.getLogger("messledger").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Ledger file: {config.ledger.ledger_file}")


@main.command()
def version() -> None:
    """Show version information."""
    click.echo(f"Mess Ledger v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Ledger File: {config_obj.ledger.ledger_file}")
    click.echo(f"  Currency Symbol: {config_obj.display.currency_symbol}")
    click.echo(f"  Decimal Places: {config_obj.display.decimal_places}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


main.add_command(settle)
main.add_command(months)
main.add_command(validate)


if __name__ == "__main__":
    main()
