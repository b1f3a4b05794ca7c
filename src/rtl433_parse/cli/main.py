"""rtl433-parse CLI main entry point with global options."""

import sys

import click

from ..context import (
    LOG_LEVELS,
    SOURCE_KINDS,
    ParseContext,
    resolve_log_level,
    resolve_settings,
)
from ..errors import ConfigError
from .helpers import setup_logging


@click.group(invoke_without_command=True)
@click.option(
    "--source",
    type=click.Choice(SOURCE_KINDS, case_sensitive=False),
    help="Where to read NDJSON from (overrides $RTL433_PARSE_SOURCE, default: stdin)",
)
@click.option(
    "--rtl433-bin",
    help="rtl_433 executable for --source process (overrides $RTL433_BIN)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level for stderr diagnostics (overrides $RTL433_PARSE_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx, source, rtl433_bin, log_level):
    """Print readable summaries of rtl_433 JSON messages.

    Runs the ``run`` command when no command is given.
    """
    ctx.ensure_object(ParseContext)

    try:
        setup_logging(resolve_log_level(log_level))
        ctx.obj.settings = resolve_settings(source, rtl433_bin)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


# Register commands at module level so tests can import cli with commands attached
from .commands.inspect import inspect
from .commands.run import run

cli.add_command(run)
cli.add_command(inspect)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
