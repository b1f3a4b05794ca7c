"""Run command - stream rtl_433 messages and report each one."""

import dataclasses
import logging
import sys

import click

from ...context import pass_context
from ...errors import RTL433ParseError
from ...pipeline import run as run_pipeline
from ...reporter import REPORTER_NAMES, get_reporter
from ..helpers import check_rtl433_available

log = logging.getLogger(__name__)


@click.command(context_settings=dict(ignore_unknown_options=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(REPORTER_NAMES),
    default="text",
    show_default=True,
    help="text: readable summary per message; ndjson: normalized JSON per line",
)
@click.argument("rtl433_args", nargs=-1, type=click.UNPROCESSED)
@pass_context
def run(ctx, output_format, rtl433_args):
    """Read rtl_433 NDJSON and print a summary of each message.

    Extra arguments are passed to rtl_433 after ``-F json -M time:utc``
    when the source is ``process``.

    Examples:
        # Pipe rtl_433 output in
        rtl_433 -F json -M time:utc | rtl433-parse run

        # Let rtl433-parse start rtl_433
        rtl433-parse --source process run
        rtl433-parse --source process run -- -f 868M -R 40

        # Normalized NDJSON for other tools
        rtl433-parse run --format ndjson < capture.ndjson
    """
    settings = dataclasses.replace(ctx.settings, extra_args=tuple(rtl433_args))

    if settings.kind == "process":
        check_rtl433_available(settings.binary)
    elif rtl433_args:
        log.warning(
            "Ignoring rtl_433 arguments with stdin source: %s",
            " ".join(rtl433_args),
        )

    log.info("RTL-433 parser starting (source=%s)", settings.kind)
    try:
        stats = run_pipeline(settings, get_reporter(output_format, sys.stdout))
    except RTL433ParseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)

    log.info("Input closed: %s", stats)
