"""Inspect command - show how one line is normalized."""

import json
import sys

import click

from ...models import ParseFailure
from ...normalizer import normalize_line


@click.command()
@click.argument("line")
def inspect(line):
    """Normalize a single JSON line and print the resulting record.

    Absent optional fields are left out of the output; ``time`` is always
    present and shown in UTC.

    Examples:
        rtl433-parse inspect '{"model":"Acurite-5n1","time":"1681569176"}'
        rtl433-parse inspect '{"model":"LaCrosse-TX141THBv2","test":"No"}'
    """
    result = normalize_line(line)
    if isinstance(result, ParseFailure):
        click.echo(f"Error: {result}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result.to_json_dict(), indent=2))
