"""Render normalized records for humans (text) or tools (NDJSON)."""

import json
from datetime import datetime, timezone
from typing import TextIO

from .models import RTL433Message

REPORTER_NAMES = ("text", "ndjson")


def format_time(value: datetime) -> str:
    """Format an instant as ``YYYY-MM-DD HH:MM:SS[.fff] UTC``.

    Fractional seconds use 3 digits when millisecond-aligned, 6 otherwise,
    and are left out when zero.
    """
    value = value.astimezone(timezone.utc)
    text = value.strftime("%Y-%m-%d %H:%M:%S")
    if value.microsecond:
        if value.microsecond % 1000 == 0:
            text += f".{value.microsecond // 1000:03d}"
        else:
            text += f".{value.microsecond:06d}"
    return f"{text} UTC"


def format_record(record: RTL433Message) -> str:
    """Build the text block for one record, including the trailing blank line."""
    lines = [
        f"Received message from model: {record.model} "
        f"at {format_time(record.time)}"
    ]
    if record.temperature_c is not None:
        lines.append(f"  Temperature: {record.temperature_c:.1f}°C")
    if record.humidity is not None:
        lines.append(f"  Humidity: {record.humidity}%")
    if record.test is not None:
        lines.append(f"  Is test: {'true' if record.test else 'false'}")
    lines.append("")
    return "\n".join(lines) + "\n"


class TextReporter:
    """Human-readable block per record."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def report(self, record: RTL433Message) -> None:
        self.stream.write(format_record(record))
        self.stream.flush()


class NdjsonReporter:
    """One normalized JSON object per line."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def report(self, record: RTL433Message) -> None:
        self.stream.write(json.dumps(record.to_json_dict()) + "\n")
        self.stream.flush()


def get_reporter(name: str, stream: TextIO):
    if name == "ndjson":
        return NdjsonReporter(stream)
    if name == "text":
        return TextReporter(stream)
    raise ValueError(f"Unknown output format: {name}")
