"""CLI helper utilities shared across commands."""

import logging
import shutil
import sys

import click

PACKAGE_LOGGER = "rtl433_parse"


class ClickEchoHandler(logging.Handler):
    """Write log records to stderr through click.

    The stream is looked up on every record, so output follows whatever
    click considers stderr at the time (including CliRunner in tests).
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


class LevelPrefixFormatter(logging.Formatter):
    """Prefix warnings and errors with their level name."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {message}"
        return message


def setup_logging(level: int = logging.INFO) -> None:
    """Attach a single stderr handler to the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, ClickEchoHandler):
            logger.removeHandler(handler)

    handler = ClickEchoHandler()
    handler.setFormatter(LevelPrefixFormatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


def check_rtl433_available(binary: str) -> None:
    """Check that the rtl_433 executable can be found and exit if not.

    Raises:
        SystemExit: If the executable is not found
    """
    if not shutil.which(binary):
        click.echo(
            f"Error: {binary} not found\n"
            "Install rtl_433: https://github.com/merbanan/rtl_433\n"
            "Or pipe its output in: rtl_433 -F json -M time:utc | rtl433-parse",
            err=True,
        )
        sys.exit(1)
