"""Exceptions raised by rtl433-parse.

Per-line problems (unreadable lines, invalid JSON) are returned as values,
see ``rtl433_parse.models.errors``. Only conditions that stop a run are
exceptions.
"""


class RTL433ParseError(Exception):
    """Base class for fatal rtl433-parse errors."""

    pass


class SourceStartError(RTL433ParseError):
    """The line source could not be started (e.g. rtl_433 failed to spawn)."""

    pass


class ConfigError(RTL433ParseError):
    """A setting (CLI flag or environment variable) has an invalid value."""

    pass
