"""Settings resolution and the click context object."""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

import click

from .errors import ConfigError
from .process_utils import RTL433_BINARY, build_rtl433_command

SOURCE_ENV = "RTL433_PARSE_SOURCE"
BINARY_ENV = "RTL433_BIN"
LOG_LEVEL_ENV = "RTL433_PARSE_LOG_LEVEL"

SOURCE_KINDS = ("stdin", "process")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_SOURCE = "stdin"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class SourceSettings:
    """Which line source to open and how to start rtl_433."""

    kind: str = DEFAULT_SOURCE
    binary: str = RTL433_BINARY
    extra_args: Tuple[str, ...] = ()

    @property
    def command(self) -> list[str]:
        return build_rtl433_command(self.binary, self.extra_args)


def _pick(option: Optional[str], env_name: str, default: str) -> str:
    if option:
        return option
    env_value = os.environ.get(env_name)
    if env_value:
        return env_value
    return default


def resolve_settings(
    source_option: Optional[str] = None,
    binary_option: Optional[str] = None,
    extra_args: Tuple[str, ...] = (),
) -> SourceSettings:
    """Resolve source settings.

    Resolution order for each value:
    1. CLI flag (``--source`` / ``--rtl433-bin``)
    2. Environment variable (``$RTL433_PARSE_SOURCE`` / ``$RTL433_BIN``)
    3. Default (read stdin / run ``rtl_433`` from PATH)

    Reads fresh from the environment each time.

    Raises:
        ConfigError: If the source kind is not one of SOURCE_KINDS
    """
    kind = _pick(source_option, SOURCE_ENV, DEFAULT_SOURCE).lower()
    if kind not in SOURCE_KINDS:
        raise ConfigError(
            f"Unknown source {kind!r} (from ${SOURCE_ENV}); "
            f"expected one of: {', '.join(SOURCE_KINDS)}"
        )

    binary = _pick(binary_option, BINARY_ENV, RTL433_BINARY)
    return SourceSettings(kind=kind, binary=binary, extra_args=tuple(extra_args))


def resolve_log_level(level_option: Optional[str] = None) -> int:
    """Resolve the log level: ``--log-level``, then $RTL433_PARSE_LOG_LEVEL, then INFO."""
    name = _pick(level_option, LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if name not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level {name!r} (from ${LOG_LEVEL_ENV}); "
            f"expected one of: {', '.join(LOG_LEVELS)}"
        )
    return getattr(logging, name)


class ParseContext:
    def __init__(self):
        self.settings = SourceSettings()


pass_context = click.make_pass_decorator(ParseContext, ensure=True)
