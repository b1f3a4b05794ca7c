"""Subprocess helpers for spawning rtl_433.

An rtl_433 argv is checked before it reaches ``subprocess.Popen``: an empty
command or a blank argument (e.g. ``--rtl433-bin ""``) fails with a clear
message instead of an OS error from deep inside the spawn.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from typing import Any

CommandArg = str | os.PathLike[str]

RTL433_BINARY = "rtl_433"

# Ask rtl_433 for one JSON object per line with UTC timestamps.
RTL433_JSON_ARGS = ("-F", "json", "-M", "time:utc")


def _checked_argv(cmd: Sequence[CommandArg]) -> list[str]:
    """Return ``cmd`` as a list of strings, rejecting unusable arguments."""
    if not cmd:
        raise ValueError("rtl_433 command is empty")

    argv: list[str] = []
    for position, arg in enumerate(cmd):
        if isinstance(arg, os.PathLike):
            arg = os.fspath(arg)
        if not isinstance(arg, str):
            raise TypeError(
                f"rtl_433 argument {position} must be a string or path, "
                f"got {type(arg).__name__}"
            )
        if not arg.strip():
            raise ValueError(f"rtl_433 argument {position} is blank")
        argv.append(arg)

    return argv


def popen_with_validation(
    cmd: Sequence[CommandArg], **kwargs: Any
) -> subprocess.Popen[Any]:
    """Spawn ``cmd`` after checking its arguments."""
    return subprocess.Popen(_checked_argv(cmd), **kwargs)  # noqa: S603


def build_rtl433_command(
    binary: CommandArg = RTL433_BINARY, extra_args: Sequence[str] = ()
) -> list[str]:
    """Build the rtl_433 argv.

    Args:
        binary: rtl_433 executable name or path
        extra_args: Additional rtl_433 arguments (e.g. ``["-f", "868M"]``),
            appended after the JSON/UTC output flags

    Returns:
        Checked argv list
    """
    return _checked_argv([binary, *RTL433_JSON_ARGS, *extra_args])
