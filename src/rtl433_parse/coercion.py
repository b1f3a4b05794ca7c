"""Field coercion for loosely-typed rtl_433 JSON values.

rtl_433 writes timestamps in several shapes depending on its ``-M time``
setting, and boolean-ish fields as ``"Yes"``/``"No"`` text. The functions
here turn those raw JSON values into typed Python values. They never raise
and never log; callers decide what to do with the returned warning.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Tuple

PLAIN_FORMAT = "%Y-%m-%d %H:%M:%S"

_FRACTIONAL_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\.(\d{1,9})$"
)
_EPOCH_RE = re.compile(r"^[+-]?\d+$")

_TRUE_TOKENS = frozenset({"yes", "true", "1"})
_FALSE_TOKENS = frozenset({"no", "false", "0"})


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _parse_plain(text: str) -> Optional[datetime]:
    try:
        naive = datetime.strptime(text, PLAIN_FORMAT)
    except ValueError:
        return None
    return naive.replace(tzinfo=timezone.utc)


def _parse_fractional(text: str) -> Optional[datetime]:
    match = _FRACTIONAL_RE.match(text)
    if not match:
        return None
    base = _parse_plain(match.group(1))
    if base is None:
        return None
    # datetime only holds microseconds; nanosecond digits are dropped
    micros = int(match.group(2)[:6].ljust(6, "0"))
    return base.replace(microsecond=micros)


def _parse_rfc3339(text: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(timezone.utc)


def _from_epoch(seconds: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _parse_epoch(text: str) -> Optional[datetime]:
    if not _EPOCH_RE.match(text):
        return None
    return _from_epoch(int(text))


# Order matters: the first parser that accepts the text wins.
TIMESTAMP_PARSERS: Tuple[Callable[[str], Optional[datetime]], ...] = (
    _parse_plain,
    _parse_fractional,
    _parse_rfc3339,
    _parse_epoch,
)


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse an rtl_433 timestamp string into an aware UTC datetime.

    Accepted forms, tried in order:

    1. ``2023-04-15 14:32:56`` (no zone, read as UTC)
    2. ``2023-04-15 14:32:56.123456`` (1-9 fractional digits, read as UTC)
    3. RFC 3339 / ISO 8601 with an offset or ``Z``
    4. Unix epoch seconds, e.g. ``1681569176``

    Returns:
        The instant, or None if no form matches.
    """
    for parser in TIMESTAMP_PARSERS:
        parsed = parser(text)
        if parsed is not None:
            return parsed
    return None


def coerce_timestamp(
    value: Any, now: Optional[datetime] = None
) -> Tuple[datetime, Optional[str]]:
    """Coerce a raw ``time`` value, falling back to the current time.

    Args:
        value: Raw JSON value (usually a string, possibly None)
        now: Fallback instant (default: current UTC time)

    Returns:
        Tuple of (instant, warning). The warning is None unless a value was
        present but could not be interpreted.
    """
    fallback = now if now is not None else utc_now()

    if value is None:
        return fallback, None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc), None
        return value.astimezone(timezone.utc), None

    if isinstance(value, str):
        parsed = parse_timestamp(value)
        if parsed is not None:
            return parsed, None
        if _EPOCH_RE.match(value):
            return fallback, f"Timestamp out of range: {value}"
        return fallback, f"Unknown timestamp format: {value}"

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = _from_epoch(value)
        if parsed is not None:
            return parsed, None
        return fallback, f"Timestamp out of range: {value}"

    return fallback, f"Unknown timestamp format: {value!r}"


def coerce_yes_no(value: Any) -> Optional[bool]:
    """Map a yes/no style value to a bool, or None when it is not recognized.

    Text tokens are matched case-insensitively: ``yes``/``true``/``1`` are
    True, ``no``/``false``/``0`` are False. JSON booleans pass through and
    the integers 1 and 0 map like their text forms.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        token = value.lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    return None
