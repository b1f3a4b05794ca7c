"""Turn raw NDJSON lines into RTL433Message records."""

from __future__ import annotations

import json
import logging
from typing import Callable, Iterable, Iterator, Optional, Union

from .models import ParseFailure, RTL433Message

log = logging.getLogger(__name__)

ParseFailureHandler = Callable[[ParseFailure], None]


def _non_finite_as_null(constant: str) -> None:
    # NaN and +/-Infinity are not JSON; the field is treated as absent
    return None


def normalize_line(line: str) -> Union[RTL433Message, ParseFailure]:
    """Parse one line into a record.

    Invalid JSON and JSON values that are not objects come back as a
    ParseFailure carrying the raw line. Field-level problems never fail the
    line; see RTL433Message for the fallbacks.
    """
    try:
        data = json.loads(line, parse_constant=_non_finite_as_null)
    except (ValueError, RecursionError) as e:
        return ParseFailure(message=str(e), raw=line)

    if not isinstance(data, dict):
        return ParseFailure(
            message=f"expected a JSON object, got {type(data).__name__}",
            raw=line,
        )

    return RTL433Message.model_validate(data)


def log_parse_failure(failure: ParseFailure) -> None:
    log.error(str(failure))


def parse_lines(
    lines: Iterable[str], on_failure: Optional[ParseFailureHandler] = None
) -> Iterator[RTL433Message]:
    """Lazily map lines to records, reporting and skipping failures."""
    report = on_failure or log_parse_failure
    for line in lines:
        result = normalize_line(line)
        if isinstance(result, ParseFailure):
            report(result)
            continue
        yield result
