"""Line source -> normalizer -> reporter, one line at a time."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Protocol

from .context import SourceSettings
from .models import ParseFailure, ReadFailure, RTL433Message, RunStats
from .normalizer import ParseFailureHandler, log_parse_failure, parse_lines
from .sources import ReadErrorHandler, log_read_failure, open_source

log = logging.getLogger(__name__)


class Reporter(Protocol):
    def report(self, record: RTL433Message) -> None: ...


def _counted(lines: Iterable[str], stats: RunStats) -> Iterator[str]:
    for line in lines:
        stats.lines += 1
        yield line


def _counting_parse_errors(stats: RunStats) -> ParseFailureHandler:
    def handler(failure: ParseFailure) -> None:
        stats.parse_errors += 1
        log_parse_failure(failure)

    return handler


def _counting_read_errors(stats: RunStats) -> ReadErrorHandler:
    def handler(failure: ReadFailure) -> None:
        stats.read_errors += 1
        log_read_failure(failure)

    return handler


def process_lines(
    lines: Iterable[str], reporter: Reporter, stats: Optional[RunStats] = None
) -> RunStats:
    """Normalize and report each line in order.

    Lines that fail to parse are logged and counted; they never stop the
    loop.
    """
    stats = stats if stats is not None else RunStats()
    records = parse_lines(
        _counted(lines, stats), on_failure=_counting_parse_errors(stats)
    )
    for record in records:
        reporter.report(record)
        stats.records += 1
    return stats


def run(settings: SourceSettings, reporter: Reporter) -> RunStats:
    """Open the configured source and process it until it closes.

    Raises:
        SourceStartError: If the process source cannot be spawned
    """
    stats = RunStats()
    with open_source(settings, on_error=_counting_read_errors(stats)) as source:
        process_lines(source, reporter, stats)
    return stats
