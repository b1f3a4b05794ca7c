"""Line sources: where raw rtl_433 NDJSON lines come from.

Two variants share one contract. Iterating a source yields text lines with
the line terminator stripped, until the backing stream closes. A line that
cannot be read is reported to ``on_error`` and skipped; it never ends the
iteration on its own.

- StdinLineSource: lines piped in (``rtl_433 -F json | rtl433-parse``)
- ProcessLineSource: spawns ``rtl_433 -F json -M time:utc`` itself
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import IO, Callable, Iterator, Optional, Protocol, Sequence

from .context import SourceSettings
from .errors import SourceStartError
from .models import ReadFailure
from .process_utils import popen_with_validation

log = logging.getLogger(__name__)

# A descriptor whose reads fail (OSError) this many times in a row is
# treated as closed. Undecodable lines never count towards it.
MAX_CONSECUTIVE_READ_ERRORS = 100

ReadErrorHandler = Callable[[ReadFailure], None]


def log_read_failure(failure: ReadFailure) -> None:
    log.error(str(failure))


class LineSource(Protocol):
    """Produces lines; may report read errors."""

    def __iter__(self) -> Iterator[str]: ...

    def __enter__(self) -> "LineSource": ...

    def __exit__(self, *exc_info) -> None: ...

    def close(self) -> None: ...


class StreamLineSource:
    """Yield UTF-8 lines from an already-open stream.

    Binary streams are decoded line by line so one bad byte sequence costs
    one line rather than the rest of the stream. Text streams are accepted
    too and passed through as-is.
    """

    def __init__(
        self, stream: IO, on_error: Optional[ReadErrorHandler] = None
    ):
        self.stream = stream
        self.on_error = on_error or log_read_failure

    def __enter__(self) -> "StreamLineSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        # The stream belongs to the caller
        pass

    def _report(self, exc: Exception) -> None:
        self.on_error(ReadFailure(message=str(exc)))

    def __iter__(self) -> Iterator[str]:
        failed_reads = 0
        while True:
            try:
                raw = self.stream.readline()
            except UnicodeDecodeError as e:
                # Text stream: the bad line was consumed, the stream is fine
                failed_reads = 0
                self._report(e)
                continue
            except OSError as e:
                self._report(e)
                failed_reads += 1
                if failed_reads >= MAX_CONSECUTIVE_READ_ERRORS:
                    log.error(
                        "Giving up after %d consecutive read errors",
                        failed_reads,
                    )
                    return
                continue

            failed_reads = 0
            if not raw:
                return
            if isinstance(raw, bytes):
                try:
                    raw = raw.decode("utf-8")
                except UnicodeDecodeError as e:
                    self._report(e)
                    continue
            yield raw.rstrip("\r\n")


class StdinLineSource(StreamLineSource):
    """Lines from this process's standard input."""

    def __init__(self, on_error: Optional[ReadErrorHandler] = None):
        stream = getattr(sys.stdin, "buffer", sys.stdin)
        super().__init__(stream, on_error=on_error)


class ProcessLineSource:
    """Lines from the stdout of a spawned rtl_433 process.

    The process is started on ``__enter__`` (or on first iteration) and its
    stdout is read to exhaustion. rtl_433 stderr is left attached to ours so
    its own diagnostics stay visible.
    """

    def __init__(
        self,
        command: Sequence[str],
        on_error: Optional[ReadErrorHandler] = None,
    ):
        self.command = list(command)
        self.on_error = on_error
        self.proc: Optional[subprocess.Popen] = None
        self._exhausted = False

    def start(self) -> None:
        """Spawn the process.

        Raises:
            SourceStartError: If the executable cannot be spawned
        """
        if self.proc is not None:
            return
        try:
            self.proc = popen_with_validation(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
            )
        except OSError as e:
            raise SourceStartError(
                f"Failed to start {self.command[0]}: {e}"
            ) from e
        log.debug("Started %s (pid %s)", " ".join(self.command), self.proc.pid)

    def __enter__(self) -> "ProcessLineSource":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        self.start()
        yield from StreamLineSource(self.proc.stdout, on_error=self.on_error)
        self._exhausted = True

    def close(self) -> None:
        """Release the process.

        After a full read the process has already closed its stdout, so it
        is only reaped. When the caller stops early the process is
        terminated first.
        """
        proc = self.proc
        if proc is None:
            return
        if not self._exhausted and proc.poll() is None:
            proc.terminate()
        if proc.stdout is not None:
            proc.stdout.close()
        try:
            proc.wait(timeout=None if self._exhausted else 1)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
        if proc.returncode:
            log.debug("%s exited with status %s", self.command[0], proc.returncode)


def open_source(
    settings: SourceSettings, on_error: Optional[ReadErrorHandler] = None
) -> LineSource:
    """Build the line source selected by ``settings.kind``."""
    if settings.kind == "process":
        return ProcessLineSource(settings.command, on_error=on_error)
    return StdinLineSource(on_error=on_error)
