"""Tests for line sources."""

import io
import logging
import sys

import pytest

from rtl433_parse.context import SourceSettings
from rtl433_parse.errors import SourceStartError
from rtl433_parse.process_utils import build_rtl433_command, popen_with_validation
from rtl433_parse.sources import (
    MAX_CONSECUTIVE_READ_ERRORS,
    ProcessLineSource,
    StdinLineSource,
    StreamLineSource,
    open_source,
)


class FlakyStream:
    """Binary stream that raises OSError for selected reads."""

    def __init__(self, results):
        self.results = list(results)

    def readline(self):
        if not self.results:
            return b""
        item = self.results.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_stream_strips_terminators():
    stream = io.BytesIO(b'{"a":1}\n{"b":2}\r\nlast')
    assert list(StreamLineSource(stream)) == ['{"a":1}', '{"b":2}', "last"]


def test_stream_accepts_text():
    assert list(StreamLineSource(io.StringIO("one\ntwo\n"))) == ["one", "two"]


def test_undecodable_line_is_reported_and_skipped():
    errors = []
    stream = io.BytesIO(b"good\n\xff\xfe bad\nalso good\n")
    lines = list(StreamLineSource(stream, on_error=errors.append))
    assert lines == ["good", "also good"]
    assert len(errors) == 1
    assert "utf-8" in errors[0].message


def test_os_error_is_reported_and_iteration_continues():
    errors = []
    stream = FlakyStream([b"a\n", OSError("device hiccup"), b"b\n"])
    lines = list(StreamLineSource(stream, on_error=errors.append))
    assert lines == ["a", "b"]
    assert [e.message for e in errors] == ["device hiccup"]
    assert str(errors[0]) == "Error reading line: device hiccup"


def test_read_errors_logged_by_default(caplog):
    stream = FlakyStream([OSError("boom"), b"x\n"])
    with caplog.at_level(logging.ERROR, logger="rtl433_parse"):
        assert list(StreamLineSource(stream)) == ["x"]
    assert "Error reading line: boom" in caplog.text


def test_gives_up_on_dead_stream():
    errors = []
    stream = FlakyStream([OSError("EIO")] * (MAX_CONSECUTIVE_READ_ERRORS + 5) + [b"never\n"])
    assert list(StreamLineSource(stream, on_error=errors.append)) == []
    assert len(errors) == MAX_CONSECUTIVE_READ_ERRORS


def test_stdin_source_reads_buffer(monkeypatch):
    fake_stdin = io.TextIOWrapper(io.BytesIO(b'{"model":"x"}\n'), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", fake_stdin)
    with StdinLineSource() as source:
        assert list(source) == ['{"model":"x"}']


def test_process_source_reads_stdout(fake_rtl433, recorded_args):
    script = fake_rtl433('{"model":"a"}\n{"model":"b"}\n')
    with ProcessLineSource(build_rtl433_command(script, ["-f", "433.92M"])) as source:
        lines = list(source)

    assert lines == ['{"model":"a"}', '{"model":"b"}']
    assert recorded_args() == ["-F", "json", "-M", "time:utc", "-f", "433.92M"]
    assert source.proc.returncode == 0


def test_process_source_nonzero_exit_is_not_fatal(fake_rtl433):
    script = fake_rtl433('{"model":"a"}\n', exit_code=3)
    with ProcessLineSource([str(script)]) as source:
        assert list(source) == ['{"model":"a"}']
    assert source.proc.returncode == 3


def test_process_source_bad_utf8_line(fake_rtl433):
    errors = []
    script = fake_rtl433(b"\xff\n{}\n")
    with ProcessLineSource([str(script)], on_error=errors.append) as source:
        assert list(source) == ["{}"]
    assert len(errors) == 1


def test_process_source_early_close_terminates(tmp_path):
    script = tmp_path / "chatty"
    script.write_text(
        f"#!{sys.executable}\n"
        "import sys, time\n"
        "while True:\n"
        "    sys.stdout.write('{}\\n')\n"
        "    sys.stdout.flush()\n"
        "    time.sleep(0.01)\n"
    )
    script.chmod(0o755)

    with ProcessLineSource([str(script)]) as source:
        first = next(iter(source))
    assert first == "{}"
    assert source.proc.returncode is not None


def test_missing_binary_is_start_error(tmp_path):
    source = ProcessLineSource([str(tmp_path / "no-such-rtl_433")])
    with pytest.raises(SourceStartError, match="Failed to start"):
        source.start()


def test_non_executable_is_start_error(tmp_path):
    path = tmp_path / "rtl_433"
    path.write_text("not a program")
    with pytest.raises(SourceStartError):
        with ProcessLineSource([str(path)]):
            pass


def test_open_source_selects_variant():
    assert isinstance(open_source(SourceSettings(kind="stdin")), StdinLineSource)
    source = open_source(SourceSettings(kind="process", binary="rtl_433"))
    assert isinstance(source, ProcessLineSource)
    assert source.command == ["rtl_433", "-F", "json", "-M", "time:utc"]


@pytest.mark.parametrize("cmd", [[], ["rtl_433", "  "]])
def test_command_validation_rejects_blank(cmd):
    with pytest.raises(ValueError):
        popen_with_validation(cmd)


def test_command_validation_rejects_non_strings():
    with pytest.raises(TypeError):
        popen_with_validation(["rtl_433", 433])


def test_undecodable_lines_never_end_iteration():
    errors = []
    bad_lines = b"\xff\n" * (MAX_CONSECUTIVE_READ_ERRORS + 20)
    stream = io.BytesIO(bad_lines + b'{"model":"after"}\n')
    lines = list(StreamLineSource(stream, on_error=errors.append))
    assert lines == ['{"model":"after"}']
    assert len(errors) == MAX_CONSECUTIVE_READ_ERRORS + 20


def test_successful_read_resets_dead_stream_count():
    errors = []
    almost = [OSError("EIO")] * (MAX_CONSECUTIVE_READ_ERRORS - 1)
    stream = FlakyStream(almost + [b"a\n"] + almost + [b"b\n"])
    assert list(StreamLineSource(stream, on_error=errors.append)) == ["a", "b"]
    assert len(errors) == 2 * (MAX_CONSECUTIVE_READ_ERRORS - 1)


def test_blank_binary_rejected_before_spawn():
    with pytest.raises(ValueError, match="argument 0 is blank"):
        build_rtl433_command("")
