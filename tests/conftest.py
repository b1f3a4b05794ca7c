"""Pytest configuration and shared fixtures."""

import json
import os
import sys

import pytest
from click.testing import CliRunner

from rtl433_parse.cli import cli
from rtl433_parse.context import BINARY_ENV, LOG_LEVEL_ENV, SOURCE_ENV


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings from the developer's shell out of the tests."""
    for name in (SOURCE_ENV, BINARY_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional stdin.

    Usage:
        result = invoke(["run"], input_data=sample_ndjson)
        result.stdout, result.stderr, result.exit_code
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def sample_ndjson():
    """Two rtl_433 messages, one of them malformed in between."""
    return (
        '{"time":"2023-04-15 14:32:56","model":"Acurite-5n1","id":1234,'
        '"channel":1,"temperature_C":21.5,"humidity":47,"battery_ok":1,'
        '"test":"No","mic":"CRC"}\n'
        "{not json\n"
        '{"time":"2023-04-15 14:33:10","model":"LaCrosse-TX141THBv2",'
        '"temperature_C":-3.25}\n'
    )


@pytest.fixture
def fake_rtl433(tmp_path):
    """Write an executable that behaves like ``rtl_433 -F json``.

    Returns a factory taking the bytes (or text) to print and the exit code.
    The script records its argv in ``rtl_433_args.json`` next to itself.
    """

    def _make(output, exit_code=0):
        if isinstance(output, str):
            output = output.encode("utf-8")
        (tmp_path / "rtl_433_output.bin").write_bytes(output)

        script = tmp_path / "rtl_433"
        script.write_text(
            f"#!{sys.executable}\n"
            "import json, sys\n"
            "from pathlib import Path\n"
            "here = Path(__file__).parent\n"
            "(here / 'rtl_433_args.json').write_text(json.dumps(sys.argv[1:]))\n"
            "sys.stdout.buffer.write((here / 'rtl_433_output.bin').read_bytes())\n"
            "sys.stdout.flush()\n"
            f"sys.exit({exit_code})\n"
        )
        os.chmod(script, 0o755)
        return script

    return _make


@pytest.fixture
def recorded_args(tmp_path):
    """Read the argv the fake rtl_433 was started with."""

    def _read():
        return json.loads((tmp_path / "rtl_433_args.json").read_text())

    return _read
