"""Per-line outcome models used by the normalizer and pipeline."""

from __future__ import annotations

from pydantic import BaseModel


class ParseFailure(BaseModel):
    """A line that could not be turned into a record."""

    message: str
    raw: str

    def __str__(self) -> str:
        return f"Failed to parse JSON: {self.message} | raw line: {self.raw}"


class ReadFailure(BaseModel):
    """A line that could not be read from the source stream."""

    message: str

    def __str__(self) -> str:
        return f"Error reading line: {self.message}"


class RunStats(BaseModel):
    """Counters for one pipeline run."""

    lines: int = 0
    records: int = 0
    parse_errors: int = 0
    read_errors: int = 0

    def __str__(self) -> str:
        return (
            f"{self.lines} lines, {self.records} records, "
            f"{self.parse_errors} parse errors, {self.read_errors} read errors"
        )


__all__ = ["ParseFailure", "ReadFailure", "RunStats"]
