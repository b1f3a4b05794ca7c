"""Pydantic models for rtl_433 messages and pipeline outcomes."""

from .errors import ParseFailure, ReadFailure, RunStats
from .message import RTL433Message

__all__ = [
    "ParseFailure",
    "ReadFailure",
    "RTL433Message",
    "RunStats",
]
