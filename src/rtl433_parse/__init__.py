"""rtl433-parse: normalize rtl_433 NDJSON messages into readable reports."""

from .models import ParseFailure, ReadFailure, RTL433Message, RunStats
from .normalizer import normalize_line

__all__ = [
    "__version__",
    "ParseFailure",
    "ReadFailure",
    "RTL433Message",
    "RunStats",
    "normalize_line",
]

__version__ = "0.1.0"
