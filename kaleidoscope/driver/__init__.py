"""
Kaleidoscope Driver Package

The read-parse-dispatch loop: repeatedly parses one top-level construct and
hands it to a caller supplied handler, skipping a token after each syntax
error so the loop always reaches the end of the input.

Author: xwest
"""

from .driver import TopLevelDriver, DriverState, ParseSession, parse_string, parse_file
from .handlers import TopLevelHandler, ReportingHandler, CollectingHandler

__all__ = [
    "TopLevelDriver",
    "DriverState",
    "ParseSession",
    "parse_string",
    "parse_file",
    "TopLevelHandler",
    "ReportingHandler",
    "CollectingHandler",
]
