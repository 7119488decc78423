"""
Custom exceptions for tideview.

Provides a hierarchy of exceptions for different error conditions.
"""

from __future__ import annotations


class TideViewError(Exception):
    """Base exception for all tideview errors."""

    pass


class ConfigurationError(TideViewError):
    """Configuration-related errors, e.g. no station to show."""

    pass


class ParseError(TideViewError):
    """Engine directory text contained no recognizable station lines."""

    pass


class CoordinateParseError(TideViewError):
    """A directory line lacks the coordinate suffix needed for distance sorting."""

    def __init__(self, line: str, message: str | None = None):
        self.line = line
        super().__init__(message or f"No coordinates in directory line: {line!r}")


class StationNotFound(TideViewError):
    """Engine exited cleanly but produced no output for the station."""

    def __init__(self, station: str | None, message: str | None = None):
        self.station = station
        super().__init__(message or f"Station not found: {station}")


class ProcessFailure(TideViewError):
    """Engine exited non-zero, timed out, or could not be started."""

    def __init__(self, command: str, message: str, return_code: int | None = None):
        self.command = command
        self.return_code = return_code
        super().__init__(f"{command} failed: {message}")
