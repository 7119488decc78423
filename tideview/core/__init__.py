"""Core configuration, sessions and orchestration."""

from tideview.core.config import Settings, load_settings
from tideview.core.exceptions import (
    TideViewError,
    ConfigurationError,
    ParseError,
    CoordinateParseError,
    StationNotFound,
    ProcessFailure,
)

__all__ = [
    "Settings",
    "load_settings",
    "TideViewError",
    "ConfigurationError",
    "ParseError",
    "CoordinateParseError",
    "StationNotFound",
    "ProcessFailure",
]
