"""Utility modules."""

from tideview.utils.dates import (
    ENGINE_TIME_FORMAT,
    as_utc,
    format_for_engine,
    parse_engine_time,
    utc_now,
    zone_from_rule,
)
from tideview.utils.logging import get_logger, setup_logging

__all__ = [
    "ENGINE_TIME_FORMAT",
    "as_utc",
    "format_for_engine",
    "parse_engine_time",
    "utc_now",
    "zone_from_rule",
    "get_logger",
    "setup_logging",
]
