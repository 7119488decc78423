"""
Date and time utilities for tide sessions.

Instants are kept as timezone-aware UTC datetimes; they are only turned
into local civil time when an engine command line is built for a
particular station.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tideview.utils.logging import get_logger


logger = get_logger(__name__)

# Format of the engine's -b begin-time argument, e.g. 2024-01-18 22:36
ENGINE_TIME_FORMAT = "%Y-%m-%d %H:%M"


def utc_now() -> datetime:
    """Current wall-clock instant in UTC."""
    return datetime.now(timezone.utc)


def as_utc(instant: datetime) -> datetime:
    """Normalize an instant to aware UTC.

    Naive datetimes are taken to already be in UTC.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def zone_from_rule(rule: str | None) -> tzinfo | None:
    """Turn an engine time zone rule into a tzinfo.

    The engine reports rules in TZ-variable form, usually with a leading
    colon (``:America/Los_Angeles``).

    Args:
        rule: Rule string as reported by the engine

    Returns:
        tzinfo, or None if the rule is empty or unknown to the zone database
    """
    if not rule:
        return None

    name = rule.strip().lstrip(":")
    if not name:
        return None

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone rule", rule=rule)
        return None


def format_for_engine(instant: datetime, zone: tzinfo | None = None) -> str:
    """Format an instant as the engine's local begin time.

    Args:
        instant: Absolute instant
        zone: Station zone; None means the caller's local zone

    Returns:
        ``YYYY-MM-DD HH:MM`` in the given zone
    """
    local = as_utc(instant).astimezone(zone)
    return local.strftime(ENGINE_TIME_FORMAT)


def parse_engine_time(text: str, zone: tzinfo | None = None) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM`` in the given zone into a UTC instant.

    Args:
        text: Time in engine format
        zone: Zone the text is expressed in; None means the caller's local
            zone, matching format_for_engine

    Returns:
        Aware UTC datetime
    """
    naive = datetime.strptime(text.strip(), ENGINE_TIME_FORMAT)
    if zone is None:
        return naive.astimezone(timezone.utc)
    return naive.replace(tzinfo=zone).astimezone(timezone.utc)
