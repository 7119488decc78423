"""
Per-station time zone lookup.

The engine knows each station's zone; it is reported on a ``Time zone``
line of the station's "about" output. Lookups are memoised for the life
of the cache object. Only successful lookups are stored, so a station
that failed once is asked for again next time.
"""

from __future__ import annotations

import re
import threading
from typing import Iterator

from tideview.engine.runner import EngineRunner
from tideview.utils.logging import get_logger


logger = get_logger(__name__)

TIME_ZONE_RE = re.compile(r"^Time zone[ \t]+(?P<rule>.*?)[ \t]*$", re.MULTILINE)


def extract_time_zone(text: str) -> str | None:
    """Find the time zone rule in "about station" output.

    Args:
        text: Engine output

    Returns:
        Rule string, or None if there is no non-empty ``Time zone`` line
    """
    for match in TIME_ZONE_RE.finditer(text):
        rule = match.group("rule")
        if rule:
            return rule
    return None


class TimezoneCache:
    """Station name to time zone rule mapping.

    Entries are never evicted. A lock guards updates so one cache can be
    shared between sessions on different threads.
    """

    def __init__(self) -> None:
        self._rules: dict[str, str] = {}
        self._lock = threading.Lock()

    def __contains__(self, station: object) -> bool:
        return station in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(dict(self._rules))

    def get(self, station: str) -> str | None:
        return self._rules.get(station)

    def put(self, station: str, rule: str) -> None:
        with self._lock:
            self._rules.setdefault(station, rule)


class TimezoneResolver:
    """Resolves station time zones through the engine, with caching.

    Usage:
        resolver = TimezoneResolver(EngineRunner(), TimezoneCache())
        rule = resolver.resolve("Botany Bay, Australia")  # ":Australia/Sydney"
    """

    def __init__(self, runner: EngineRunner, cache: TimezoneCache | None = None):
        """Initialize resolver.

        Args:
            runner: Engine runner used on cache misses
            cache: Shared cache (a fresh one if not provided)
        """
        self.runner = runner
        self.cache = cache if cache is not None else TimezoneCache()

    def resolve(self, station: str) -> str | None:
        """Time zone rule for a station.

        Args:
            station: Station name as the engine knows it

        Returns:
            Rule string, or None if the engine failed or reported no zone
        """
        cached = self.cache.get(station)
        if cached is not None:
            logger.debug("Time zone cache hit", station=station, rule=cached)
            return cached

        result = self.runner.about(station)
        if not result.success:
            logger.info(
                "Time zone lookup failed",
                station=station,
                error=result.error_message,
            )
            return None

        rule = extract_time_zone(result.text)
        if rule is None:
            logger.info("No time zone in station information", station=station)
            return None

        self.cache.put(station, rule)
        logger.debug("Time zone cached", station=station, rule=rule)
        return rule
