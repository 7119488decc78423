"""Tests for date/time utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from tideview.utils.dates import (
    as_utc,
    format_for_engine,
    parse_engine_time,
    zone_from_rule,
)


class TestZoneFromRule:
    """Tests for zone_from_rule."""

    def test_leading_colon(self):
        zone = zone_from_rule(":Australia/Sydney")
        assert zone is not None
        assert str(zone) == "Australia/Sydney"

    def test_without_colon(self):
        assert str(zone_from_rule("America/New_York")) == "America/New_York"

    @pytest.mark.parametrize("rule", [None, "", ":", "Not/AZone"])
    def test_unusable(self, rule):
        assert zone_from_rule(rule) is None


class TestEngineTime:
    """Tests for engine time formatting."""

    def test_format_in_station_zone(self):
        instant = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)

        assert format_for_engine(instant, zone_from_rule(":Australia/Sydney")) == "2024-01-01 11:00"
        assert format_for_engine(instant, zone_from_rule(":America/New_York")) == "2023-12-31 19:00"

    def test_format_utc(self):
        instant = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)
        assert format_for_engine(instant, timezone.utc) == "2024-06-01 09:30"

    def test_parse_in_zone(self):
        instant = parse_engine_time("2024-01-01 11:00", zone_from_rule(":Australia/Sydney"))
        assert instant == datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)

    def test_parse_default_local(self):
        instant = parse_engine_time(" 2024-06-01 09:30 ")

        assert instant == datetime(2024, 6, 1, 9, 30).astimezone(timezone.utc)
        assert format_for_engine(instant) == "2024-06-01 09:30"

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            parse_engine_time("June 1st")


class TestInstants:
    """Tests for instant normalisation."""

    def test_naive_is_utc(self):
        assert as_utc(datetime(2024, 1, 1, 12)).tzinfo is timezone.utc

    def test_aware_converted(self):
        plus_two = timezone(timedelta(hours=2))
        assert as_utc(datetime(2024, 1, 1, 12, tzinfo=plus_two)).hour == 10
