"""Tests for directory orderings."""

import math

import pytest

from tideview.core.exceptions import CoordinateParseError, StationNotFound
from tideview.stations.directory import LocationDirectory, LocationRecord, parse_directory
from tideview.stations.sorting import (
    locality_key,
    record_distance,
    sort_alphabetical,
    sort_by_distance,
    sort_by_distance_from,
    sort_by_distance_from_degrees,
    sort_by_locality,
)


def _record(name: str, lat: float | None = None, lon: float | None = None) -> LocationRecord:
    return LocationRecord(line=name, name=name, latitude=lat, longitude=lon)


@pytest.fixture
def directory(sample_directory_text) -> LocationDirectory:
    return parse_directory(sample_directory_text)


class TestSortAlphabetical:
    """Tests for alphabetical order."""

    def test_order(self, directory):
        result = sort_alphabetical(directory)

        assert result.names() == [
            "Botany Bay, Australia",
            "Hilo, Hawaii",
            "Honolulu, Oahu, Hawaii",
            "Kahului, Maui, Hawaii",
            "Sydney (Fort Denison), New South Wales, Australia",
        ]

    def test_header_untouched(self, directory):
        result = sort_alphabetical(directory)
        assert result.header == directory.header
        assert result.lines()[:4] == directory.header

    def test_input_not_modified(self, directory):
        before = directory.names()
        sort_alphabetical(directory)
        assert directory.names() == before

    def test_case_sensitive_by_default(self):
        d = LocationDirectory(records=[_record("beta"), _record("Alpha"), _record("alpha")])

        assert sort_alphabetical(d).names() == ["Alpha", "alpha", "beta"]

    def test_fold_case_is_stable(self):
        d = LocationDirectory(records=[_record("beta"), _record("alpha"), _record("Alpha")])

        assert sort_alphabetical(d, fold_case=True).names() == ["alpha", "Alpha", "beta"]

    def test_idempotent(self, directory):
        once = sort_alphabetical(directory)
        assert sort_alphabetical(once).names() == once.names()


class TestLocalityKey:
    """Tests for locality_key."""

    def test_reverses_components(self):
        assert locality_key("Honolulu, Oahu, Hawaii") == "hawaii,oahu,honolulu"

    def test_single_component(self):
        assert locality_key("Atlantis  ") == "atlantis"

    def test_parenthetical_moved_to_front(self):
        """A trailing comma-free note goes in front before reversal."""
        assert locality_key("Honolulu, Oahu, Hawaii (2)") == "hawaii,oahu,(2) honolulu"

    def test_parenthetical_with_comma_not_detached(self):
        assert locality_key("Foo, Bar (x, y)") == "y),bar (x,foo"

    def test_inner_parenthetical_kept(self):
        """Only a trailing note is detached."""
        key = locality_key("Sydney (Fort Denison), New South Wales, Australia")
        assert key == "australia,new south wales,sydney (fort denison)"

    def test_reference_suffix_moved_to_front(self):
        key = locality_key("Botany Bay, Australia    Ref 33.9833 S, 151.2167 E")
        assert key.startswith("australia,")


class TestSortByLocality:
    """Tests for locality order."""

    def test_groups_regions(self, directory):
        result = sort_by_locality(directory)

        assert result.names() == [
            "Botany Bay, Australia",
            "Sydney (Fort Denison), New South Wales, Australia",
            "Hilo, Hawaii",
            "Kahului, Maui, Hawaii",
            "Honolulu, Oahu, Hawaii",
        ]

    def test_shared_keys_contiguous(self):
        d = LocationDirectory(records=[
            _record("A, X"),
            _record("B, Y"),
            _record("A, X"),
            _record("C, Z"),
            _record("A, X"),
        ])
        keys = [locality_key(r.name) for r in sort_by_locality(d)]

        first = keys.index("x,a")
        assert keys[first:first + 3] == ["x,a"] * 3

    def test_stable_and_idempotent(self):
        first = LocationRecord(line="Hilo, Hawaii   ", name="Hilo, Hawaii")
        second = LocationRecord(line="Hilo, Hawaii", name="Hilo, Hawaii")
        d = LocationDirectory(records=[first, _record("Aa, Zz"), second])

        once = sort_by_locality(d)
        assert once.records[0] is first
        assert once.records[1] is second
        assert sort_by_locality(once).records == once.records


class TestSortByDistance:
    """Tests for distance order."""

    def test_three_distances(self):
        d = LocationDirectory(records=[
            _record("A", 0.0, 0.1),
            _record("B", 0.0, 0.05),
            _record("C", 0.0, 0.2),
        ])

        result = sort_by_distance(d, 0.0, 0.0)

        assert result.names() == ["B", "A", "C"]

    def test_ties_keep_input_order(self):
        d = LocationDirectory(records=[
            _record("east", 0.0, 0.1),
            _record("west", 0.0, -0.1),
            _record("here", 0.0, 0.0),
        ])

        result = sort_by_distance(d, 0.0, 0.0)

        assert result.names() == ["here", "east", "west"]
        assert sort_by_distance(result, 0.0, 0.0).names() == result.names()

    def test_from_station(self, directory):
        result = sort_by_distance_from(directory, "Botany Bay, Australia")

        assert result.names()[:2] == [
            "Botany Bay, Australia",
            "Sydney (Fort Denison), New South Wales, Australia",
        ]
        assert set(result.names()[2:]) == {
            "Hilo, Hawaii", "Honolulu, Oahu, Hawaii", "Kahului, Maui, Hawaii",
        }

    def test_from_degrees(self, directory):
        # Near Hilo
        result = sort_by_distance_from_degrees(directory, 19.7, -155.0)
        assert result.names()[0] == "Hilo, Hawaii"
        assert result.names()[-1] in {
            "Botany Bay, Australia",
            "Sydney (Fort Denison), New South Wales, Australia",
        }

    def test_missing_coordinates_raise(self):
        d = LocationDirectory(records=[_record("A", 0.0, 0.1), _record("no position here")])

        with pytest.raises(CoordinateParseError) as exc_info:
            sort_by_distance(d, 0.0, 0.0)
        assert exc_info.value.line == "no position here"

    def test_unknown_origin_station(self, directory):
        with pytest.raises(StationNotFound):
            sort_by_distance_from(directory, "Atlantis")

    def test_empty_directory(self):
        assert len(sort_by_distance(LocationDirectory(), 0.0, 0.0)) == 0

    def test_record_distance_symmetric(self, directory):
        a = directory.find("Hilo, Hawaii")
        b = directory.find("Botany Bay, Australia")

        assert record_distance(a, b) == pytest.approx(record_distance(b, a))
        assert record_distance(a, a) == pytest.approx(0.0, abs=1e-12)
        assert 0 < record_distance(a, b) < math.pi
