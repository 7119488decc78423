"""
Station directory orderings.

Three stable reorderings of a directory's records (the header is left
alone):

- alphabetical on the raw line text
- by locality key, so stations sharing a region suffix sit together
- by great-circle distance from an origin point
"""

from __future__ import annotations

import re
from enum import Enum

import numpy as np

from tideview.core.exceptions import CoordinateParseError, StationNotFound
from tideview.stations.coordinates import DEG2RAD, angular_distances, great_circle_distance
from tideview.stations.directory import LocationDirectory, LocationRecord


# Trailing "(note)" without commas, or a "ref"/"sub" marker followed by a position
ANNOTATION_RE = re.compile(r"\s*(\([^,()]*\)|(?<!\S)(?:ref|sub)\s+\d.*)$")


class SortOrder(str, Enum):
    """Available directory orderings."""

    ALPHABETICAL = "alpha"
    LOCALITY = "locality"
    DISTANCE = "distance"


def sort_alphabetical(
    directory: LocationDirectory,
    fold_case: bool = False,
) -> LocationDirectory:
    """Order records lexically by line text.

    Args:
        directory: Directory to order
        fold_case: Compare case-insensitively

    Returns:
        New directory; equal lines keep their relative order
    """
    if fold_case:
        records = sorted(directory.records, key=lambda r: r.line.casefold())
    else:
        records = sorted(directory.records, key=lambda r: r.line)
    return directory.with_records(records)


def locality_key(text: str) -> str:
    """Derive the locality sort key of a station name.

    The name is lower-cased and any trailing annotation is moved to the
    front; the comma-separated parts are then reversed so the broadest
    locality comes first::

        "Honolulu, Oahu, Hawaii"     -> "hawaii,oahu,honolulu"
        "Honolulu, Oahu, Hawaii (2)" -> "hawaii,oahu,(2) honolulu"

    Args:
        text: Station name or raw line

    Returns:
        Sort key
    """
    text = text.rstrip().lower()

    match = ANNOTATION_RE.search(text)
    if match:
        text = f"{match.group(1)} {text[:match.start()]}"

    parts = [part.strip() for part in text.split(",")]
    return ",".join(reversed(parts))


def sort_by_locality(directory: LocationDirectory) -> LocationDirectory:
    """Order records by locality key, grouping shared region suffixes."""
    records = sorted(directory.records, key=lambda r: locality_key(r.name))
    return directory.with_records(records)


def record_distance(a: LocationRecord, b: LocationRecord) -> float:
    """Great-circle distance between two positioned records, in radians.

    Raises:
        CoordinateParseError: If either record has no position
    """
    for record in (a, b):
        if not record.has_position:
            raise CoordinateParseError(record.line)
    return great_circle_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def sort_by_distance(
    directory: LocationDirectory,
    origin_lat: float,
    origin_lon: float,
) -> LocationDirectory:
    """Order records by distance from an origin, nearest first.

    Args:
        directory: Directory to order
        origin_lat: Origin latitude in radians
        origin_lon: Origin longitude in radians

    Returns:
        New directory; equidistant records keep their relative order

    Raises:
        CoordinateParseError: If any record lacks coordinates
    """
    for record in directory.records:
        if not record.has_position:
            raise CoordinateParseError(record.line)

    if not directory.records:
        return directory.with_records([])

    lats = np.array([r.latitude for r in directory.records])
    lons = np.array([r.longitude for r in directory.records])
    distances = angular_distances(lats, lons, origin_lat, origin_lon)

    order = np.argsort(distances, kind="stable")
    return directory.with_records(directory.records[i] for i in order)


def sort_by_distance_from(directory: LocationDirectory, name: str) -> LocationDirectory:
    """Order records by distance from the named station.

    Raises:
        StationNotFound: If the name is not in the directory
        CoordinateParseError: If that station, or any other, lacks coordinates
    """
    origin = directory.find(name)
    if origin is None:
        raise StationNotFound(name, f"Station not in directory: {name}")
    if not origin.has_position:
        raise CoordinateParseError(origin.line)
    return sort_by_distance(directory, origin.latitude, origin.longitude)


def sort_by_distance_from_degrees(
    directory: LocationDirectory,
    latitude: float,
    longitude: float,
) -> LocationDirectory:
    """Order records by distance from a point given in degrees."""
    return sort_by_distance(directory, latitude * DEG2RAD, longitude * DEG2RAD)
