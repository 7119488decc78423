"""Station directory, ordering and time zone lookup."""

from tideview.stations.coordinates import (
    LinePosition,
    angular_distances,
    great_circle_distance,
    parse_coordinate_line,
)
from tideview.stations.directory import LocationDirectory, LocationRecord, parse_directory
from tideview.stations.sorting import (
    SortOrder,
    locality_key,
    record_distance,
    sort_alphabetical,
    sort_by_distance,
    sort_by_distance_from,
    sort_by_distance_from_degrees,
    sort_by_locality,
)
from tideview.stations.timezone import TimezoneCache, TimezoneResolver, extract_time_zone

__all__ = [
    # Coordinates
    "LinePosition",
    "angular_distances",
    "great_circle_distance",
    "parse_coordinate_line",
    # Directory
    "LocationDirectory",
    "LocationRecord",
    "parse_directory",
    # Sorting
    "SortOrder",
    "locality_key",
    "record_distance",
    "sort_alphabetical",
    "sort_by_distance",
    "sort_by_distance_from",
    "sort_by_distance_from_degrees",
    "sort_by_locality",
    # Time zones
    "TimezoneCache",
    "TimezoneResolver",
    "extract_time_zone",
]
