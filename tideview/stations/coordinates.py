"""
Station coordinate utilities.

Provides:
- Extraction of name and position from one engine directory line
- Great-circle (haversine) angular distance, scalar and vectorised

Angles are radians throughout, north and east positive.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

import numpy as np


# Constants
PI = math.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# "<name>   Ref 33.9833° S, 151.2167° E" (degree sign optional)
COORDINATE_LINE_RE = re.compile(
    r"^(?P<name>.*?)\s+(?P<kind>Ref|Sub)\s+"
    r"(?P<lat>\d+(?:\.\d*)?)\s*°?\s*(?P<ns>[NS]),\s*"
    r"(?P<lon>\d+(?:\.\d*)?)\s*°?\s*(?P<ew>[EW])\s*$"
)


@dataclass(frozen=True)
class LinePosition:
    """Fields extracted from a directory line."""

    name: str
    kind: str  # "Ref" or "Sub"
    latitude: float  # radians
    longitude: float  # radians

    @property
    def lat_deg(self) -> float:
        """Latitude in degrees."""
        return self.latitude * RAD2DEG

    @property
    def lon_deg(self) -> float:
        """Longitude in degrees."""
        return self.longitude * RAD2DEG


def parse_coordinate_line(line: str) -> LinePosition | None:
    """Extract station name and position from one directory line.

    Args:
        line: One line of directory text

    Returns:
        LinePosition, or None if the line does not end in a coordinate suffix
    """
    match = COORDINATE_LINE_RE.match(line.rstrip("\r\n"))
    if not match:
        return None

    lat = float(match.group("lat")) * DEG2RAD
    lon = float(match.group("lon")) * DEG2RAD
    if match.group("ns") == "S":
        lat = -lat
    if match.group("ew") == "W":
        lon = -lon

    return LinePosition(
        name=match.group("name").rstrip(),
        kind=match.group("kind"),
        latitude=lat,
        longitude=lon,
    )


def great_circle_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Angular distance between two points using the haversine formula.

    Args:
        lat1: Latitude of point 1 in radians
        lon1: Longitude of point 1 in radians
        lat2: Latitude of point 2 in radians
        lon2: Longitude of point 2 in radians

    Returns:
        Distance in radians of arc
    """
    a = (
        math.sin((lat1 - lat2) / 2) ** 2 +
        math.cos(lat1) * math.cos(lat2) * math.sin((lon1 - lon2) / 2) ** 2
    )
    # Rounding can push a fraction past 1 for near-antipodal points
    return 2 * math.asin(math.sqrt(min(a, 1.0)))


def angular_distances(
    latitudes: np.ndarray,
    longitudes: np.ndarray,
    origin_lat: float,
    origin_lon: float,
) -> np.ndarray:
    """Vectorised haversine distance from one origin to many points.

    Args:
        latitudes: Point latitudes in radians
        longitudes: Point longitudes in radians
        origin_lat: Origin latitude in radians
        origin_lon: Origin longitude in radians

    Returns:
        Array of distances in radians
    """
    lats = np.asarray(latitudes, dtype=float)
    lons = np.asarray(longitudes, dtype=float)

    a = (
        np.sin((lats - origin_lat) / 2) ** 2 +
        np.cos(lats) * np.cos(origin_lat) * np.sin((lons - origin_lon) / 2) ** 2
    )
    return 2 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))
