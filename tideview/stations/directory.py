"""
Station directory model.

Parses the engine's plain-text location listing (``tide -ml``) into
records. The listing has no formal grammar: a preamble of title and
column-heading lines, then one station per line ending in its type
marker and position, e.g.::

    Botany Bay, Australia                    Ref 33.9833° S, 151.2167° E

Lines that do not carry a position are kept verbatim so the directory
can be shown exactly as the engine printed it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator

from tideview.core.exceptions import ParseError
from tideview.stations.coordinates import parse_coordinate_line
from tideview.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class LocationRecord:
    """One station line of the directory."""

    line: str
    name: str
    latitude: float | None = None  # radians
    longitude: float | None = None  # radians
    kind: str | None = None  # "Ref" or "Sub"

    @property
    def has_position(self) -> bool:
        """True if the line carried parseable coordinates."""
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_line(cls, line: str) -> LocationRecord:
        """Create record from one directory line.

        Lines without a coordinate suffix become records whose name is
        the whole line with trailing whitespace removed.
        """
        line = line.rstrip("\r\n")
        position = parse_coordinate_line(line)
        if position is None:
            return cls(line=line, name=line.rstrip())

        return cls(
            line=line,
            name=position.name,
            latitude=position.latitude,
            longitude=position.longitude,
            kind=position.kind,
        )

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "kind": self.kind,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass
class LocationDirectory:
    """Ordered station directory.

    ``header`` holds the preamble lines printed before the first station;
    it never takes part in sorting. ``records`` start in the engine's own
    order.
    """

    records: list[LocationRecord] = field(default_factory=list)
    header: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[LocationRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> LocationRecord:
        return self.records[index]

    def with_records(self, records: Iterable[LocationRecord]) -> LocationDirectory:
        """Copy of this directory with the records in a new order."""
        return replace(self, records=list(records), header=list(self.header))

    def names(self) -> list[str]:
        return [r.name for r in self.records]

    def positioned(self) -> list[LocationRecord]:
        """Records that carry coordinates."""
        return [r for r in self.records if r.has_position]

    def index_of(self, name: str) -> int | None:
        """Index of the record with this exact station name."""
        for i, record in enumerate(self.records):
            if record.name == name:
                return i
        return None

    def find(self, name: str) -> LocationRecord | None:
        """Record with this exact station name, or None."""
        index = self.index_of(name)
        return None if index is None else self.records[index]

    def lines(self) -> list[str]:
        """Header and record lines in current order."""
        return list(self.header) + [r.line for r in self.records]

    def text(self) -> str:
        """Directory as text, one line per record."""
        return "\n".join(self.lines()) + "\n"


def parse_directory(raw_text: str) -> LocationDirectory:
    """Parse engine directory text.

    Lines before the first station line form the header. After that,
    blank lines are dropped and every other line becomes a record,
    positioned or not.

    Args:
        raw_text: Decoded output of the engine's location listing

    Returns:
        LocationDirectory in engine order

    Raises:
        ParseError: If no line carries a station position
    """
    header: list[str] = []
    records: list[LocationRecord] = []

    for line in raw_text.splitlines():
        if not records:
            record = LocationRecord.from_line(line)
            if record.has_position:
                records.append(record)
            else:
                header.append(line)
            continue

        if not line.strip():
            continue
        records.append(LocationRecord.from_line(line))

    if not records:
        raise ParseError("No station lines found in directory listing")

    unpositioned = sum(1 for r in records if not r.has_position)
    if unpositioned:
        logger.warning("Directory lines without coordinates", count=unpositioned)

    logger.info("Parsed station directory", stations=len(records), header_lines=len(header))

    return LocationDirectory(records=records, header=header)
