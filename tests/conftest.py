"""Shared fixtures for tideview tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from tideview.engine.environment import EngineEnvironment
from tideview.engine.modes import OutputKind
from tideview.engine.runner import EngineRunner, FailureKind, RenderRequest, RenderResult


SAMPLE_DIRECTORY = """\
Location list generated 2024-06-01 12:00 UTC

Location                                                Type Coordinates
------------------------------------------------------------------------------------------------
Honolulu, Oahu, Hawaii                                   Ref 21.3067° N, 157.8670° W
Botany Bay, Australia                                    Ref 33.9833° S, 151.2167° E
Hilo, Hawaii                                             Ref 19.7300° N, 155.0550° W
Sydney (Fort Denison), New South Wales, Australia        Ref 33.8550° S, 151.2258° E
Kahului, Maui, Hawaii                                    Sub 20.9000° N, 156.4667° W
"""


class StubRunner(EngineRunner):
    """Engine runner that answers from tables instead of running ``tide``."""

    def __init__(
        self,
        zones: dict[str, str] | None = None,
        listing: str = SAMPLE_DIRECTORY,
        unknown: set[str] | None = None,
    ):
        super().__init__(EngineEnvironment(binary="tide"))
        self.zones = dict(zones or {})
        self.listing = listing
        self.unknown = set(unknown or ())
        self.requests: list[RenderRequest] = []
        self.about_calls: list[str] = []
        self.list_calls: list[int] = []

    @staticmethod
    def _not_found(station: str | None, kind: OutputKind = OutputKind.TEXT) -> RenderResult:
        message = "tide finished with no output"
        return RenderResult(
            success=False,
            output_kind=kind,
            content=message,
            command=["tide"],
            return_code=0,
            error_kind=FailureKind.STATION_NOT_FOUND,
            error_message=message,
            station=station,
        )

    def about(self, station: str) -> RenderResult:
        self.about_calls.append(station)
        rule = self.zones.get(station)
        if rule is None:
            return self._not_found(station)
        return RenderResult(
            success=True,
            output_kind=OutputKind.TEXT,
            content=f"Name                 {station}\nTime zone            {rule}\n",
            command=["tide", "-ma", "-l", station],
            return_code=0,
            station=station,
        )

    def invoke(self, request: RenderRequest) -> RenderResult:
        self.requests.append(request)
        if request.station in self.unknown:
            return self._not_found(request.station, request.output_kind)

        if request.output_kind is OutputKind.IMAGE:
            content: str | bytes = b"\x89PNG\r\n\x1a\nfake"
        else:
            content = f"{request.mode.code} {request.begin} {request.station}\n"
        return RenderResult(
            success=True,
            output_kind=request.output_kind,
            content=content,
            command=["tide", *request.to_args()],
            return_code=0,
            station=request.station,
        )

    def list_locations(self, width: int = 110) -> RenderResult:
        self.list_calls.append(width)
        if not self.listing:
            return self._not_found(None)
        return RenderResult(
            success=True,
            output_kind=OutputKind.TEXT,
            content=self.listing,
            command=["tide", "-tw", str(width), "-ml"],
            return_code=0,
        )


FAKE_ENGINE = """\
#!/bin/sh
DIR='{dir}'
printf '%s\\n' "$@" > "$DIR/args.txt"
printf '%s %s %s\\n' "$LANG" "$LC_ALL" "$LC_CTYPE" > "$DIR/locale.txt"
case "$*" in
  *-ml*)
    printf 'Location list\\n\\n'
    printf 'Botany Bay, Australia         Ref 33.9833\\260 S, 151.2167\\260 E\\n'
    printf 'Hilo, Hawaii                  Ref 19.7300\\260 N, 155.0550\\260 W\\n'
    ;;
  *Nowhere*)
    exit 0
    ;;
  *Broken*)
    echo "harmonics file is corrupt" >&2
    exit 3
    ;;
  *-ma*Somewhere*)
    echo "Name                 Somewhere"
    ;;
  *-ma*)
    echo "Name                 Botany Bay, Australia"
    echo "Time zone            :Australia/Sydney"
    echo "warning: old harmonics" >&2
    ;;
  *-fp*)
    printf '\\211PNG\\r\\n'
    ;;
  *)
    echo "tides $*"
    ;;
esac
"""


@pytest.fixture
def sample_directory_text() -> str:
    return SAMPLE_DIRECTORY


@pytest.fixture
def stub_runner() -> StubRunner:
    return StubRunner(zones={
        "Botany Bay, Australia": ":Australia/Sydney",
        "Hilo, Hawaii": ":Pacific/Honolulu",
        "The Battery, New York": ":America/New_York",
    })


@pytest.fixture
def fake_engine(tmp_path: Path) -> Path:
    """Executable shell script standing in for ``tide``."""
    if os.name != "posix":
        pytest.skip("fake engine script needs a POSIX shell")
    script = tmp_path / "tide"
    script.write_text(FAKE_ENGINE.format(dir=tmp_path))
    script.chmod(0o755)
    return script
