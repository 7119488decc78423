"""
Tide browsing session.

A session tracks one station, one absolute instant and one display
mode. Every navigation call updates that state and re-renders through
the engine. Render failures replace the visible content with the
failure text but leave the state alone, so the user can retry or move
on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from tideview.core.config import EngineConfig
from tideview.core.exceptions import ConfigurationError
from tideview.engine.modes import DisplayMode, OutputKind
from tideview.engine.runner import EngineRunner, FailureKind, RenderRequest, RenderResult
from tideview.stations.timezone import TimezoneResolver
from tideview.utils.dates import as_utc, format_for_engine, utc_now, zone_from_rule
from tideview.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_STEP = timedelta(hours=6)


@dataclass(frozen=True)
class DisplayCapabilities:
    """What the host can show."""

    images: bool = False
    image_formats: frozenset[str] = field(default_factory=frozenset)

    def can_show(self, image_format: str) -> bool:
        return self.images and image_format.lower() in {f.lower() for f in self.image_formats}


@dataclass
class SessionView:
    """Visible content of a session and the state it was rendered from."""

    station: str
    instant: datetime
    mode: DisplayMode
    begin: str  # local time passed to the engine
    time_zone: str | None
    result: RenderResult

    @property
    def success(self) -> bool:
        return self.result.success

    @property
    def content(self) -> str | bytes:
        return self.result.content

    @property
    def output_kind(self) -> OutputKind:
        return self.result.output_kind

    @property
    def error_kind(self) -> FailureKind | None:
        return self.result.error_kind


class Session:
    """Station/instant/mode state machine driving engine renders.

    Usage:
        session = Session("Botany Bay, Australia", runner, resolver)
        view = session.refresh()
        view = session.step_forward()
        view = session.set_mode(DisplayMode.CALENDAR)
    """

    def __init__(
        self,
        station: str,
        runner: EngineRunner,
        resolver: TimezoneResolver,
        instant: datetime | None = None,
        mode: DisplayMode = DisplayMode.GRAPH,
        capabilities: DisplayCapabilities | None = None,
        engine_config: EngineConfig | None = None,
        step: timedelta = DEFAULT_STEP,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize session.

        Args:
            station: Station name; must not be blank
            runner: Engine runner
            resolver: Time zone resolver (its cache may be shared)
            instant: Start instant (default: now)
            mode: Initial display mode
            capabilities: Host display capabilities (default: text only)
            engine_config: Width hints and image format
            step: Amount moved by step_forward/step_backward
            clock: Source of "now"

        Raises:
            ConfigurationError: If the station is blank
        """
        self._station = self._check_station(station)
        self.runner = runner
        self.resolver = resolver
        self.capabilities = capabilities or DisplayCapabilities()
        self.config = engine_config or EngineConfig()
        self.step = step
        self._clock = clock

        self._instant = as_utc(instant) if instant is not None else clock()
        self._mode = mode
        self._view: SessionView | None = None

    @staticmethod
    def _check_station(station: str) -> str:
        station = (station or "").strip()
        if not station:
            raise ConfigurationError("No station given; choose one from the directory")
        return station

    @property
    def station(self) -> str:
        return self._station

    @property
    def instant(self) -> datetime:
        return self._instant

    @property
    def mode(self) -> DisplayMode:
        return self._mode

    @property
    def view(self) -> SessionView | None:
        """Last rendered view, or None before the first render."""
        return self._view

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_mode(self, mode: DisplayMode) -> SessionView:
        """Switch display mode and re-render."""
        logger.debug("Session mode", station=self._station, mode=mode.name)
        self._mode = mode
        return self.refresh()

    def step_forward(self) -> SessionView:
        """Move the instant forward by one step and re-render."""
        self._instant = self._instant + self.step
        return self.refresh()

    def step_backward(self) -> SessionView:
        """Move the instant back by one step and re-render."""
        self._instant = self._instant - self.step
        return self.refresh()

    def set_station(self, station: str) -> SessionView:
        """Switch station, keeping the same absolute instant, and re-render.

        Raises:
            ConfigurationError: If the station is blank
        """
        self._station = self._check_station(station)
        logger.debug("Session station", station=self._station)
        return self.refresh()

    def set_instant(self, instant: datetime) -> SessionView:
        """Jump to an instant and re-render. Naive datetimes are UTC."""
        self._instant = as_utc(instant)
        return self.refresh()

    def goto_now(self) -> SessionView:
        """Jump to the current wall-clock time and re-render."""
        self._instant = self._clock()
        return self.refresh()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def output_kind(self) -> OutputKind:
        """Image for graphs when the host can show it, text otherwise."""
        if self._mode is DisplayMode.GRAPH and self.capabilities.can_show(self.config.image_format):
            return OutputKind.IMAGE
        return OutputKind.TEXT

    def build_request(self) -> tuple[RenderRequest, str | None]:
        """Engine request for the current state.

        Returns:
            Tuple of (request, time zone rule used or None)
        """
        rule = self.resolver.resolve(self._station)
        zone = zone_from_rule(rule)
        if zone is None:
            logger.warning("Rendering in local time; station zone unknown", station=self._station)

        request = RenderRequest(
            mode=self._mode,
            begin=format_for_engine(self._instant, zone),
            output_kind=self.output_kind(),
            text_width=self.config.text_width,
            graph_width=self.config.graph_width,
            station=self._station,
        )
        return request, rule

    def refresh(self) -> SessionView:
        """Render the current state."""
        request, rule = self.build_request()
        result = self.runner.invoke(request)

        self._view = SessionView(
            station=self._station,
            instant=self._instant,
            mode=self._mode,
            begin=request.begin,
            time_zone=rule,
            result=result,
        )
        return self._view
