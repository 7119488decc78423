"""
Tide session controller.

Coordinates the pieces a host needs:
- Fetching and sorting the station directory
- Picking the station to show (explicit, configured default)
- Opening sessions that share one time zone cache
"""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

from tideview.core.config import Settings, load_settings
from tideview.core.exceptions import ConfigurationError
from tideview.core.session import DisplayCapabilities, Session
from tideview.engine.modes import DisplayMode
from tideview.engine.runner import EngineRunner
from tideview.stations.directory import LocationDirectory, parse_directory
from tideview.stations.sorting import (
    SortOrder,
    sort_alphabetical,
    sort_by_distance_from,
    sort_by_distance_from_degrees,
    sort_by_locality,
)
from tideview.stations.timezone import TimezoneCache, TimezoneResolver
from tideview.utils.dates import utc_now
from tideview.utils.logging import get_logger, setup_logging


logger = get_logger(__name__)


class TideController:
    """Session-management layer over the tide engine.

    Owns the engine runner and the time zone cache; every session opened
    here resolves zones through the same cache.

    Usage:
        with TideController() as controller:
            directory = controller.fetch_directory()
            directory = controller.sort_directory(directory, SortOrder.LOCALITY)

            session = controller.open_session("Botany Bay, Australia")
            print(session.view.content)
    """

    def __init__(
        self,
        config_path: Path | str | None = None,
        settings: Settings | None = None,
        runner: EngineRunner | None = None,
        cache: TimezoneCache | None = None,
        configure_logging: bool = True,
    ):
        """Initialize controller.

        Args:
            config_path: Path to configuration file
            settings: Pre-loaded settings (overrides config_path)
            runner: Engine runner (built from settings if not provided)
            cache: Time zone cache (a fresh one if not provided)
            configure_logging: Set up logging from settings
        """
        self.settings = settings or load_settings(config_path)

        if configure_logging:
            setup_logging(
                level=self.settings.logging.level,
                log_dir=self.settings.logging.log_dir,
                log_to_file=self.settings.logging.log_to_file,
                log_to_console=self.settings.logging.log_to_console,
                json_format=self.settings.logging.json_format,
            )

        self.runner = runner or EngineRunner.from_config(self.settings.engine)
        self.cache = cache if cache is not None else TimezoneCache()
        self.resolver = TimezoneResolver(self.runner, self.cache)

        self.directory: LocationDirectory | None = None

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    def fetch_directory(self) -> LocationDirectory:
        """Ask the engine for its station list.

        Returns:
            Freshly parsed directory in engine order

        Raises:
            StationNotFound: Engine printed nothing
            ProcessFailure: Engine failed or could not be started
            ParseError: Output had no station lines
        """
        result = self.runner.list_locations(self.settings.engine.directory_width)
        result.raise_for_status()

        self.directory = parse_directory(result.text)
        return self.directory

    def sort_directory(
        self,
        directory: LocationDirectory,
        order: SortOrder | str,
        origin: str | tuple[float, float] | None = None,
        fold_case: bool = False,
    ) -> LocationDirectory:
        """Reorder a directory.

        Args:
            directory: Directory to reorder
            order: Sort order
            origin: For distance order, a station name, a (lat, lon) pair in
                degrees, or None for the configured home location
            fold_case: Case-insensitive alphabetical order

        Returns:
            Reordered directory

        Raises:
            ConfigurationError: Distance order with no origin and no home location
            CoordinateParseError: Distance order over lines lacking coordinates
        """
        order = SortOrder(order)

        if order is SortOrder.ALPHABETICAL:
            return sort_alphabetical(directory, fold_case=fold_case)
        if order is SortOrder.LOCALITY:
            return sort_by_locality(directory)

        if isinstance(origin, str):
            return sort_by_distance_from(directory, origin)
        if origin is None:
            origin = self.settings.session.home
            if origin is None:
                raise ConfigurationError("No origin for distance sort and no home location set")
        return sort_by_distance_from_degrees(directory, origin[0], origin[1])

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def resolve_station(self, station: str | None = None) -> str:
        """Pick the station to show.

        Args:
            station: Explicit station name

        Returns:
            Explicit station if not blank, else the configured default

        Raises:
            ConfigurationError: If neither is available
        """
        if station and station.strip():
            return station.strip()

        default = self.settings.session.default_station
        if default:
            return default

        raise ConfigurationError(
            "No station given and no default station configured; "
            "pick one from the station directory"
        )

    def resolve_timezone(self, station: str) -> str | None:
        """Time zone rule for a station (cached)."""
        return self.resolver.resolve(station)

    def open_session(
        self,
        station: str | None = None,
        instant: datetime | None = None,
        mode: DisplayMode = DisplayMode.GRAPH,
        capabilities: DisplayCapabilities | None = None,
        render: bool = True,
    ) -> Session:
        """Open a session on a station.

        Args:
            station: Station name (default: configured default station)
            instant: Start instant (default: now)
            mode: Initial display mode
            capabilities: Host display capabilities
            render: Render the initial view immediately

        Returns:
            New session

        Raises:
            ConfigurationError: If no station can be determined
        """
        name = self.resolve_station(station)

        session = Session(
            name,
            self.runner,
            self.resolver,
            instant=instant if instant is not None else utc_now(),
            mode=mode,
            capabilities=capabilities,
            engine_config=self.settings.engine,
            step=timedelta(hours=self.settings.session.step_hours),
        )

        logger.info("Opened session", station=name, mode=mode.name)

        if render:
            session.refresh()
        return session

    def close(self) -> None:
        """Drop the fetched directory."""
        self.directory = None

    def __enter__(self) -> "TideController":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
