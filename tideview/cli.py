"""
Command-line interface for tideview.

Provides a CLI using Click for browsing the station directory and
showing tide predictions for a station.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from tideview import __version__
from tideview.core.exceptions import TideViewError


@click.group()
@click.version_option(version=__version__, prog_name="tideview")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """tideview: browse tide stations and their predictions.

    Drives the XTide ``tide`` program; it must be installed and able to
    find its harmonics files.
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


def _controller(ctx: click.Context):
    """Build a controller from the global options."""
    from tideview.core.config import load_settings
    from tideview.core.controller import TideController

    settings = load_settings(ctx.obj.get("config"))
    if ctx.obj.get("verbose"):
        settings.logging.level = "DEBUG"
    return TideController(settings=settings)


@cli.command()
@click.option(
    "--sort", "-s", "order",
    type=click.Choice(["engine", "alpha", "locality", "distance"]),
    default="engine",
    help="Directory order",
)
@click.option(
    "--from", "-f", "origin_name",
    type=str,
    help="Station to measure distances from",
)
@click.option(
    "--near", "-n",
    type=str,
    help="LAT,LON in degrees to measure distances from",
)
@click.option(
    "--fold-case",
    is_flag=True,
    help="Case-insensitive alphabetical order",
)
@click.option(
    "--format", "-F", "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def stations(
    ctx: click.Context,
    order: str,
    origin_name: str | None,
    near: str | None,
    fold_case: bool,
    fmt: str,
) -> None:
    """List the engine's stations.

    Examples:

        # Group stations by region
        tideview stations --sort locality

        # Nearest stations to a point
        tideview stations --sort distance --near -33.98,151.21

        # Nearest stations to another station
        tideview stations -s distance -f "Botany Bay, Australia"
    """
    controller = _controller(ctx)

    try:
        directory = controller.fetch_directory()
        if order != "engine":
            origin = origin_name or (_parse_point(near) if near else None)
            directory = controller.sort_directory(directory, order, origin=origin, fold_case=fold_case)
    except TideViewError as e:
        raise click.ClickException(str(e))

    if fmt == "json":
        click.echo(json.dumps([r.to_dict() for r in directory], indent=2))
        return

    for line in directory.lines():
        click.echo(line)


@cli.command()
@click.argument("station", required=False)
@click.option(
    "--mode", "-m",
    type=str,
    default="graph",
    help="Display mode (graph, plain, raw, calendar, banner, ... or its letter)",
)
@click.option(
    "--at", "-a",
    type=str,
    help="Start time YYYY-MM-DD HH:MM in the station's local time (default: now)",
)
@click.option(
    "--step",
    type=int,
    default=0,
    help="Number of 6-hour steps to move forward (negative for back)",
)
@click.option(
    "--image", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the graph as an image to this file",
)
@click.pass_context
def show(
    ctx: click.Context,
    station: str | None,
    mode: str,
    at: str | None,
    step: int,
    image: Path | None,
) -> None:
    """Show tide predictions for a station.

    STATION defaults to the configured default station.

    Examples:

        tideview show "Botany Bay, Australia" -m plain

        tideview show "Botany Bay, Australia" --at "2024-06-01 09:00" --step 2

        tideview show "Botany Bay, Australia" -o graph.png
    """
    from tideview.core.session import DisplayCapabilities
    from tideview.engine.modes import DisplayMode, OutputKind
    from tideview.utils.dates import parse_engine_time, zone_from_rule

    try:
        display_mode = DisplayMode.parse(mode)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--mode")

    controller = _controller(ctx)
    capabilities = None
    if image:
        capabilities = DisplayCapabilities(
            images=True,
            image_formats=frozenset({controller.settings.engine.image_format}),
        )

    try:
        session = controller.open_session(
            station, mode=display_mode, capabilities=capabilities, render=False,
        )
        instant = session.instant
        if at:
            zone = zone_from_rule(controller.resolve_timezone(session.station))
            try:
                instant = parse_engine_time(at, zone)
            except ValueError:
                raise click.BadParameter(f"Invalid time: {at}", param_hint="--at")
        view = session.set_instant(instant + session.step * step)
    except TideViewError as e:
        raise click.ClickException(str(e))

    if not view.success:
        click.echo(view.content, err=True)
        sys.exit(1)

    if view.output_kind is OutputKind.IMAGE:
        image.write_bytes(view.content)
        click.echo(f"Wrote {image}", err=True)
    else:
        click.echo(view.content, nl=False)
        if image:
            click.echo(f"Image output not available for {display_mode.label} mode", err=True)


@cli.command()
@click.argument("station")
@click.pass_context
def timezone(ctx: click.Context, station: str) -> None:
    """Print a station's time zone rule."""
    controller = _controller(ctx)
    rule = controller.resolve_timezone(station)
    if rule is None:
        raise click.ClickException(f"No time zone found for {station}")
    click.echo(rule)


@cli.command()
def modes() -> None:
    """List display modes."""
    from tideview.engine.modes import DisplayMode

    for mode in DisplayMode:
        click.echo(f"{mode.code}  {mode.name.lower():<22} {mode.label}")


def _parse_point(text: str) -> tuple[float, float]:
    """Parse LAT,LON in degrees."""
    parts = text.split(",")
    if len(parts) == 2:
        try:
            return float(parts[0]), float(parts[1])
        except ValueError:
            pass
    raise click.BadParameter(f"Invalid position: {text}", param_hint="--near")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
