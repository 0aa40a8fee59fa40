"""Station registry CLI commands."""

from typing import Annotated, Optional

import typer

from weathervane.cli.silo import LogLevel, Output, emit_table, exit_with_error
from weathervane.silo_api import SiloAPI
from weathervane.silo_models import SiloAPIError, SiloInputError
from weathervane.silo_stations import StationRegistry

stations_app = typer.Typer(
    name="stations",
    help="Search and list SILO weather stations",
    no_args_is_help=True,
)

StationArgument = Annotated[str, typer.Argument(help="BoM station number or unique station name")]


@stations_app.command(name="search")
def search(
    name: Annotated[str, typer.Argument(help="Partial station name; spaces, punctuation and * are wildcards")],
    state: Annotated[Optional[str], typer.Option(help="Filter by state (QLD, NSW, VIC, TAS, SA, WA, NT)")] = None,
    rank: Annotated[bool, typer.Option(help="Order results by relevance to NAME")] = False,
    output: Output = None,
    log_level: LogLevel = "INFO",
) -> None:
    """
    Search for stations by name.

    Examples:
        weathervane stations search Brisbane --state QLD
        weathervane stations search "botan*"
    """
    try:
        registry = StationRegistry(SiloAPI(log_level=log_level))
        frame = registry.search_by_name(name, state=state, rank=rank)
    except (SiloInputError, SiloAPIError) as exc:
        exit_with_error(exc)
    else:
        emit_table(frame, output)


@stations_app.command(name="nearby")
def nearby(
    station: StationArgument,
    radius: Annotated[float, typer.Option(help="Search radius in km")],
    sort_by: Annotated[str, typer.Option(help="distance, name, id or state")] = "distance",
    output: Output = None,
    log_level: LogLevel = "INFO",
) -> None:
    """
    List stations within a radius of a station.

    Example:
        weathervane stations nearby Waite --radius 5 --sort-by id
    """
    try:
        registry = StationRegistry(SiloAPI(log_level=log_level))
        frame = registry.list_nearby(station, radius, sort_by=sort_by)
    except (SiloInputError, SiloAPIError) as exc:
        exit_with_error(exc)
    else:
        emit_table(frame, output)


@stations_app.command(name="list")
def list_stations(
    sort_by: Annotated[str, typer.Option(help="name, id or state")] = "name",
    output: Output = None,
    log_level: LogLevel = "INFO",
) -> None:
    """List every SILO station (approximately 8000)."""
    try:
        registry = StationRegistry(SiloAPI(log_level=log_level))
        frame = registry.list_all(sort_by=sort_by)
    except (SiloInputError, SiloAPIError) as exc:
        exit_with_error(exc)
    else:
        emit_table(frame, output)


@stations_app.command(name="details")
def details(
    station: StationArgument,
    log_level: LogLevel = "INFO",
) -> None:
    """Show details of a single station."""
    try:
        registry = StationRegistry(SiloAPI(log_level=log_level))
        record = registry.get_details(station)
    except (SiloInputError, SiloAPIError) as exc:
        exit_with_error(exc)
    else:
        for field, value in record.model_dump().items():
            typer.echo(f"{field:>10}: {value}")
