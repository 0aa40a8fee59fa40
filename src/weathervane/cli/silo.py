"""Weather data CLI commands."""

from pathlib import Path
from typing import Annotated, List, Optional

import pandas as pd
import typer

from weathervane.cli.date_utils import iso_date_option
from weathervane.silo_api import SiloAPI
from weathervane.silo_models import SiloAPIError, SiloInputError
from weathervane.silo_variables import weather_variables
from weathervane.weather import get_station_data, get_weather_data

StartDate = Annotated[
    str, typer.Option(help="Start date (YYYY-MM-DD)", callback=iso_date_option)
]
FinishDate = Annotated[
    Optional[str],
    typer.Option(help="Finish date (YYYY-MM-DD, default: today)", callback=iso_date_option),
]
Variables = Annotated[
    Optional[List[str]],
    typer.Option("--var", help="Weather variable (repeatable; see 'weathervane variables')"),
]
PrettyNames = Annotated[
    bool,
    typer.Option(
        "--pretty-names/--machine-names",
        help="Column names with units, or machine-safe identifiers",
    ),
]
Output = Annotated[Optional[Path], typer.Option("--output", "-o", help="Output CSV filename")]
LogLevel = Annotated[
    str, typer.Option("--log-level", help="Logging level (e.g. INFO, DEBUG, WARNING)")
]


def emit_table(frame: pd.DataFrame, output: Optional[Path]) -> None:
    """Write the table to CSV if an output path is given, otherwise print it."""
    if output:
        frame.to_csv(output, index=False)
        typer.echo(f"💾 Saved {len(frame)} row(s) to: {output.absolute()}")
    else:
        typer.echo(frame.to_string(index=False))


def exit_with_error(exc: Exception) -> None:
    """Report a library error on stderr and exit with status 1."""
    if isinstance(exc, SiloInputError):
        typer.echo(f"❌ Invalid input: {exc}", err=True)
    else:
        typer.echo(f"❌ API Error: {exc}", err=True)
    raise typer.Exit(1)


def variables_command() -> None:
    """
    List the available weather variables.

    Use the variable_name column with --var to select variables.
    """
    frame = weather_variables()[["variable_name", "pretty_name", "description"]]
    typer.echo(frame.to_string(index=False))


def data_command(
    latitude: Annotated[float, typer.Option("--lat", help="Latitude (decimal degrees North)")],
    longitude: Annotated[float, typer.Option("--lng", help="Longitude (decimal degrees East)")],
    start_date: StartDate,
    finish_date: FinishDate = None,
    variables: Variables = None,
    pretty_names: PrettyNames = True,
    output: Output = None,
    log_level: LogLevel = "INFO",
) -> None:
    """
    Retrieve gridded (DataDrill) weather data for a latitude/longitude.

    Examples:
        weathervane data --lat -34.9285 --lng 138.6007 \\
            --start-date 2020-01-01 --finish-date 2020-12-31 \\
            --var rainfall --var max_temp --output adelaide.csv
    """
    try:
        api = SiloAPI(log_level=log_level)
        frame = get_weather_data(
            latitude,
            longitude,
            start_date,
            finish_date,
            variables=variables or None,
            pretty_names=pretty_names,
            api=api,
        )
    except (SiloInputError, SiloAPIError) as exc:
        exit_with_error(exc)
    else:
        emit_table(frame, output)


def station_data_command(
    station: Annotated[str, typer.Option(help="BoM station number or unique station name")],
    start_date: StartDate,
    finish_date: FinishDate = None,
    variables: Variables = None,
    pretty_names: PrettyNames = True,
    output: Output = None,
    log_level: LogLevel = "INFO",
) -> None:
    """
    Retrieve station (PatchedPoint) weather data.

    Use 'weathervane stations search' to find station numbers by name.

    Examples:
        weathervane station-data --station 23031 \\
            --start-date 2020-01-01 --finish-date 2020-01-31 --var rainfall

        weathervane station-data --station "Adel (Waite)" --start-date 2020-01-01
    """
    try:
        api = SiloAPI(log_level=log_level)
        frame = get_station_data(
            station,
            start_date,
            finish_date,
            variables=variables or None,
            pretty_names=pretty_names,
            api=api,
        )
    except (SiloInputError, SiloAPIError) as exc:
        exit_with_error(exc)
    else:
        emit_table(frame, output)
