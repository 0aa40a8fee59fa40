"""Command-line interface for weathervane."""

import typer

from weathervane import __version__
from weathervane.cli.silo import data_command, station_data_command, variables_command
from weathervane.cli.stations import stations_app
from weathervane.logging_utils import configure_logging


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"weathervane version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="weathervane",
    help="Download SILO Australian weather data for a location or weather station",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
):
    """Main callback to handle global options."""
    pass


app.command(name="variables")(variables_command)
app.command(name="data")(data_command)
app.command(name="station-data")(station_data_command)
app.add_typer(stations_app, name="stations")


def main():
    """Entry point for the CLI."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
