"""Tests for the weathervane command-line interface."""

import pandas as pd
import pytest
from typer.testing import CliRunner

from weathervane import __version__
from weathervane.cli import app

runner = CliRunner()


@pytest.fixture
def datadrill(mock_get, silo_response, load_fixture):
    mock_get.return_value = silo_response(load_fixture("datadrill_adelaide.csv"))
    return mock_get


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"weathervane version {__version__}" in result.output


def test_variables_lists_catalog() -> None:
    result = runner.invoke(app, ["variables"])

    assert result.exit_code == 0
    assert "rainfall" in result.output
    assert "Morton's Wet-environment Areal Potential Evapotranspiration (mm)" in result.output


class TestDataCommand:
    """Tests for the data (DataDrill) command."""

    def test_prints_table(self, datadrill) -> None:
        result = runner.invoke(
            app,
            [
                "data",
                "--lat=-34.95",
                "--lng=138.6",
                "--start-date",
                "2020-01-01",
                "--finish-date",
                "2020-01-05",
                "--var",
                "rainfall",
                "--var",
                "max_temp",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Rainfall (mm)" in result.output
        assert "2020-01-05" in result.output

    def test_writes_csv(self, datadrill, tmp_path) -> None:
        output = tmp_path / "adelaide.csv"

        result = runner.invoke(
            app,
            [
                "data",
                "--lat=-34.95",
                "--lng=138.6",
                "--start-date",
                "2020-01-01",
                "--finish-date",
                "2020-01-05",
                "--var",
                "rainfall",
                "--machine-names",
                "--output",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        frame = pd.read_csv(output)
        assert list(frame.columns) == [
            "date",
            "latitude",
            "longitude",
            "elevation__m_",
            "rainfall__mm_",
            "maximum_temperature__degc_",
        ]
        assert len(frame) == 5

    def test_invalid_coordinates(self, mock_get) -> None:
        result = runner.invoke(
            app, ["data", "--lat=10", "--lng=138.6", "--start-date", "2020-01-01", "--var", "rainfall"]
        )

        assert result.exit_code == 1
        assert "Invalid input" in result.output
        mock_get.assert_not_called()

    def test_unknown_variable(self, mock_get) -> None:
        result = runner.invoke(
            app, ["data", "--lat=-34.95", "--lng=138.6", "--start-date", "2020-01-01", "--var", "rain"]
        )

        assert result.exit_code == 1
        assert "rain is not in the list of available variables" in result.output

    def test_malformed_date(self, mock_get) -> None:
        result = runner.invoke(app, ["data", "--lat=-34.95", "--lng=138.6", "--start-date", "2020-1-1"])

        assert result.exit_code == 2
        mock_get.assert_not_called()

    def test_server_error(self, mock_get, silo_response) -> None:
        mock_get.return_value = silo_response("An error occurred while processing your request")

        result = runner.invoke(
            app, ["data", "--lat=-34.95", "--lng=138.6", "--start-date", "2020-01-01", "--var", "rainfall"]
        )

        assert result.exit_code == 1
        assert "API Error" in result.output


class TestStationCommands:
    """Tests for station-data and the stations sub-commands."""

    def test_station_data(self, mock_get, silo_response, load_fixture) -> None:
        mock_get.return_value = silo_response(load_fixture("patchedpoint_waite_jan2020.csv"))

        result = runner.invoke(
            app,
            [
                "station-data",
                "--station",
                "23031",
                "--start-date",
                "2020-01-01",
                "--finish-date",
                "2020-01-31",
                "--var",
                "rainfall",
                "--var",
                "max_temp",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "2020-01-31" in result.output
        assert "Latitude" not in result.output

    def test_ambiguous_station(self, respond_by_format, load_fixture) -> None:
        respond_by_format({"name": load_fixture("stations_name_adel.txt")})

        result = runner.invoke(app, ["station-data", "--station", "Adel", "--start-date", "2020-01-01"])

        assert result.exit_code == 1
        assert "matched 4 locations" in result.output

    def test_search(self, respond_by_format, load_fixture) -> None:
        respond_by_format({"name": load_fixture("stations_name_adel.txt")})

        result = runner.invoke(app, ["stations", "search", "Adel", "--state", "SA"])

        assert result.exit_code == 0, result.output
        assert "ADELAIDE AIRPORT" in result.output

    def test_nearby(self, respond_by_format, load_fixture) -> None:
        respond_by_format({"near": load_fixture("stations_near_waite.txt")})

        result = runner.invoke(app, ["stations", "nearby", "23031", "--radius", "15"])

        assert result.exit_code == 0, result.output
        assert "GLEN OSMOND" in result.output

    def test_list_rejects_distance_sort(self, mock_get) -> None:
        result = runner.invoke(app, ["stations", "list", "--sort-by", "distance"])

        assert result.exit_code == 1
        assert "sort_by must be one of" in result.output
        mock_get.assert_not_called()

    def test_details(self, respond_by_format, load_fixture) -> None:
        respond_by_format({"id": load_fixture("station_id_waite.txt")})

        result = runner.invoke(app, ["stations", "details", "23031"])

        assert result.exit_code == 0, result.output
        assert "ADELAIDE (WAITE INSTITUTE)" in result.output
        assert "23031" in result.output
