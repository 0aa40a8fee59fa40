"""Tests for SILO response classification and parsing."""

import keyword
import math

import pandas as pd
import pytest

from weathervane.silo_models import (
    SiloInvalidCoordinatesError,
    SiloInvalidDateError,
    SiloInvalidStationError,
    SiloServerError,
    SiloUnspecifiedError,
)
from weathervane.silo_parser import (
    ELEVATION_COLUMN,
    canonical_column_names,
    classify_response,
    extract_elevation,
    machine_name,
    machine_names,
    parse_station_table,
    parse_weather_response,
)
from weathervane.silo_variables import VARIABLES

DATE_ERROR_PAGE = (
    "<html><body>Sorry, your request was rejected.\n"
    "The finish date must not be earlier than the start date.</body></html>"
)
COORDINATE_ERROR_PAGE = "Please check that the latitude and longitude are within Australia."
STATION_ERROR_PAGE = "Invalid station number: 99999999"
UNSPECIFIED_ERROR_PAGES = [
    "An error occurred while processing your request.",
    "There was an error checking your credentials.",
    "Request Rejected.",
    "Your request is missing essential parameters.",
]


class TestClassifyResponse:
    """Error pages are recognised before any parsing."""

    def test_invalid_date_page(self):
        with pytest.raises(SiloInvalidDateError) as exc_info:
            classify_response(DATE_ERROR_PAGE)

        assert str(exc_info.value) == "Server-side error: Invalid start/end date"
        assert exc_info.value.response_text == DATE_ERROR_PAGE

    def test_invalid_coordinates_page(self):
        with pytest.raises(SiloInvalidCoordinatesError, match="Invalid latitude/longitude"):
            classify_response(COORDINATE_ERROR_PAGE)

    def test_invalid_station_page(self):
        with pytest.raises(SiloInvalidStationError, match="Invalid station ID provided"):
            classify_response(STATION_ERROR_PAGE)

    @pytest.mark.parametrize("page", UNSPECIFIED_ERROR_PAGES)
    def test_unspecified_error_pages(self, page):
        with pytest.raises(SiloUnspecifiedError, match="Unspecified error or server inaccessible"):
            classify_response(page)

    def test_date_error_wins_over_other_phrases(self):
        """The date page also says "rejected"; the date signature is checked first."""
        page = DATE_ERROR_PAGE + "\nAn error occurred. Invalid station number"

        with pytest.raises(SiloInvalidDateError):
            classify_response(page)

    def test_station_error_wins_over_unspecified(self):
        with pytest.raises(SiloInvalidStationError):
            classify_response("An error occurred: Invalid station number 1")

    def test_server_errors_share_a_base_class(self):
        for page in [DATE_ERROR_PAGE, COORDINATE_ERROR_PAGE, STATION_ERROR_PAGE]:
            with pytest.raises(SiloServerError):
                classify_response(page)

    def test_data_is_not_an_error(self, load_fixture):
        classify_response(load_fixture("datadrill_adelaide.csv"))
        classify_response(load_fixture("stations_name_adel.txt"))


class TestParseWeatherResponse:
    """Weather data responses are reshaped to the canonical schema."""

    def test_canonical_columns_in_catalog_order(self, load_fixture):
        frame = parse_weather_response(load_fixture("datadrill_adelaide.csv"))

        # SILO sent max_temp before daily_rain; the catalog puts rainfall first
        assert list(frame.columns) == [
            "Date",
            "Latitude",
            "Longitude",
            "Elevation (m)",
            "Rainfall (mm)",
            "Maximum Temperature (degC)",
        ]

    def test_values(self, load_fixture):
        frame = parse_weather_response(load_fixture("datadrill_adelaide.csv"))

        assert len(frame) == 5
        assert pd.api.types.is_datetime64_any_dtype(frame["Date"])
        assert frame["Date"].iloc[0] == pd.Timestamp("2020-01-01")
        assert frame["Date"].iloc[-1] == pd.Timestamp("2020-01-05")
        assert frame["Latitude"].iloc[0] == pytest.approx(-34.95)
        assert frame["Rainfall (mm)"].tolist() == pytest.approx([0.0, 1.2, 6.4, 0.0, 0.0])
        assert frame["Maximum Temperature (degC)"].iloc[4] == pytest.approx(33.9)

    def test_elevation_repeated_on_every_row(self, load_fixture):
        frame = parse_weather_response(load_fixture("datadrill_adelaide.csv"))

        assert frame[ELEVATION_COLUMN].tolist() == [115.0] * 5

    def test_source_and_metadata_fields_dropped(self, load_fixture):
        frame = parse_weather_response(load_fixture("datadrill_adelaide.csv"))

        assert not [column for column in frame.columns if column.endswith("_source")]
        assert "metadata" not in frame.columns

    def test_blank_padding_rows_removed(self, load_fixture):
        frame = parse_weather_response(load_fixture("datadrill_short.csv"))

        assert len(frame) == 2
        assert frame["Date"].tolist() == [pd.Timestamp("2020-01-01"), pd.Timestamp("2020-01-02")]
        assert frame[ELEVATION_COLUMN].iloc[0] == pytest.approx(48.5)
        assert list(frame.index) == [0, 1]

    def test_station_response_has_no_coordinates(self, load_fixture):
        frame = parse_weather_response(load_fixture("patchedpoint_waite_jan2020.csv"))

        # The "station" field is not part of the output schema
        assert list(frame.columns) == [
            "Date",
            "Elevation (m)",
            "Rainfall (mm)",
            "Maximum Temperature (degC)",
        ]
        assert frame.shape == (31, 4)

    def test_missing_elevation_is_nan(self):
        text = "latitude,longitude,YYYY-MM-DD,daily_rain\n-34.95,138.60,2020-01-01,0.4\n"

        frame = parse_weather_response(text)

        assert math.isnan(frame[ELEVATION_COLUMN].iloc[0])
        assert frame["Rainfall (mm)"].iloc[0] == pytest.approx(0.4)

    def test_date_column_named_date(self):
        text = "date,daily_rain,metadata\n2020-01-01,3.0,elevation=2\n"

        frame = parse_weather_response(text)

        assert list(frame.columns) == ["Date", "Elevation (m)", "Rainfall (mm)"]
        assert frame[ELEVATION_COLUMN].iloc[0] == 2.0

    def test_parsing_is_deterministic(self, load_fixture):
        text = load_fixture("datadrill_adelaide.csv")

        pd.testing.assert_frame_equal(parse_weather_response(text), parse_weather_response(text))

    def test_empty_response(self):
        with pytest.raises(SiloUnspecifiedError, match="Empty response"):
            parse_weather_response("")

    def test_canonical_column_names(self):
        mapping = canonical_column_names(["YYYY-MM-DD", "latitude", "et_morton_wet", "station"])

        assert mapping == {
            "YYYY-MM-DD": "Date",
            "latitude": "Latitude",
            "et_morton_wet": "Morton's Wet-environment Areal Potential Evapotranspiration (mm)",
            "station": "station",
        }


class TestExtractElevation:
    """Elevation is read from SILO's free-text metadata field."""

    def test_elevation(self):
        assert extract_elevation(["name=Grid point", "elevation= 115.0 m"]) == 115.0

    def test_decimal_comma(self):
        assert extract_elevation(["elevation= 48,5 m"]) == 48.5

    def test_negative_elevation(self):
        assert extract_elevation(["elevation=-2.0"]) == -2.0

    def test_no_elevation(self):
        assert extract_elevation(["name=Grid point", float("nan")]) is None


class TestMachineNames:
    """Pretty labels convert to machine-safe identifiers."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Rainfall (mm)", "rainfall__mm_"),
            ("Elevation (m)", "elevation__m_"),
            ("Date", "date"),
            ("Maximum Temperature (degC)", "maximum_temperature__degc_"),
            ("Solar Exposure (MJ/m2)", "solar_exposure__mj_m2_"),
            ("2m Temperature", "x2m_temperature"),
            ("Class", "class_"),
            ("", "x"),
        ],
    )
    def test_machine_name(self, label, expected):
        assert machine_name(label) == expected

    def test_all_labels_become_identifiers(self):
        for name in machine_names(["Date", "Latitude", "Longitude", ELEVATION_COLUMN] + VARIABLES.labels()):
            assert name.isidentifier()
            assert not keyword.iskeyword(name)

    def test_machine_name_is_idempotent(self):
        for label in ["Date", ELEVATION_COLUMN] + VARIABLES.labels():
            once = machine_name(label)
            assert machine_name(once) == once

    def test_machine_names_are_unique(self):
        names = machine_names(VARIABLES.labels())
        assert len(set(names)) == len(names)


class TestParseStationTable:
    """Station registry responses are pipe-delimited with abbreviated headers."""

    def test_single_station(self, load_fixture):
        frame = parse_station_table(load_fixture("stations_name_waite.txt"))

        assert list(frame.columns) == ["id", "name", "latitude", "longitude", "state", "elevation"]
        assert len(frame) == 1
        row = frame.iloc[0]
        assert row["id"] == 23031
        assert row["name"] == "ADELAIDE (WAITE INSTITUTE)"
        assert row["latitude"] == pytest.approx(-34.97)
        assert row["longitude"] == pytest.approx(138.633)
        assert row["state"] == "SA"
        assert row["elevation"] == pytest.approx(115.0)

    def test_header_only(self, load_fixture):
        frame = parse_station_table(load_fixture("stations_name_empty.txt"))

        assert frame.empty
        assert list(frame.columns) == ["id", "name", "latitude", "longitude", "state", "elevation"]

    def test_with_distance(self, load_fixture):
        frame = parse_station_table(load_fixture("stations_near_waite.txt"), with_distance=True)

        assert len(frame) == 5
        assert frame["distance"].tolist() == pytest.approx([0.0, 3.3, 1.8, 10.5, 5.5])

    def test_headerless_record(self, load_fixture):
        frame = parse_station_table(load_fixture("station_id_waite.txt"), header=False)

        assert len(frame) == 1
        assert frame["id"].iloc[0] == 23031
        assert frame["state"].iloc[0] == "SA"
