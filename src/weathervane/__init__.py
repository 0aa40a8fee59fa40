from __future__ import annotations

__version__ = "0.2.0"

from weathervane.config import DEFAULT_SETTINGS, SiloSettings, get_settings
from weathervane.silo_api import SiloAPI
from weathervane.silo_models import (
    AmbiguousStationError,
    AustraliaBounds,
    InvalidCoordinatesError,
    InvalidDateError,
    InvalidSortOptionError,
    NearbyStation,
    NoStationDataError,
    SiloAPIError,
    SiloConnectionError,
    SiloError,
    SiloInputError,
    SiloInvalidCoordinatesError,
    SiloInvalidDateError,
    SiloInvalidStationError,
    SiloServerError,
    SiloTimeoutError,
    SiloUnspecifiedError,
    Station,
    StationNotFoundError,
    StationSortKey,
    UnknownVariableError,
)
from weathervane.silo_parser import machine_name, machine_names, parse_weather_response
from weathervane.silo_request import build_url
from weathervane.silo_stations import StationRegistry
from weathervane.silo_variables import VARIABLES, WeatherVariable, weather_variables
from weathervane.weather import (
    earliest_dataset_date,
    get_station_data,
    get_weather_data,
    in_australia,
)

__all__ = [
    "get_weather_data",
    "get_station_data",
    "weather_variables",
    "earliest_dataset_date",
    "in_australia",
    "build_url",
    "parse_weather_response",
    "machine_name",
    "machine_names",
    "SiloAPI",
    "SiloSettings",
    "DEFAULT_SETTINGS",
    "get_settings",
    "StationRegistry",
    "Station",
    "NearbyStation",
    "StationSortKey",
    "AustraliaBounds",
    "VARIABLES",
    "WeatherVariable",
    "SiloError",
    "SiloInputError",
    "InvalidCoordinatesError",
    "InvalidDateError",
    "UnknownVariableError",
    "InvalidSortOptionError",
    "StationNotFoundError",
    "AmbiguousStationError",
    "SiloAPIError",
    "SiloConnectionError",
    "SiloTimeoutError",
    "NoStationDataError",
    "SiloServerError",
    "SiloInvalidDateError",
    "SiloInvalidCoordinatesError",
    "SiloInvalidStationError",
    "SiloUnspecifiedError",
]
