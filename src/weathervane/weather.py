"""
Retrieve SILO weather data for a location or weather station.

The functions here validate their inputs locally (so that bad input never
costs a request), build the SILO download URL, and return the parsed data
with pretty or machine-safe column names.

Note:
    The weather datasets are curated by SILO, who make them available under a
    Creative Commons Attribution 4.0 International Licence; their data is
    sourced from Australian Bureau of Meteorology weather stations. See
    https://www.longpaddock.qld.gov.au/silo/about/data-suppliers/
"""

import datetime as dt
import logging
from typing import Any, Iterable, List, Optional, Tuple, Union

import pandas as pd

from weathervane.config import DEFAULT_SETTINGS
from weathervane.silo_api import SiloAPI
from weathervane.silo_models import (
    InvalidCoordinatesError,
    InvalidDateError,
    SiloInputError,
    UnknownVariableError,
)
from weathervane.silo_parser import machine_names
from weathervane.silo_request import build_url
from weathervane.silo_stations import StationIdentifier, StationRegistry
from weathervane.silo_variables import VARIABLES

logger = logging.getLogger(__name__)

DateLike = Union[str, dt.date]

# Coordinates longer than this are rejected by SILO; 4 decimals is still
# finer than the 0.05° grid
MAX_DECIMAL_PLACES = 4


def earliest_dataset_date(api: Optional[SiloAPI] = None) -> dt.date:
    """The earliest date of data available from SILO (1889-01-01)."""
    settings = api.settings if api else DEFAULT_SETTINGS
    return settings.earliest_date


def in_australia(latitude: float, longitude: float, api: Optional[SiloAPI] = None) -> bool:
    """
    True if the coordinates are within the extent of the SILO gridded rasters.

    The extent includes some parts of Indonesia and Papua New Guinea.

    Example:
        >>> in_australia(-34.9285, 138.6007)
        True
        >>> in_australia(-8.9443, 141.0763)
        False
    """
    settings = api.settings if api else DEFAULT_SETTINGS
    return settings.bounds.contains(latitude, longitude)


def get_weather_data(
    latitude: float,
    longitude: float,
    start_date: DateLike,
    finish_date: Optional[DateLike] = None,
    variables: Optional[Union[str, Iterable[str]]] = None,
    pretty_names: bool = True,
    api: Optional[SiloAPI] = None,
) -> pd.DataFrame:
    """
    Retrieve weather data for the given location and dates.

    Returns SILO DataDrill (gridded) data for the latitude/longitude, from
    ``start_date`` to ``finish_date`` inclusive.

    Args:
        latitude: Latitude in decimal degrees North (e.g. -34.9)
        longitude: Longitude in decimal degrees East (e.g. 138.6)
        start_date: ISO string or date for the starting date
        finish_date: ISO string or date for the finish date (default: today,
            i.e. the most recent data uploaded to SILO)
        variables: Variable keys from :func:`weather_variables` (default: all)
        pretty_names: Use labels with units as column names (default: True).
            Set to False for machine-safe identifiers instead.
        api: SILO client to use (default: a new SiloAPI)

    Returns:
        DataFrame with columns Date, Latitude, Longitude, Elevation (m) and
        the requested variables in catalog order

    Raises:
        InvalidCoordinatesError: If the coordinates are outside the SILO extent
        InvalidDateError: If the dates are invalid or out of order
        UnknownVariableError: If a variable is not in the catalog
        SiloAPIError: If the request fails or SILO reports an error

    Example:
        >>> df = get_weather_data(-34.18, 139.98, "2020-01-01", "2020-03-31", ["rainfall", "max_temp"])
        >>> list(df.columns)
        ['Date', 'Latitude', 'Longitude', 'Elevation (m)', 'Rainfall (mm)', 'Maximum Temperature (degC)']
    """
    api = api or SiloAPI()
    bounds = api.settings.bounds
    if not bounds.contains(latitude, longitude):
        raise InvalidCoordinatesError(
            "Latitude and longitude coordinates must be within Australia "
            f"(roughly {bounds.describe()}); got ({latitude}, {longitude})"
        )

    latitude = round(latitude, MAX_DECIMAL_PLACES)
    longitude = round(longitude, MAX_DECIMAL_PLACES)
    start, finish = _validate_dates(start_date, finish_date, api.settings.earliest_date)
    keys = _validate_variables(variables)

    logger.info(
        "Retrieving DataDrill data for (%s, %s) from %s to %s", latitude, longitude, start, finish
    )
    url = build_url(
        latitude=latitude,
        longitude=longitude,
        start_date=start,
        finish_date=finish,
        variables=keys,
        settings=api.settings,
    )
    return _format_columns(api.fetch_weather_table(url), pretty_names)


def get_station_data(
    station: StationIdentifier,
    start_date: DateLike,
    finish_date: Optional[DateLike] = None,
    variables: Optional[Union[str, Iterable[str]]] = None,
    pretty_names: bool = True,
    api: Optional[SiloAPI] = None,
) -> pd.DataFrame:
    """
    Retrieve weather data for the given station and dates.

    Returns SILO PatchedPoint (station) data. The station may be a numeric
    BoM station ID or a station name that matches exactly one station.

    Args:
        station: Station number (e.g. 23031) or unique station name (e.g. "Waite")
        start_date: ISO string or date for the starting date
        finish_date: ISO string or date for the finish date (default: today)
        variables: Variable keys from :func:`weather_variables` (default: all)
        pretty_names: Use labels with units as column names (default: True)
        api: SILO client to use (default: a new SiloAPI)

    Returns:
        DataFrame with columns Date, Elevation (m) and the requested variables

    Raises:
        InvalidDateError: If the dates are invalid or out of order
        UnknownVariableError: If a variable is not in the catalog
        StationNotFoundError: If a station name matches no station
        AmbiguousStationError: If a station name matches several stations
        SiloInvalidStationError: If SILO does not know the station number

    Example:
        >>> df = get_station_data(23031, "2020-01-01", "2020-01-31", ["rainfall", "max_temp"])
        >>> df.shape
        (31, 4)
    """
    api = api or SiloAPI()
    start, finish = _validate_dates(start_date, finish_date, api.settings.earliest_date)
    keys = _validate_variables(variables)

    station_id = StationRegistry(api).resolve(station)
    logger.info("Retrieving PatchedPoint data for station %d from %s to %s", station_id, start, finish)
    url = build_url(
        station=station_id,
        start_date=start,
        finish_date=finish,
        variables=keys,
        settings=api.settings,
    )
    return _format_columns(api.fetch_weather_table(url), pretty_names)


def _as_date(value: Any, name: str) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise InvalidDateError(f"Could not interpret {name} {value!r} as a YYYY-MM-DD date")


def _validate_dates(
    start_date: DateLike, finish_date: Optional[DateLike], earliest: dt.date
) -> Tuple[dt.date, dt.date]:
    start = _as_date(start_date, "start_date")
    finish = dt.date.today() if finish_date is None else _as_date(finish_date, "finish_date")

    if start < earliest:
        raise InvalidDateError(f"The given start date cannot precede {earliest.isoformat()}")
    if finish < start:
        raise InvalidDateError("The given finish date cannot precede the start date")
    return start, finish


def _validate_variables(variables: Optional[Union[str, Iterable[str]]]) -> List[str]:
    if variables is None:
        return VARIABLES.keys()
    if isinstance(variables, str):
        variables = [variables]
    keys = list(variables)
    if not keys:
        raise SiloInputError("At least one weather variable must be requested")
    for key in keys:
        if not VARIABLES.is_valid(key):
            raise UnknownVariableError(key)
    return keys


def _format_columns(frame: pd.DataFrame, pretty_names: bool) -> pd.DataFrame:
    if not pretty_names:
        frame.columns = machine_names(frame.columns)
    return frame
