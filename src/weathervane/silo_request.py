"""
URL construction for SILO API requests.

No error checking happens here: latitudes, longitudes, dates and variable
lists are expected to be sanity-checked by the caller (see
:mod:`weathervane.weather`), and garbage in begets garbage out. Unknown
variable keys simply contribute no code to the ``comment=`` parameter.
"""

import datetime as dt
from typing import Any, Dict, Iterable, Optional, Union
from urllib.parse import urlencode

from weathervane.config import DEFAULT_SETTINGS, SiloSettings
from weathervane.silo_models import SiloDataset, SiloFormat, StationQuery
from weathervane.silo_variables import VARIABLES

DateLike = Union[str, dt.date]


def format_silo_date(value: Any) -> str:
    """Format a date as SILO's YYYYMMDD by stripping the "-" separators.

    Accepts ISO strings and date/datetime objects; anything else is
    stringified as-is.

    Example:
        >>> format_silo_date("2020-01-31")
        '20200131'
        >>> format_silo_date(dt.date(2020, 1, 31))
        '20200131'
    """
    if isinstance(value, dt.datetime):
        value = value.date()
    if value is None:
        return ""
    return str(value).replace("-", "")


def variable_codes(variables: Optional[Iterable[str]]) -> str:
    """Concatenate SILO API codes for the given variable keys, in the given order.

    Duplicates repeat their code; unknown keys contribute nothing.

    Example:
        >>> variable_codes(["rainfall", "max_temp", "min_temp"])
        'RXN'
    """
    if variables is None:
        return ""
    if isinstance(variables, str):
        variables = [variables]
    return "".join(VARIABLES.code_for(key) or "" for key in variables)


def build_url(
    latitude: Any = None,
    longitude: Any = None,
    start_date: Optional[DateLike] = None,
    finish_date: Optional[DateLike] = None,
    variables: Optional[Iterable[str]] = None,
    station: Any = None,
    settings: Optional[SiloSettings] = None,
) -> str:
    """
    Build the download URL for a SILO weather data query.

    Supply either ``latitude``/``longitude`` (DataDrill, gridded data) or
    ``station`` (PatchedPoint, station data). When ``station`` is given it
    takes precedence.

    Args:
        latitude: Latitude in decimal degrees North
        longitude: Longitude in decimal degrees East
        start_date: ISO string or date object for the starting date
        finish_date: ISO string or date object for the finish date
        variables: Variable keys from the catalog (e.g. ["rainfall", "max_temp"])
        station: Numeric BoM station ID
        settings: Endpoint settings (defaults to DEFAULT_SETTINGS)

    Returns:
        The parameter-formatted URL for the data download

    Example:
        >>> build_url(-34.9285, 138.6007, "2020-01-01", "2020-12-31", ["rainfall"])
        'https://www.longpaddock.qld.gov.au/cgi-bin/silo/DataDrillDataset.php?lat=-34.9285&lon=138.6007&format=csv&username=apirequest&password=apirequest&start=20200101&finish=20201231&comment=R'
    """
    settings = settings or DEFAULT_SETTINGS

    params: Dict[str, Any]
    if station is not None:
        url = settings.endpoint(SiloDataset.PATCHED_POINT)
        params = {"station": station}
    else:
        url = settings.endpoint(SiloDataset.DATA_DRILL)
        params = {"lat": _as_param(latitude), "lon": _as_param(longitude)}

    params.update(
        {
            "format": SiloFormat.CSV.value,
            "username": settings.username,
            "password": settings.password,
            "start": format_silo_date(start_date),
            "finish": format_silo_date(finish_date),
            "comment": variable_codes(variables),
        }
    )
    return f"{url}?{urlencode(params)}"


def build_station_url(query: StationQuery, settings: Optional[SiloSettings] = None) -> str:
    """
    Build the URL for a station registry query (name search, nearby or details).

    Example:
        >>> from weathervane.silo_models import StationQuery, SiloFormat
        >>> build_station_url(StationQuery(format=SiloFormat.ID, station=23031))
        'https://www.longpaddock.qld.gov.au/cgi-bin/silo/PatchedPointDataset.php?format=id&station=23031'
    """
    settings = settings or DEFAULT_SETTINGS
    url = settings.endpoint(query.dataset)
    return f"{url}?{urlencode(query.to_api_params())}"


def _as_param(value: Any) -> Any:
    return "" if value is None else value
