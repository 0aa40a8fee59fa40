"""
Parsing of SILO API responses into pandas DataFrames.

SILO reports most failures as an HTTP 200 page containing an error phrase,
so every response is classified against known error signatures before it is
parsed. Weather data responses are then reshaped into the canonical schema:

    Date, Latitude, Longitude, Elevation (m), <variable labels in catalog order>
"""

import io
import keyword
import logging
import re
from typing import Iterable, List, Optional, Pattern, Tuple, Type

import pandas as pd

from weathervane.silo_models import (
    SiloInvalidCoordinatesError,
    SiloInvalidDateError,
    SiloInvalidStationError,
    SiloServerError,
    SiloUnspecifiedError,
)
from weathervane.silo_variables import VARIABLES

logger = logging.getLogger(__name__)

DATE_COLUMN = "Date"
LATITUDE_COLUMN = "Latitude"
LONGITUDE_COLUMN = "Longitude"
ELEVATION_COLUMN = "Elevation (m)"
LEADING_COLUMNS = [DATE_COLUMN, LATITUDE_COLUMN, LONGITUDE_COLUMN, ELEVATION_COLUMN]

SOURCE_SUFFIX = "_source"
METADATA_COLUMN = "metadata"

# SILO field name -> canonical name, for the non-variable fields
FIELD_RENAMES = {
    "YYYY-MM-DD": DATE_COLUMN,
    "date": DATE_COLUMN,
    "latitude": LATITUDE_COLUMN,
    "longitude": LONGITUDE_COLUMN,
}

STATION_COLUMNS = ["id", "name", "latitude", "longitude", "state", "elevation"]
DISTANCE_COLUMN = "distance"

# Evaluated in order, first match wins. Several phrases can appear in the same
# page (e.g. an invalid date page also mentions an error occurring).
SERVER_ERROR_PATTERNS: List[Tuple[Pattern[str], Type[SiloServerError]]] = [
    (re.compile(r"Sorry.+date.", re.DOTALL), SiloInvalidDateError),
    (re.compile(r"check.+within Australia", re.DOTALL), SiloInvalidCoordinatesError),
    (re.compile(r"Invalid station number"), SiloInvalidStationError),
    (
        re.compile(r"error occurred|error checking|[Rr]ejected|missing essential parameters"),
        SiloUnspecifiedError,
    ),
]

_ELEVATION_PATTERN = re.compile(r"elevation=\s*(-?\d+(?:[.,]\d+)?)")
_NON_IDENTIFIER_CHARS = re.compile(r"\W", re.ASCII)


def classify_response(text: str) -> None:
    """Raise the matching SiloServerError if text is a SILO error page.

    Raises:
        SiloInvalidDateError: Start/end date rejected by the server
        SiloInvalidCoordinatesError: Coordinates rejected by the server
        SiloInvalidStationError: Unknown station number
        SiloUnspecifiedError: Any other server-side failure
    """
    for pattern, error in SERVER_ERROR_PATTERNS:
        if pattern.search(text):
            logger.error("SILO returned an error page: %s", error.message)
            logger.debug("Error page contents: %s", text[:500])
            raise error(response_text=text)


def extract_elevation(metadata: Iterable[str]) -> Optional[float]:
    """
    Find the "elevation=" value in the SILO metadata field.

    Example:
        >>> extract_elevation(["name=Grid point", "elevation= 115.0 m"])
        115.0
    """
    text = ",".join(str(item) for item in metadata if isinstance(item, str))
    match = _ELEVATION_PATTERN.search(text)
    if match is None:
        return None
    return float(match.group(1).replace(",", "."))


def canonical_column_names(columns: Iterable[str]) -> dict:
    """Map SILO field names to canonical names; unknown fields keep their name."""
    mapping = {}
    for column in columns:
        if column in FIELD_RENAMES:
            mapping[column] = FIELD_RENAMES[column]
            continue
        variable = VARIABLES.by_provider_field(column)
        mapping[column] = variable.label if variable else column
    return mapping


def canonical_order(columns: Iterable[str]) -> List[str]:
    """Return the canonical columns present in ``columns``, in output order."""
    present = set(columns)
    ordered = LEADING_COLUMNS + VARIABLES.labels()
    return [column for column in ordered if column in present]


def parse_weather_response(text: str, delimiter: str = ",") -> pd.DataFrame:
    """
    Parse a SILO weather data response into the canonical DataFrame.

    Args:
        text: Raw response body (already checked with :func:`classify_response`)
        delimiter: Field delimiter ("," for csv output)

    Returns:
        DataFrame with columns Date, [Latitude, Longitude,] Elevation (m) and
        the variable labels present in the response, in catalog order.
    """
    try:
        frame = pd.read_csv(io.StringIO(text), sep=delimiter, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        raise SiloUnspecifiedError("Server-side error: Empty response", response_text=text) from None
    frame.columns = [str(column).strip() for column in frame.columns]

    source_columns = [column for column in frame.columns if column.endswith(SOURCE_SUFFIX)]
    frame = frame.drop(columns=source_columns)

    # Elevation is a property of the queried point, so it is repeated on every row
    elevation = None
    if METADATA_COLUMN in frame.columns:
        elevation = extract_elevation(frame[METADATA_COLUMN].dropna().tolist())
        frame = frame.drop(columns=METADATA_COLUMN)
    frame[ELEVATION_COLUMN] = float("nan") if elevation is None else elevation

    frame = frame.rename(columns=canonical_column_names(frame.columns))

    ordered = canonical_order(frame.columns)
    ignored = [column for column in frame.columns if column not in ordered]
    if ignored:
        logger.debug("Ignoring fields outside the output schema: %s", ignored)
    frame = frame[ordered].copy()

    # SILO pads short date ranges with blank rows
    if DATE_COLUMN in frame.columns:
        frame[DATE_COLUMN] = pd.to_datetime(frame[DATE_COLUMN], format="%Y-%m-%d", errors="coerce")
        frame = frame.dropna(subset=[DATE_COLUMN])

    return frame.reset_index(drop=True)


def parse_station_table(
    text: str, header: bool = True, with_distance: bool = False
) -> pd.DataFrame:
    """
    Parse pipe-delimited station registry output into a DataFrame.

    Columns are assigned by position (SILO abbreviates its header names,
    e.g. "Longitud", "Elevat."), and the header row is skipped if present.

    Args:
        text: Raw response body
        header: Whether the first line is a header row
        with_distance: Whether records carry a trailing distance (km) field

    Returns:
        DataFrame with columns id, name, latitude, longitude, state, elevation
        (and distance if requested)
    """
    columns = STATION_COLUMNS + ([DISTANCE_COLUMN] if with_distance else [])
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if header:
        lines = lines[1:]

    rows = []
    for line in lines:
        fields = [field.strip() for field in line.split("|")]
        fields += [""] * (len(columns) - len(fields))
        rows.append(fields[: len(columns)])

    frame = pd.DataFrame(rows, columns=columns)
    frame["id"] = pd.to_numeric(frame["id"], errors="coerce").astype("Int64")
    for column in ["latitude", "longitude", "elevation", DISTANCE_COLUMN]:
        if column in frame.columns:
            frame[column] = pd.to_numeric(frame[column], errors="coerce")
    return frame


def machine_name(name: str) -> str:
    """
    Convert a pretty column label into a machine-safe identifier.

    Lower-cases the label and replaces each character outside [A-Za-z0-9_]
    with an underscore. Applying it twice gives the same result.

    Example:
        >>> machine_name("Rainfall (mm)")
        'rainfall__mm_'
        >>> machine_name("Morton's Shallow Lake Evaporation (mm)")
        'morton_s_shallow_lake_evaporation__mm_'
    """
    safe = _NON_IDENTIFIER_CHARS.sub("_", str(name).lower())
    if not safe or safe[0].isdigit():
        safe = "x" + safe
    if keyword.iskeyword(safe):
        safe += "_"
    return safe


def machine_names(columns: Iterable[str]) -> List[str]:
    """Apply :func:`machine_name` to every column name."""
    return [machine_name(column) for column in columns]
