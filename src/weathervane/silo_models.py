"""
Pydantic models and exceptions for SILO API requests and responses.

This module provides type-safe data models for interacting with the
SILO (Scientific Information for Land Owners) API, along with the
exception hierarchy used throughout weathervane.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
from pydantic import BaseModel, ConfigDict, Field, model_validator

# ===========================
# Exception Hierarchy
# ===========================


class SiloError(Exception):
    """Base exception for weathervane."""

    pass


class SiloInputError(SiloError, ValueError):
    """Invalid input detected locally, before any request is made."""

    pass


class InvalidCoordinatesError(SiloInputError):
    """Latitude/longitude outside the SILO raster extent."""

    pass


class InvalidDateError(SiloInputError):
    """Unparseable date, start before the earliest dataset date, or finish before start."""

    pass


class UnknownVariableError(SiloInputError):
    """Requested weather variable is not in the catalog."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(
            f"{key} is not in the list of available variables; did you misspell the variable?\n"
            "You can use weathervane.weather_variables() to check the list of available "
            "variables. Use the entries in the variable_name column to select variables as desired."
        )


class InvalidSortOptionError(SiloInputError):
    """Unsupported sort_by option for a station listing."""

    def __init__(self, sort_by: Any, allowed: List[str]):
        self.sort_by = sort_by
        self.allowed = allowed
        quoted = [f"'{option}'" for option in allowed]
        options = ", ".join(quoted[:-1]) + f" or {quoted[-1]}" if len(quoted) > 1 else quoted[0]
        super().__init__(f"sort_by must be one of {options} (got {sort_by!r}).")


class StationNotFoundError(SiloInputError):
    """Station name matched no stations in the registry."""

    def __init__(self, station: Any):
        self.station = station
        super().__init__(
            f"Unknown station provided ({station!r}). "
            "Please provide unique station name or station ID."
        )


class AmbiguousStationError(SiloInputError):
    """Station name matched more than one station in the registry."""

    def __init__(self, station: Any, matches: Optional[pd.DataFrame] = None):
        self.station = station
        self.matches = matches
        count = len(matches) if matches is not None else "multiple"
        super().__init__(
            f"Provided station ({station!r}) matched {count} locations. "
            "Please provide unique station name or station ID."
        )


class SiloAPIError(SiloError):
    """SILO API error exception."""

    pass


class SiloConnectionError(SiloAPIError, requests.exceptions.ConnectionError):
    """The SILO server could not be reached (DNS failure, refused connection)."""

    pass


class SiloTimeoutError(SiloConnectionError, requests.exceptions.Timeout):
    """The SILO server did not answer within the configured timeout."""

    pass


class NoStationDataError(SiloAPIError):
    """A station registry query returned no rows."""

    def __init__(self, message: str = "No data returned, please check input."):
        super().__init__(message)


class SiloServerError(SiloAPIError):
    """Error reported by the SILO server inside an otherwise successful response."""

    message = "Server-side error"

    def __init__(self, message: Optional[str] = None, response_text: Optional[str] = None):
        self.response_text = response_text
        super().__init__(message or self.message)


class SiloInvalidDateError(SiloServerError):
    message = "Server-side error: Invalid start/end date"


class SiloInvalidCoordinatesError(SiloServerError):
    message = "Server-side error: Invalid latitude/longitude"


class SiloInvalidStationError(SiloServerError):
    message = "Server-side error: Invalid station ID provided"


class SiloUnspecifiedError(SiloServerError):
    message = "Server-side error: Unspecified error or server inaccessible"


# ===========================
# Enums
# ===========================


class SiloDataset(str, Enum):
    """SILO dataset types."""

    PATCHED_POINT = "PatchedPoint"
    DATA_DRILL = "DataDrill"


class SiloFormat(str, Enum):
    """
    SILO output formats used by weathervane.

    - CSV: Comma-separated weather data with customizable variables
    - NEAR: Find nearby stations (PatchedPoint only)
    - NAME: Search stations by name fragment (PatchedPoint only)
    - ID: Get station details by ID (PatchedPoint only)
    """

    CSV = "csv"
    NEAR = "near"
    NAME = "name"
    ID = "id"


class StationSortKey(str, Enum):
    """Columns that station listings can be sorted by."""

    NAME = "name"
    ID = "id"
    STATE = "state"
    DISTANCE = "distance"


# ===========================
# Location and station models
# ===========================


class AustraliaBounds(BaseModel):
    """
    Bounding box of the SILO/BoM gridded rasters in decimal degrees.

    These bounds include parts of Indonesia and Papua New Guinea, but the
    SILO server processes such coordinates just fine.
    """

    model_config = ConfigDict(frozen=True)

    min_latitude: float = -44.53
    max_latitude: float = -9.98
    min_longitude: float = 111.98
    max_longitude: float = 156.27

    def contains(self, latitude: float, longitude: float) -> bool:
        """Return True if the coordinates fall inside the box (edges inclusive)."""
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )

    def describe(self) -> str:
        return (
            f"{self.min_latitude} <= lat <= {self.max_latitude}, "
            f"{self.min_longitude} <= lng <= {self.max_longitude}"
        )


class Station(BaseModel):
    """
    Weather station record from the SILO station registry.

    Returned by :meth:`StationRegistry.get_details`; listings are DataFrames
    with the same columns, which :meth:`from_frame` converts back to models.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="BoM station number (e.g. 23031)")
    name: str
    latitude: float
    longitude: float
    state: str
    elevation: Optional[float] = Field(default=None, description="Elevation in metres")

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> List["Station"]:
        """Convert a station listing DataFrame to a list of models.

        Listings with a distance column (from a nearby search) give
        :class:`NearbyStation` records.
        """
        model = NearbyStation if cls is Station and "distance" in frame.columns else cls
        fields = [name for name in model.model_fields if name in frame.columns]
        stations = []
        for record in frame[fields].to_dict(orient="records"):
            stations.append(model(**{key: _to_python(value) for key, value in record.items()}))
        return stations


def _to_python(value: Any) -> Any:
    """Convert pandas/numpy scalars (and missing values) to plain Python objects."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if hasattr(value, "item"):
        return value.item()
    return value


class NearbyStation(Station):
    """Station record with its distance (km) from the queried station."""

    distance: float


class StationQuery(BaseModel):
    """
    Query against the SILO PatchedPoint station registry.

    Examples:
        # Search for stations by name fragment
        >>> query = StationQuery(format=SiloFormat.NAME, name_fragment="Brisbane")

        # Find nearby stations
        >>> query = StationQuery(format=SiloFormat.NEAR, station=23031, radius=5)

        # Station details
        >>> query = StationQuery(format=SiloFormat.ID, station=23031)
    """

    model_config = ConfigDict(use_enum_values=True)

    dataset: SiloDataset = Field(default=SiloDataset.PATCHED_POINT, frozen=True)
    format: SiloFormat
    station: Optional[int] = Field(default=None, description="BoM station number")
    radius: Optional[float] = Field(
        default=None, gt=0, description="Search radius in km (for 'near' format)"
    )
    name_fragment: Optional[str] = Field(
        default=None, description="Station name search fragment (for 'name' format)"
    )

    @model_validator(mode="after")
    def validate_format_requirements(self) -> "StationQuery":
        """Validate required fields for each format."""
        if self.format == SiloFormat.CSV:
            raise ValueError("StationQuery does not support 'csv' format. Use build_url for data.")
        if self.format in (SiloFormat.ID, SiloFormat.NEAR) and self.station is None:
            raise ValueError(f"station is required for '{self.format}' format")
        if self.format == SiloFormat.NEAR and self.radius is None:
            raise ValueError("radius is required for 'near' format")
        return self

    def to_api_params(self) -> Dict[str, Any]:
        """
        Convert query to SILO API parameters.

        Returns:
            Dictionary of query parameters for the API request
        """
        params: Dict[str, Any] = {"format": self.format}

        if self.format == SiloFormat.NAME:
            params["nameFrag"] = self.name_fragment or ""
            return params

        params["station"] = self.station
        if self.format == SiloFormat.NEAR:
            radius = self.radius
            params["radius"] = int(radius) if float(radius).is_integer() else radius
        return params
