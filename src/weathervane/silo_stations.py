"""
SILO station registry lookups.

Station identifiers may be given as a numeric BoM station number or as a
(partial) station name. Numeric identifiers are passed through unchecked;
an invalid number is only reported by the server when data is requested
for it. Names are resolved with a name search that must match exactly one
station.
"""

import logging
import numbers
import re
import string
from typing import Any, List, Optional, Union

import pandas as pd
from rapidfuzz import fuzz

from weathervane.silo_api import SiloAPI
from weathervane.silo_models import (
    AmbiguousStationError,
    InvalidSortOptionError,
    NoStationDataError,
    SiloFormat,
    SiloInputError,
    Station,
    StationNotFoundError,
    StationQuery,
    StationSortKey,
)
from weathervane.silo_parser import DISTANCE_COLUMN
from weathervane.silo_request import build_station_url

logger = logging.getLogger(__name__)

StationIdentifier = Union[int, str]

# Whitespace, punctuation and explicit "*" wildcards all become SILO's "_" wildcard
_WILDCARD_RUN = re.compile(r"[\s" + re.escape(string.punctuation) + r"]+")

LISTING_SORT_KEYS = [StationSortKey.NAME, StationSortKey.ID, StationSortKey.STATE]
NEARBY_SORT_KEYS = [StationSortKey.DISTANCE, *LISTING_SORT_KEYS]


def sanitize_name_fragment(text: str, max_length: int = 10) -> str:
    """
    Prepare a station name for SILO's name fragment search.

    Example:
        >>> sanitize_name_fragment("Adel (Waite)")
        'Adel_Waite'
        >>> sanitize_name_fragment("botan*")
        'botan_'
    """
    return _WILDCARD_RUN.sub("_", text)[:max_length]


def station_number(identifier: Any) -> Optional[int]:
    """Return identifier as a station number if it is numeric, else None."""
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, numbers.Integral):
        return int(identifier)
    if isinstance(identifier, numbers.Real):
        number = float(identifier)
        return int(number) if number.is_integer() else None
    if isinstance(identifier, str):
        text = identifier.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def sort_stations(frame: pd.DataFrame, sort_by: Any, allowed: List[StationSortKey]) -> pd.DataFrame:
    """Stable sort of a station listing on one column."""
    key = _sort_key(sort_by, allowed)
    if frame.empty:
        return frame.reset_index(drop=True)
    return frame.sort_values(by=key.value, kind="mergesort").reset_index(drop=True)


def _sort_key(sort_by: Any, allowed: List[StationSortKey]) -> StationSortKey:
    allowed_values = [key.value for key in allowed]
    value = sort_by.value if isinstance(sort_by, StationSortKey) else str(sort_by).lower()
    if value not in allowed_values:
        raise InvalidSortOptionError(sort_by, allowed_values)
    return StationSortKey(value)


class StationRegistry:
    """
    Resolve, search and list SILO weather stations.

    Examples:
        >>> registry = StationRegistry()
        >>> registry.resolve("Adel (Waite)")
        23031
        >>> nearby = registry.list_nearby(23031, radius_km=5)
        >>> registry.get_details("Waite").name
        'ADELAIDE (WAITE INSTITUTE)'
    """

    def __init__(self, api: Optional[SiloAPI] = None):
        self.api = api or SiloAPI()
        self.settings = self.api.settings

    def resolve(self, identifier: StationIdentifier) -> int:
        """
        Resolve a station number or unique station name to a station number.

        Raises:
            StationNotFoundError: If the name matches no station
            AmbiguousStationError: If the name matches several stations
        """
        number = station_number(identifier)
        if number is not None:
            return number

        matches = self.search_by_name(str(identifier))
        if len(matches) == 1:
            station_id = int(matches["id"].iloc[0])
            logger.debug("Resolved station %r to %d", identifier, station_id)
            return station_id
        if len(matches) > 1:
            raise AmbiguousStationError(identifier, matches)
        raise StationNotFoundError(identifier)

    def search_by_name(
        self, text: str, state: Optional[str] = None, rank: bool = False
    ) -> pd.DataFrame:
        """
        Search for weather stations by (partial) name.

        Runs of spaces, punctuation or ``*`` act as wildcards, and the search
        text is truncated to 10 characters. No match gives an empty DataFrame.

        Args:
            text: Partial station name (e.g. "Brisbane", "botan*")
            state: Optional state abbreviation filter (e.g. "QLD")
            rank: Order matches by relevance to ``text`` instead of SILO's order

        Returns:
            DataFrame with columns id, name, latitude, longitude, state, elevation
        """
        fragment = sanitize_name_fragment(str(text), self.settings.name_fragment_max_length)
        query = StationQuery(format=SiloFormat.NAME, name_fragment=fragment)
        frame = self.api.fetch_station_table(build_station_url(query, self.settings))
        logger.info("Found %d station(s) matching %r", len(frame), fragment)

        if state:
            frame = frame[frame["state"].str.upper() == state.upper()].reset_index(drop=True)

        if rank and len(frame) > 1:
            frame = rank_by_name(frame, str(text))
        return frame

    def list_all(self, sort_by: Union[str, StationSortKey] = "name") -> pd.DataFrame:
        """
        Get the complete list of SILO weather stations (approximately 8000).

        Args:
            sort_by: One of "name" (default), "id" or "state"

        Raises:
            InvalidSortOptionError: For any other sort_by value
        """
        _sort_key(sort_by, LISTING_SORT_KEYS)
        frame = self._near(self.settings.reference_station, self.settings.all_stations_radius_km)
        frame = frame.drop(columns=DISTANCE_COLUMN)
        return sort_stations(frame, sort_by, LISTING_SORT_KEYS)

    def list_nearby(
        self,
        identifier: StationIdentifier,
        radius_km: float,
        sort_by: Union[str, StationSortKey] = "distance",
    ) -> pd.DataFrame:
        """
        Get all weather stations within ``radius_km`` of a station.

        Args:
            identifier: Station number or unique station name
            radius_km: Search radius in km
            sort_by: One of "distance" (default), "name", "id" or "state"

        Raises:
            InvalidSortOptionError: For an unsupported sort_by value
            NoStationDataError: If SILO returns no stations
        """
        _sort_key(sort_by, NEARBY_SORT_KEYS)
        if radius_km is None or radius_km <= 0:
            raise SiloInputError(f"radius_km must be a positive number of kilometres, got {radius_km!r}")

        station_id = self.resolve(identifier)
        frame = self._near(station_id, radius_km)
        return sort_stations(frame, sort_by, NEARBY_SORT_KEYS)

    def get_details(self, identifier: StationIdentifier) -> Station:
        """
        Get details of an individual weather station.

        Raises:
            NoStationDataError: If SILO returns no record for the station
        """
        station_id = self.resolve(identifier)
        query = StationQuery(format=SiloFormat.ID, station=station_id)
        frame = self.api.fetch_station_table(build_station_url(query, self.settings), header=False)
        frame = frame.dropna(subset=["id"])
        if frame.empty:
            raise NoStationDataError()
        return Station.from_frame(frame.head(1))[0]

    def _near(self, station_id: int, radius_km: float) -> pd.DataFrame:
        query = StationQuery(format=SiloFormat.NEAR, station=station_id, radius=radius_km)
        frame = self.api.fetch_station_table(
            build_station_url(query, self.settings), with_distance=True
        )
        if frame.empty:
            raise NoStationDataError()
        return frame


def rank_by_name(frame: pd.DataFrame, text: str) -> pd.DataFrame:
    """Order stations by how well their name matches the search text."""
    search_fragment = _WILDCARD_RUN.sub(" ", text).strip().lower()

    def station_match_score(raw_name: Any) -> tuple[int, int, int, float]:
        if not isinstance(raw_name, str) or not search_fragment:
            return (0, 0, -(10**6), 0)

        normalized_name = re.sub(r"\([^)]*\)", "", raw_name).replace("_", " ").strip().lower()

        whole_word_match = (
            1 if re.search(rf"\b{re.escape(search_fragment)}\b", normalized_name) else 0
        )
        start_index = normalized_name.find(search_fragment)
        starts_with_fragment = 1 if start_index == 0 else 0
        position_score = -start_index if start_index >= 0 else -(10**6)
        fuzzy_score = fuzz.ratio(search_fragment, normalized_name)

        return (whole_word_match, starts_with_fragment, position_score, fuzzy_score)

    scores = frame["name"].map(station_match_score)
    order = sorted(range(len(frame)), key=lambda i: scores.iloc[i], reverse=True)
    return frame.iloc[order].reset_index(drop=True)
