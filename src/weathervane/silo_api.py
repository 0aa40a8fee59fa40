"""
SILO API client for Australian climate data.

This module provides the HTTP transport used by weathervane: it fetches raw
response text, classifies SILO error pages and hands the body to the parsers
in :mod:`weathervane.silo_parser`.
"""

import logging
from typing import Optional

import pandas as pd
import requests

from weathervane.config import DEFAULT_SETTINGS, SiloSettings
from weathervane.logging_utils import apply_log_level
from weathervane.silo_models import SiloAPIError, SiloConnectionError, SiloTimeoutError
from weathervane.silo_parser import classify_response, parse_station_table, parse_weather_response

logger = logging.getLogger(__name__)


class SiloAPI:
    """
    Python client for the SILO (Scientific Information for Land Owners) API.

    SILO provides Australian climate data from 1889 onwards with two dataset types:

    **PatchedPoint Dataset**:
        Station-based observational data with infilled gaps, from Bureau of
        Meteorology weather stations across Australia.

    **DataDrill Dataset**:
        Gridded data at 0.05° × 0.05° resolution (~5km), interpolated across a
        regular grid covering Australia, for any latitude/longitude coordinate.

    Each call issues a single blocking GET request. There is no retry and no
    caching; every failure is raised to the caller.

    For more information, see: https://www.longpaddock.qld.gov.au/silo/

    Examples:
        >>> from weathervane.silo_request import build_url
        >>> api = SiloAPI(timeout=60)
        >>> url = build_url(-34.9285, 138.6007, "2020-01-01", "2020-01-31", ["rainfall"])
        >>> df = api.fetch_weather_table(url)
    """

    def __init__(
        self,
        settings: Optional[SiloSettings] = None,
        timeout: Optional[float] = None,
        log_level: int | str = logging.INFO,
    ):
        """
        Initialize the SILO API client.

        Args:
            settings: Endpoint settings (default: DEFAULT_SETTINGS, which honours
                SILO_BASE_URL and WEATHERVANE_TIMEOUT)
            timeout: Request timeout in seconds, overriding ``settings.timeout``
            log_level: Logging level for API diagnostics (default: ``INFO``)
        """
        self.settings = settings or DEFAULT_SETTINGS
        self.timeout = timeout if timeout is not None else self.settings.timeout
        self.log_level = apply_log_level(log_level)

    def fetch_text(self, url: str) -> str:
        """
        Fetch the raw response body for a SILO URL.

        Raises:
            SiloConnectionError: If the server cannot be reached
            SiloTimeoutError: If the request times out (also a requests Timeout)
            SiloServerError: If the body is a recognised SILO error page
            SiloAPIError: If the server answers with an HTTP error status
        """
        logger.debug("🌐 Requesting: %s", url)
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            logger.error("SILO did not respond within %s seconds: %s", self.timeout, exc)
            raise SiloTimeoutError(f"SILO request timed out: {exc}") from exc
        except requests.exceptions.ConnectionError as exc:
            logger.error("Connection to SILO failed: %s", exc)
            raise SiloConnectionError(f"Connection to SILO failed: {exc}") from exc

        text = response.text
        classify_response(text)

        if response.status_code >= 400:
            raise SiloAPIError(f"HTTP {response.status_code}: {response.reason}\n{text}")

        logger.debug("Received %d characters", len(text))
        return text

    def fetch_weather_table(self, url: str) -> pd.DataFrame:
        """Fetch a DataDrill/PatchedPoint csv response and parse it to the canonical schema."""
        return parse_weather_response(self.fetch_text(url))

    def fetch_station_table(
        self, url: str, header: bool = True, with_distance: bool = False
    ) -> pd.DataFrame:
        """Fetch a pipe-delimited station registry response and parse it."""
        return parse_station_table(self.fetch_text(url), header=header, with_distance=with_distance)
