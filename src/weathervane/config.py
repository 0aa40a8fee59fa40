"""Centralized configuration for the weathervane package.

This module provides the SILO endpoint settings (base URL, the public API
credentials, request timeout and validation constants) and environment
variable handling for overriding them.
"""

import datetime as dt
import os

from pydantic import BaseModel, ConfigDict, Field

from weathervane.silo_models import AustraliaBounds, SiloDataset

SILO_BASE_URL = "https://www.longpaddock.qld.gov.au/cgi-bin/silo/"

# SILO accepts this fixed public credential for anonymous requests
SILO_PUBLIC_CREDENTIAL = "apirequest"

DEFAULT_TIMEOUT = 30.0


class SiloSettings(BaseModel):
    """Settings injected into :class:`weathervane.silo_api.SiloAPI`.

    Attributes:
        base_url: SILO cgi-bin base URL (must end with "/")
        username: Value sent as ``username=``
        password: Value sent as ``password=``
        timeout: HTTP timeout in seconds (None disables the timeout)
        earliest_date: Oldest date with data available on SILO
        bounds: Coordinate box accepted for DataDrill queries
        reference_station: Station used as the centre for listing every station (Alice Springs)
        all_stations_radius_km: Radius large enough to cover the whole registry
        name_fragment_max_length: Longest name fragment SILO matches against
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = SILO_BASE_URL
    username: str = SILO_PUBLIC_CREDENTIAL
    password: str = SILO_PUBLIC_CREDENTIAL
    timeout: float | None = DEFAULT_TIMEOUT
    earliest_date: dt.date = dt.date(1889, 1, 1)
    bounds: AustraliaBounds = Field(default_factory=AustraliaBounds)
    reference_station: int = 15540
    all_stations_radius_km: int = 10000
    name_fragment_max_length: int = 10

    def endpoint(self, dataset: SiloDataset) -> str:
        """Get the API endpoint URL for a given dataset."""
        endpoints = {
            SiloDataset.PATCHED_POINT: "PatchedPointDataset.php",
            SiloDataset.DATA_DRILL: "DataDrillDataset.php",
        }
        return self.base_url + endpoints[SiloDataset(dataset)]


def get_settings() -> SiloSettings:
    """Build settings, applying environment variable overrides.

    ``SILO_BASE_URL`` replaces the SILO base URL (useful for pointing at a
    mirror or a local test server) and ``WEATHERVANE_TIMEOUT`` sets the HTTP
    timeout in seconds.

    Raises:
        ValueError: If WEATHERVANE_TIMEOUT is not a number

    Example:
        >>> os.environ['WEATHERVANE_TIMEOUT'] = '60'
        >>> get_settings().timeout
        60.0
    """
    overrides = {}
    base_url = os.environ.get("SILO_BASE_URL")
    if base_url:
        overrides["base_url"] = base_url if base_url.endswith("/") else base_url + "/"

    timeout = os.environ.get("WEATHERVANE_TIMEOUT")
    if timeout:
        try:
            overrides["timeout"] = float(timeout)
        except ValueError as exc:
            raise ValueError(f"WEATHERVANE_TIMEOUT must be a number, got: {timeout!r}") from exc

    return SiloSettings(**overrides)


# Default settings - uses environment variables if set
DEFAULT_SETTINGS = get_settings()
