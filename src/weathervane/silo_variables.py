"""
Central registry for SILO weather variables.

Maps between:
- Canonical variable keys (used in user-facing APIs, e.g. "rainfall")
- Pretty column labels with units (e.g. "Rainfall (mm)")
- SILO response field names (e.g. "daily_rain")
- API single-letter codes (used in the ``comment=`` query parameter)

The order of the registry is the canonical output column order.
"""

from typing import Iterator, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from weathervane.silo_models import UnknownVariableError


class WeatherVariable(BaseModel):
    """Metadata for a weather variable.

    Attributes:
        key: Canonical snake_case identifier (e.g. "rainfall")
        label: Display name with units (e.g. "Rainfall (mm)")
        description: Long-form description
        provider_field: Field name in SILO's CSV output (e.g. "daily_rain")
        provider_code: Single letter code for SILO API (e.g. "R")
    """

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    description: str
    provider_field: str
    provider_code: str


# Codes and field names from https://www.longpaddock.qld.gov.au/silo/about/climate-variables/
WEATHER_VARIABLES: List[WeatherVariable] = [
    WeatherVariable(
        key="rainfall",
        label="Rainfall (mm)",
        description="Daily rainfall (mm)",
        provider_field="daily_rain",
        provider_code="R",
    ),
    WeatherVariable(
        key="min_temp",
        label="Minimum Temperature (degC)",
        description="Minimum temperature (degrees Celsius)",
        provider_field="min_temp",
        provider_code="N",
    ),
    WeatherVariable(
        key="max_temp",
        label="Maximum Temperature (degC)",
        description="Maximum temperature (degrees Celsius)",
        provider_field="max_temp",
        provider_code="X",
    ),
    WeatherVariable(
        key="humidity_tmin",
        label="Relative Humidity at Minimum Temperature (%)",
        description="Relative humidity at time of minimum temperature (%)",
        provider_field="rh_tmin",
        provider_code="G",
    ),
    WeatherVariable(
        key="humidity_tmax",
        label="Relative Humidity at Maximum Temperature (%)",
        description="Relative humidity at time of maximum temperature (%)",
        provider_field="rh_tmax",
        provider_code="H",
    ),
    WeatherVariable(
        key="solar_exposure",
        label="Solar Exposure (MJ/m2)",
        description="Solar exposure (MJ/m2)",
        provider_field="radiation",
        provider_code="J",
    ),
    WeatherVariable(
        key="mean_sea_level_pressure",
        label="Mean Pressure at Sea Level (hPa)",
        description="Mean pressure at sea level (hPa)",
        provider_field="mslp",
        provider_code="M",
    ),
    WeatherVariable(
        key="vapour_pressure",
        label="Vapour Pressure (hPa)",
        description="Vapour pressure (hPa)",
        provider_field="vp",
        provider_code="V",
    ),
    WeatherVariable(
        key="vapour_pressure_deficit",
        label="Vapour Pressure Deficit (hPa)",
        description="Vapour pressure deficit (hPa)",
        provider_field="vp_deficit",
        provider_code="D",
    ),
    WeatherVariable(
        key="evaporation",
        label="Evaporation (mm)",
        description="Class A pan evaporation [synthetic estimate for pre-1970] (mm)",
        provider_field="evap_comb",
        provider_code="C",
    ),
    WeatherVariable(
        key="evaporation_morton_lake",
        label="Morton's Shallow Lake Evaporation (mm)",
        description="Morton's shallow lake evaporation (mm)",
        provider_field="evap_morton_lake",
        provider_code="L",
    ),
    WeatherVariable(
        key="evapotranspiration_fao56",
        label="FAO56 Short Crop Evapotranspiration (mm)",
        description="FAO56 short crop evapotranspiration (mm)",
        provider_field="et_short_crop",
        provider_code="F",
    ),
    WeatherVariable(
        key="evapotranspiration_asce",
        label="ASCE Tall Crop Evapotranspiration (mm)",
        description="ASCE tall crop evapotranspiration (mm)",
        provider_field="et_tall_crop",
        provider_code="T",
    ),
    WeatherVariable(
        key="evapotranspiration_morton_areal",
        label="Morton's Areal Actual Evapotranspiration (mm)",
        description="Morton's areal actual evapotranspiration (mm)",
        provider_field="et_morton_actual",
        provider_code="A",
    ),
    WeatherVariable(
        key="evapotranspiration_morton_point",
        label="Morton's Point Potential Evapotranspiration (mm)",
        description="Morton's point potential evapotranspiration (mm)",
        provider_field="et_morton_potential",
        provider_code="P",
    ),
    WeatherVariable(
        key="evapotranspiration_morton_wet",
        label="Morton's Wet-environment Areal Potential Evapotranspiration (mm)",
        description="Morton's wet-environment areal potential evapotranspiration (mm)",
        provider_field="et_morton_wet",
        provider_code="W",
    ),
]


# ===========================
# Variable Registry
# ===========================


class VariableRegistry:
    """Registry providing variable lookups and conversions.

    The registry is typically used via the singleton VARIABLES instance:

        >>> from weathervane.silo_variables import VARIABLES
        >>> VARIABLES["rainfall"].label
        'Rainfall (mm)'
        >>> VARIABLES.code_for("rainfall")
        'R'
        >>> VARIABLES.by_provider_field("daily_rain").key
        'rainfall'
    """

    def __init__(self, variables: List[WeatherVariable]) -> None:
        """Initialize registry with variable metadata.

        Args:
            variables: Variables in canonical output order
        """
        self._variables = {variable.key: variable for variable in variables}

        # Reverse lookup indexes (computed once)
        self._by_provider_field = {v.provider_field: v for v in variables}
        self._by_provider_code = {v.provider_code: v for v in variables}

    # -------------------------
    # Dict-like interface
    # -------------------------

    def __getitem__(self, key: str) -> WeatherVariable:
        return self.by_key(key)

    def __contains__(self, key: object) -> bool:
        return key in self._variables

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def keys(self) -> List[str]:
        """Return canonical variable keys in catalog order."""
        return list(self._variables)

    def all(self) -> List[WeatherVariable]:
        """Return all variables in canonical output order."""
        return list(self._variables.values())

    def labels(self) -> List[str]:
        """Return pretty column labels in canonical output order."""
        return [variable.label for variable in self._variables.values()]

    def get(self, key: str) -> Optional[WeatherVariable]:
        """Get a variable by key, or None if not found."""
        return self._variables.get(key)

    def by_key(self, key: str) -> WeatherVariable:
        """Get a variable by canonical key.

        Raises:
            UnknownVariableError: If key is not in the catalog
        """
        try:
            return self._variables[key]
        except (KeyError, TypeError):
            raise UnknownVariableError(key) from None

    def is_valid(self, key: str) -> bool:
        """Check whether key names a catalog variable."""
        return isinstance(key, str) and key in self._variables

    # -------------------------
    # Conversion methods
    # -------------------------

    def by_provider_field(self, field: str) -> Optional[WeatherVariable]:
        """Look up a variable by its SILO response field name (e.g. "daily_rain")."""
        return self._by_provider_field.get(field)

    def by_provider_code(self, code: str) -> Optional[WeatherVariable]:
        """Look up a variable by its SILO API code (e.g. "R")."""
        return self._by_provider_code.get(code)

    def code_for(self, key: str) -> Optional[str]:
        """Convert a canonical key to its SILO API code, or None if unknown."""
        variable = self._variables.get(key) if isinstance(key, str) else None
        return variable.provider_code if variable else None

    def to_frame(self) -> pd.DataFrame:
        """Return the catalog as a DataFrame, one row per variable."""
        return pd.DataFrame(
            {
                "variable_name": [v.key for v in self._variables.values()],
                "pretty_name": [v.label for v in self._variables.values()],
                "description": [v.description for v in self._variables.values()],
                "silo_name": [v.provider_field for v in self._variables.values()],
                "silo_code": [v.provider_code for v in self._variables.values()],
            }
        )


# Singleton registry instance
VARIABLES = VariableRegistry(WEATHER_VARIABLES)


def weather_variables() -> pd.DataFrame:
    """
    Weather variables, including ID codes and descriptions.

    Use the entries of the ``variable_name`` column to select variables in
    :func:`weathervane.get_weather_data` and :func:`weathervane.get_station_data`.

    Example:
        >>> weather_variables()[["variable_name", "pretty_name"]].head(3)
          variable_name                 pretty_name
        0      rainfall               Rainfall (mm)
        1      min_temp  Minimum Temperature (degC)
        2      max_temp  Maximum Temperature (degC)
    """
    return VARIABLES.to_frame()
