"""Tests for silo_variables module.

These tests document how to look up weather variables in the catalog.
"""

import pandas as pd
import pytest
from pydantic import ValidationError

from weathervane.silo_models import UnknownVariableError
from weathervane.silo_variables import VARIABLES, WEATHER_VARIABLES, weather_variables


class TestVariableCatalog:
    """Test the contents of the catalog."""

    def test_catalog_has_sixteen_variables(self):
        assert len(VARIABLES) == 16
        assert len(WEATHER_VARIABLES) == 16

    def test_keys_codes_and_fields_are_unique(self):
        keys = [v.key for v in WEATHER_VARIABLES]
        codes = [v.provider_code for v in WEATHER_VARIABLES]
        fields = [v.provider_field for v in WEATHER_VARIABLES]
        labels = [v.label for v in WEATHER_VARIABLES]

        assert len(set(keys)) == len(keys)
        assert len(set(codes)) == len(codes)
        assert len(set(fields)) == len(fields)
        assert len(set(labels)) == len(labels)

    def test_codes_are_single_letters(self):
        for variable in WEATHER_VARIABLES:
            assert len(variable.provider_code) == 1
            assert variable.provider_code.isupper()

    def test_catalog_order_starts_with_rainfall_and_temperatures(self):
        """The catalog order is the output column order."""
        assert VARIABLES.keys()[:3] == ["rainfall", "min_temp", "max_temp"]
        assert "".join(VARIABLES.code_for(key) for key in VARIABLES) == "RNXGHJMVDCLFTAPW"

    def test_variables_are_immutable(self):
        with pytest.raises(ValidationError):
            VARIABLES["rainfall"].key = "rain"


class TestVariableLookups:
    """Test lookups by key, SILO field name and SILO code."""

    def test_lookup_by_key(self):
        variable = VARIABLES["max_temp"]

        assert variable.label == "Maximum Temperature (degC)"
        assert variable.provider_field == "max_temp"
        assert variable.provider_code == "X"

    def test_lookup_unknown_key_raises(self):
        with pytest.raises(UnknownVariableError) as exc_info:
            VARIABLES.by_key("rain")

        assert exc_info.value.key == "rain"
        assert "weather_variables()" in str(exc_info.value)

    def test_all_follows_catalog_order(self):
        variables = VARIABLES.all()

        assert [v.key for v in variables] == VARIABLES.keys()
        assert variables[0].label == "Rainfall (mm)"

    def test_get_unknown_key_returns_none(self):
        assert VARIABLES.get("rain") is None

    def test_is_valid(self):
        assert VARIABLES.is_valid("solar_exposure")
        assert not VARIABLES.is_valid("Rainfall (mm)")
        assert not VARIABLES.is_valid(None)
        assert "rainfall" in VARIABLES

    def test_lookup_by_provider_field(self):
        assert VARIABLES.by_provider_field("daily_rain").key == "rainfall"
        assert VARIABLES.by_provider_field("et_short_crop").key == "evapotranspiration_fao56"
        assert VARIABLES.by_provider_field("daily_rain_source") is None

    def test_lookup_by_provider_code(self):
        assert VARIABLES.by_provider_code("J").key == "solar_exposure"
        assert VARIABLES.by_provider_code("Z") is None

    def test_code_for_unknown_key_is_none(self):
        assert VARIABLES.code_for("rainfall") == "R"
        assert VARIABLES.code_for("rain") is None


class TestWeatherVariablesTable:
    """Test the public catalog table."""

    def test_columns(self):
        frame = weather_variables()

        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == [
            "variable_name",
            "pretty_name",
            "description",
            "silo_name",
            "silo_code",
        ]
        assert len(frame) == 16

    def test_rows_follow_catalog_order(self):
        frame = weather_variables()

        assert frame["variable_name"].tolist() == VARIABLES.keys()
        assert frame.iloc[0]["pretty_name"] == "Rainfall (mm)"
        assert frame.iloc[0]["silo_name"] == "daily_rain"
        assert frame.iloc[0]["silo_code"] == "R"
