import datetime as dt

import pytest
import typer

from weathervane.cli.date_utils import iso_date_option, parse_iso_date_strict


def test_parse_iso_date_strict_valid() -> None:
    assert parse_iso_date_strict("2023-01-01") == dt.date(2023, 1, 1)


@pytest.mark.parametrize("value", ["20230101", "2023/01/01", "01-01-2023", "2023-13-01", "2023-02-30"])
def test_parse_iso_date_strict_rejects_non_iso(value: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_iso_date_strict(value)


@pytest.mark.parametrize("value", ["2023-1-01", "2023-01-1", "2023-1-1"])
def test_parse_iso_date_strict_rejects_non_zero_padded(value: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_iso_date_strict(value)


def test_iso_date_option_returns_canonical_string() -> None:
    assert iso_date_option("2023-01-01") == "2023-01-01"


def test_iso_date_option_passes_none_through() -> None:
    assert iso_date_option(None) is None
