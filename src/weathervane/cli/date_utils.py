"""ISO date handling for CLI options.

Dates on the command line are always YYYY-MM-DD; the library turns them into
SILO's YYYYMMDD form when it builds a request.
"""

from __future__ import annotations

import datetime as _dt
import re
from typing import Optional

import typer

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_BAD_DATE = "Expected date format: YYYY-MM-DD"


def parse_iso_date_strict(value: str) -> _dt.date:
    """Parse a zero-padded YYYY-MM-DD date (2023-1-1 and 20230101 are rejected)."""
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise typer.BadParameter(_BAD_DATE)
    try:
        return _dt.date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"{_BAD_DATE} ({exc})") from exc


def iso_date_option(value: Optional[str]) -> Optional[str]:
    """Typer callback for date options; leaves unset options as None."""
    if value is None:
        return None
    return parse_iso_date_strict(value).isoformat()
