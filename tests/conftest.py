"""Shared fixtures: canned SILO responses and a patched requests.get."""

from pathlib import Path
from unittest.mock import Mock, patch
from urllib.parse import parse_qs, urlsplit

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture():
    """Return a loader for the raw text of a file in tests/fixtures."""

    def _load(name: str) -> str:
        return (FIXTURES_DIR / name).read_text()

    return _load


@pytest.fixture
def silo_response():
    """Return a factory for mocked requests.Response objects."""

    def _response(text: str, status_code: int = 200) -> Mock:
        response = Mock()
        response.status_code = status_code
        response.reason = "OK" if status_code < 400 else "Internal Server Error"
        response.text = text
        return response

    return _response


@pytest.fixture
def mock_get():
    """Patch the HTTP GET used by SiloAPI so no test touches the network."""
    with patch("weathervane.silo_api.requests.get") as mocked:
        yield mocked


@pytest.fixture
def respond_by_format(mock_get, silo_response):
    """Serve a different body per SILO ``format=`` query parameter.

    Example:
        respond_by_format({"name": waite_table, "near": near_table})
    """

    def _install(bodies: dict) -> Mock:
        def _get(url, timeout=None):
            query_format = parse_qs(urlsplit(url).query)["format"][0]
            return silo_response(bodies[query_format])

        mock_get.side_effect = _get
        return mock_get

    return _install


@pytest.fixture
def requested_params(mock_get):
    """Return a reader for the query parameters of a recorded GET call, blanks included."""

    def _params(call_index: int = -1) -> dict:
        url = mock_get.call_args_list[call_index][0][0]
        query = parse_qs(urlsplit(url).query, keep_blank_values=True)
        return {key: values[0] for key, values in query.items()}

    return _params
