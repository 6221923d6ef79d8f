"""Shared fixtures for the forecast client tests."""

import copy
import json
from pathlib import Path

import pytest

from owm_forecast.weather.models import Location
from owm_forecast.weather.options import ClientOptions

DATA_DIR = Path(__file__).parent / "data"

ONECALL_URL = "https://owm.test/data/3.0/onecall"
DIRECT_URL = "https://owm.test/geo/1.0/direct"
ZIP_URL = "https://owm.test/geo/1.0/zip"
ICON_BASE_URL = "https://openweathermap.org/img/wn/"
API_KEY = "123ABC"


@pytest.fixture(scope="session")
def _onecall_payload() -> dict:
    return json.loads((DATA_DIR / "onecall.json").read_text(encoding="utf-8"))


@pytest.fixture
def onecall_payload(_onecall_payload) -> dict:
    """Full One Call response with every section present."""
    return copy.deepcopy(_onecall_payload)


@pytest.fixture
def options() -> ClientOptions:
    """Builder pointed at the test endpoint."""
    return (
        ClientOptions()
        .with_api_key(API_KEY)
        .with_location(Location(lat=33.749, lon=-84.388))
        .with_base_url(ONECALL_URL)
        .with_icon_base_url(ICON_BASE_URL)
    )


@pytest.fixture
def config(options):
    return options.build()
