import json
import tomllib

import httpx
import pytest
import respx
import yaml
from fastapi.testclient import TestClient

from conftest import API_KEY, DIRECT_URL, ICON_BASE_URL, ONECALL_URL, ZIP_URL
from owm_forecast.api.endpoints import get_weather_service
from owm_forecast.config import DEFAULT_UNITS_NAME
from owm_forecast.main import app
from owm_forecast.weather.service import WeatherService


def _service(api_key: str = API_KEY) -> WeatherService:
    return WeatherService(
        api_key,
        onecall_url=ONECALL_URL,
        direct_url=DIRECT_URL,
        zip_url=ZIP_URL,
        icon_base_url=ICON_BASE_URL
    )


@pytest.fixture
def client():
    app.dependency_overrides[get_weather_service] = _service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def owm_router():
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def onecall_route(owm_router, onecall_payload):
    return owm_router.get(ONECALL_URL).mock(return_value=httpx.Response(200, json=onecall_payload))


def test_weather_json(client, onecall_route):
    response = client.get("/weather/", params={"lat": 33.749, "lon": -84.388, "exclude": "minutely"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    data = response.json()
    assert data["units"] == "metric"
    assert data["minutely"] is None
    assert data["current"]["weather"][0]["icon_url"] == f"{ICON_BASE_URL}10d.png"
    assert onecall_route.calls.last.request.url.params["exclude"] == "minutely"


def test_weather_yaml(client, onecall_route):
    response = client.get("/weather/", params={"lat": 33.749, "lon": -84.388, "format": "yaml"})

    assert response.status_code == 200
    assert yaml.safe_load(response.text)["timezone"] == "America/New_York"


def test_weather_toml(client, onecall_route):
    response = client.get("/weather/", params={
        "lat": 33.749, "lon": -84.388, "format": "toml", "units": "imperial"
    })

    assert response.status_code == 200
    data = tomllib.loads(response.text)
    assert data["units"] == "imperial"
    assert len(data["daily"]) == 2


def test_weather_text(client, onecall_route):
    response = client.get("/weather/", params={
        "lat": 33.749, "lon": -84.388, "format": "text", "brief": True
    })

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "Current weather for 33.749, -84.388" in response.text


def test_weather_by_city(client, owm_router, onecall_route):
    owm_router.get(DIRECT_URL).mock(return_value=httpx.Response(200, json=[
        {"name": "Atlanta", "lat": 33.749, "lon": -84.388, "country": "US"},
    ]))

    response = client.get("/weather/", params={"city": "Atlanta"})

    assert response.status_code == 200
    assert onecall_route.calls.last.request.url.params["lat"] == "33.749000"


@pytest.mark.parametrize("params", [
    {},
    {"lat": 33.749},
    {"lat": 33.749, "lon": -84.388, "city": "Atlanta"},
    {"city": "Atlanta", "zip": "30318,US"},
])
def test_weather_location_validation(client, params):
    response = client.get("/weather/", params=params)

    assert response.status_code == 400


def test_weather_unknown_format(client):
    response = client.get("/weather/", params={"lat": 1.0, "lon": 2.0, "format": "xml"})

    assert response.status_code == 422


def test_weather_city_not_found(client):
    with respx.mock:
        respx.get(DIRECT_URL).mock(return_value=httpx.Response(200, json=[]))
        response = client.get("/weather/", params={"city": "Nowhere"})

    assert response.status_code == 400


def test_weather_remote_client_error(client):
    with respx.mock:
        respx.get(ONECALL_URL).mock(
            return_value=httpx.Response(401, json={"cod": 401, "message": "Invalid API key."})
        )
        response = client.get("/weather/", params={"lat": 1.0, "lon": 2.0})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid API key."


def test_weather_remote_server_error(client):
    with respx.mock:
        respx.get(ONECALL_URL).mock(
            return_value=httpx.Response(500, json={"cod": 500, "message": "Internal error"})
        )
        response = client.get("/weather/", params={"lat": 1.0, "lon": 2.0})

    assert response.status_code == 502


def test_weather_transport_error(client):
    with respx.mock:
        respx.get(ONECALL_URL).mock(side_effect=httpx.ConnectError("connection refused"))
        response = client.get("/weather/", params={"lat": 1.0, "lon": 2.0})

    assert response.status_code == 502


def test_weather_without_api_key():
    app.dependency_overrides[get_weather_service] = lambda: _service(api_key="")
    try:
        with TestClient(app) as test_client:
            response = test_client.get("/weather/", params={"lat": 1.0, "lon": 2.0})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500


def test_lookup_zip(client):
    with respx.mock:
        respx.get(ZIP_URL).mock(return_value=httpx.Response(200, json={
            "zip": "30318", "name": "Atlanta", "lat": 33.7865, "lon": -84.4454, "country": "US"
        }))
        response = client.get("/weather/lookup", params={"zip": "30318,US"})

    assert response.status_code == 200
    assert response.json()["name"] == "Atlanta"


def test_lookup_city_text(client):
    with respx.mock:
        route = respx.get(DIRECT_URL).mock(return_value=httpx.Response(200, json=[
            {"name": "Atlanta", "lat": 33.749, "lon": -84.388, "country": "US"},
        ]))
        response = client.get("/weather/lookup", params={"city": "Atlanta", "limit": 3, "format": "text"})

    assert response.status_code == 200
    assert "Name:     Atlanta" in response.text
    assert route.calls.last.request.url.params["limit"] == "3"


def test_lookup_requires_one_parameter(client):
    assert client.get("/weather/lookup").status_code == 400
    assert client.get("/weather/lookup", params={"city": "a", "zip": "b"}).status_code == 400


def test_health(client):
    response = client.get("/weather/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "owm-forecast"}


def test_info(client):
    data = client.get("/weather/info").json()

    assert data["defaults"]["units"] == DEFAULT_UNITS_NAME
    assert data["formats"] == ["json", "yaml", "toml", "text"]
    assert "alerts" in data["sections"]
