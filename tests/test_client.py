import httpx
import pytest
import respx

from conftest import ICON_BASE_URL, ONECALL_URL
from owm_forecast.weather.client import OpenWeatherClient
from owm_forecast.weather.constants import Section, Units
from owm_forecast.weather.errors import APIError, DecodeError, EnrichmentError, TransportError


@respx.mock
def test_get_weather_full_payload(config, onecall_payload):
    route = respx.get(ONECALL_URL).mock(return_value=httpx.Response(200, json=onecall_payload))

    with OpenWeatherClient(config) as client:
        weather = client.get_weather()

    assert route.called
    request = route.calls.last.request
    assert request.url.params["lat"] == "33.749000"
    assert request.url.params["exclude"] == ""
    assert request.url.params["appid"] == "123ABC"

    assert weather.units is Units.METRIC
    assert weather.lat == 33.749
    assert weather.timezone == "America/New_York"
    assert weather.present_sections() == frozenset(Section)
    assert weather.current.rain == 0.54
    assert weather.current.weather[0].icon_url == f"{ICON_BASE_URL}10d.png"
    assert weather.current.weather[1].icon_url == f"{ICON_BASE_URL}50d.png"
    assert weather.hourly[1].weather[0].icon_url == f"{ICON_BASE_URL}10d.png"
    assert weather.daily[1].weather[0].icon_url == f"{ICON_BASE_URL}03d.png"
    assert weather.alerts[0].tags == ["Extreme temperature value"]


@respx.mock
def test_optional_sections_absent(config):
    respx.get(ONECALL_URL).mock(return_value=httpx.Response(200, json={
        "lat": 33.749,
        "lon": -84.388,
        "timezone": "America/New_York",
        "timezone_offset": -14400,
        "current": {
            "dt": 1661875886,
            "temp": 21.5,
            "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        },
    }))

    with OpenWeatherClient(config) as client:
        weather = client.get_weather()

    assert weather.lat == 33.749
    assert weather.current.temp == 21.5
    assert weather.hourly is None
    assert weather.daily is None
    assert weather.alerts is None
    assert weather.minutely is None
    assert weather.present_sections() == {Section.CURRENT}


@respx.mock
def test_excluded_sections_are_absent(options, onecall_payload):
    config = options.with_excludes(["hourly", "daily", "alerts"]).build()
    # Service ignored the exclusion and returned everything anyway
    route = respx.get(ONECALL_URL).mock(return_value=httpx.Response(200, json=onecall_payload))

    with OpenWeatherClient(config) as client:
        weather = client.get_weather()

    assert route.calls.last.request.url.params["exclude"] == "hourly,daily,alerts"
    assert weather.present_sections() == {Section.CURRENT, Section.MINUTELY}


@respx.mock
def test_units_reflect_resolved_configuration(options, onecall_payload):
    onecall_payload["units"] = "standard"
    respx.get(ONECALL_URL).mock(return_value=httpx.Response(200, json=onecall_payload))
    config = options.with_units("imperial").build()

    with OpenWeatherClient(config) as client:
        weather = client.get_weather()

    assert weather.units is Units.IMPERIAL


@respx.mock
def test_api_error(config):
    respx.get(ONECALL_URL).mock(
        return_value=httpx.Response(404, json={"cod": 404, "message": "not found"})
    )

    with OpenWeatherClient(config) as client:
        with pytest.raises(APIError) as exc_info:
            client.get_weather()

    assert exc_info.value.code == 404
    assert exc_info.value.message == "not found"


@respx.mock
def test_api_error_uses_http_status(config):
    respx.get(ONECALL_URL).mock(
        return_value=httpx.Response(401, json={"cod": "401", "message": "Invalid API key."})
    )

    with OpenWeatherClient(config) as client:
        with pytest.raises(APIError) as exc_info:
            client.get_weather()

    assert exc_info.value.code == 401
    assert exc_info.value.message == "Invalid API key."


@respx.mock
def test_undecodable_error_body_is_transport_error(config):
    respx.get(ONECALL_URL).mock(
        return_value=httpx.Response(502, text="<html>Bad Gateway</html>")
    )

    with OpenWeatherClient(config) as client:
        with pytest.raises(TransportError) as exc_info:
            client.get_weather()

    assert not isinstance(exc_info.value, APIError)
    assert exc_info.value.cause is not None


@respx.mock
def test_unparseable_success_body(config):
    respx.get(ONECALL_URL).mock(return_value=httpx.Response(200, text="{not json"))

    with OpenWeatherClient(config) as client:
        with pytest.raises(DecodeError) as exc_info:
            client.get_weather()

    assert exc_info.value.raw_body == "{not json"


@respx.mock
def test_schema_mismatch_is_decode_error(config):
    body = '{"lat": "north", "lon": 1.0}'
    respx.get(ONECALL_URL).mock(return_value=httpx.Response(200, text=body))

    with OpenWeatherClient(config) as client:
        with pytest.raises(DecodeError) as exc_info:
            client.get_weather()

    assert exc_info.value.raw_body == body


@respx.mock
def test_timeout_is_transport_error(config):
    respx.get(ONECALL_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

    with OpenWeatherClient(config) as client:
        with pytest.raises(TransportError) as exc_info:
            client.get_weather()

    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


@respx.mock
def test_connection_failure_is_transport_error(config):
    respx.get(ONECALL_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    with OpenWeatherClient(config) as client:
        with pytest.raises(TransportError):
            client.get_weather()


@respx.mock
def test_bad_icon_base_is_enrichment_error(options, onecall_payload):
    respx.get(ONECALL_URL).mock(return_value=httpx.Response(200, json=onecall_payload))
    config = options.with_icon_base_url("img/wn/").build()

    with OpenWeatherClient(config) as client:
        with pytest.raises(EnrichmentError):
            client.get_weather()


def test_injected_http_client_is_not_closed(config):
    http_client = httpx.Client()

    with OpenWeatherClient(config, http_client=http_client):
        pass

    assert not http_client.is_closed
    http_client.close()


def test_owned_http_client_uses_configured_timeout(options):
    config = options.with_timeout(3.5).build()

    client = OpenWeatherClient(config)
    try:
        assert client.client.timeout.read == 3.5
    finally:
        client.close()

    assert client.client.is_closed
