import json
from datetime import datetime, timezone

import pytest

from owm_forecast.weather.constants import Section, Units
from owm_forecast.weather.errors import DecodeError
from owm_forecast.weather.normalizer import normalize


def test_full_payload(config, onecall_payload):
    weather = normalize(json.dumps(onecall_payload), config)

    assert weather.timezone_offset == -14400
    assert weather.current.dt == datetime(2022, 8, 30, 16, 11, 26, tzinfo=timezone.utc)
    assert len(weather.minutely) == 2
    assert len(weather.hourly) == 2
    assert weather.hourly[0].rain is None
    assert weather.hourly[1].rain == 0.37
    assert weather.daily[0].rain == 6.41
    assert weather.daily[0].temp.max == 28.1
    assert weather.daily[0].feels_like.morn == 21.2
    assert weather.daily[0].summary.startswith("Expect")
    assert weather.alerts[0].event == "Heat Advisory"
    assert weather.alerts[0].end > weather.alerts[0].start


def test_missing_sections_decode_as_absent(config, onecall_payload):
    for key in ("minutely", "hourly", "daily", "alerts"):
        del onecall_payload[key]

    weather = normalize(json.dumps(onecall_payload), config)

    assert weather.present_sections() == {Section.CURRENT}
    assert not weather.has_section(Section.HOURLY)


def test_empty_section_is_present(config, onecall_payload):
    onecall_payload["alerts"] = []

    weather = normalize(json.dumps(onecall_payload), config)

    assert weather.alerts == []
    assert weather.has_section(Section.ALERTS)


def test_excluded_current_is_cleared(options, onecall_payload):
    config = options.with_excludes(["current", "minutely"]).build()

    weather = normalize(json.dumps(onecall_payload), config)

    assert weather.current is None
    assert weather.minutely is None
    assert weather.present_sections() == {Section.HOURLY, Section.DAILY, Section.ALERTS}


def test_units_are_stamped(options, onecall_payload):
    config = options.with_units("standard").build()

    assert normalize(json.dumps(onecall_payload), config).units is Units.STANDARD


def test_unknown_fields_are_ignored(config, onecall_payload):
    onecall_payload["current"]["new_metric"] = 42
    onecall_payload["extra"] = {"anything": True}

    weather = normalize(json.dumps(onecall_payload), config)

    assert weather.current.temp == 24.6


def test_empty_condition_list_is_rejected(config, onecall_payload):
    onecall_payload["current"]["weather"] = []

    with pytest.raises(DecodeError):
        normalize(json.dumps(onecall_payload), config)


@pytest.mark.parametrize("body", ["", "[]", "null", "<html></html>", '{"lon": 1.0}'])
def test_malformed_body(config, body):
    with pytest.raises(DecodeError) as exc_info:
        normalize(body, config)

    assert exc_info.value.raw_body == body
