"""Decoding of One Call response bodies into WeatherSnapshot."""

import logging

from pydantic import ValidationError

from owm_forecast.weather.errors import DecodeError
from owm_forecast.weather.models import WeatherSnapshot
from owm_forecast.weather.options import ClientConfiguration

logger = logging.getLogger(__name__)


def normalize(body: str, config: ClientConfiguration) -> WeatherSnapshot:
    """Decode a success body into a WeatherSnapshot.

    Sections missing from the body decode as absent (None). Sections named in
    the configuration's exclusions are cleared even if the service returned
    them, and the resolved unit system is stamped onto the result since the
    service does not echo it.

    Args:
        body: Raw response body
        config: Configuration used for the request

    Returns:
        Normalized snapshot

    Raises:
        DecodeError: If the body is not valid JSON or does not match the schema
    """
    try:
        snapshot = WeatherSnapshot.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Invalid One Call response format: {e}\nRaw body: {body}")
        raise DecodeError("Invalid One Call response format", raw_body=body, cause=e) from e

    for section in config.excludes:
        if snapshot.has_section(section):
            logger.debug(f"Dropping excluded section '{section.value}' returned by the service")
            setattr(snapshot, section.value, None)

    snapshot.units = config.units

    logger.info(f"Decoded forecast for ({snapshot.lat}, {snapshot.lon}) with sections "
                f"{sorted(section.value for section in snapshot.present_sections())}")
    return snapshot
