"""Query construction for the One Call endpoint."""

from typing import Dict

import httpx

from owm_forecast.weather.options import ClientConfiguration


def build_query_params(config: ClientConfiguration) -> Dict[str, str]:
    """Build One Call query parameters from a configuration.

    A new dict is returned on every call; nothing is cached between calls.

    Args:
        config: Resolved client configuration

    Returns:
        Query parameters lat, lon, exclude, units, lang and appid
    """
    return {
        "lat": f"{config.location.lat:f}",
        "lon": f"{config.location.lon:f}",
        "exclude": ",".join(section.value for section in config.excludes),
        "units": config.units.value,
        "lang": config.lang,
        "appid": config.api_key,
    }


def build_request_url(config: ClientConfiguration) -> str:
    """Build the fully qualified One Call URL for a configuration."""
    return str(httpx.URL(config.base_url, params=build_query_params(config)))
