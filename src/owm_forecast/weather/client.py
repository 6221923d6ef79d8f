"""HTTP client for the OpenWeatherMap One Call API."""

import logging
from typing import Optional

import httpx

from owm_forecast.config import USER_AGENT
from owm_forecast.weather.enrichment import enrich
from owm_forecast.weather.models import WeatherSnapshot
from owm_forecast.weather.normalizer import normalize
from owm_forecast.weather.options import ClientConfiguration
from owm_forecast.weather.request import build_query_params
from owm_forecast.weather.transport import fetch_text

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """Client for fetching One Call weather data for a configured location."""

    def __init__(self, config: ClientConfiguration, http_client: Optional[httpx.Client] = None):
        """Initialize the weather client.

        Args:
            config: Resolved client configuration
            http_client: Optional HTTP client; one is created from the
                configuration when omitted and closed with this client
        """
        self.config = config
        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=config.timeout
        )

    def fetch_raw(self) -> str:
        """Fetch the raw One Call response body.

        Returns:
            Response body of a successful request

        Raises:
            TransportError: If the request fails or its error body is unreadable
            APIError: If the service rejects the request
        """
        params = build_query_params(self.config)
        location = self.config.location
        logger.info(f"Fetching One Call weather for lat={location.lat}, lon={location.lon}, "
                    f"units={self.config.units.value}, lang={self.config.lang}")
        return fetch_text(self.client, self.config.base_url, params)

    def get_weather(self) -> WeatherSnapshot:
        """Fetch, normalize and enrich the weather for the configured location.

        Returns:
            WeatherSnapshot with icon URLs attached

        Raises:
            TransportError: If the request fails
            APIError: If the service rejects the request
            DecodeError: If the response does not match the expected schema
            EnrichmentError: If an icon URL cannot be built
        """
        body = self.fetch_raw()
        snapshot = normalize(body, self.config)
        return enrich(snapshot, self.config.icon_base_url)

    def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
