"""Geocoding client for city and zip code lookups."""

import logging
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from owm_forecast.config import (
    GEOCODING_LIMIT, HTTP_TIMEOUT_SECONDS, OWM_GEO_DIRECT_URL, OWM_GEO_ZIP_URL, USER_AGENT
)
from owm_forecast.weather.errors import DecodeError, MissingCredential
from owm_forecast.weather.models import CityLocation, CityLookupResult, ZipLocation
from owm_forecast.weather.transport import fetch_text

logger = logging.getLogger(__name__)

_city_list = TypeAdapter(list[CityLocation])


class GeocodingClient:
    """Client for the OpenWeatherMap direct and zip geocoding endpoints."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        direct_url: str = OWM_GEO_DIRECT_URL,
        zip_url: str = OWM_GEO_ZIP_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None
    ):
        """Initialize the geocoding client.

        Args:
            api_key: OpenWeatherMap API key
            direct_url: City lookup endpoint
            zip_url: Zip code lookup endpoint
            timeout: Request timeout in seconds
            http_client: Optional HTTP client, closed by the caller

        Raises:
            MissingCredential: If no API key is given
        """
        if not api_key:
            raise MissingCredential()

        self.api_key = api_key
        self.direct_url = direct_url
        self.zip_url = zip_url
        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout
        )

    def by_city(self, query: str, limit: int = GEOCODING_LIMIT) -> CityLookupResult:
        """Look up locations matching a city name.

        Args:
            query: City name, optionally with state and country code
                (e.g. "Atlanta,GA,US")
            limit: Maximum number of matches

        Returns:
            Matches in the order returned by the service

        Raises:
            TransportError: If the request fails
            APIError: If the service rejects the request
            DecodeError: If the response is malformed
        """
        logger.info(f"Geocoding city: {query}")
        params = {"q": query, "limit": str(limit), "appid": self.api_key}
        body = fetch_text(self.client, self.direct_url, params)

        try:
            entities = _city_list.validate_json(body)
        except ValidationError as e:
            logger.error(f"Invalid city lookup response: {e}\nRaw body: {body}")
            raise DecodeError("Invalid city lookup response", raw_body=body, cause=e) from e

        logger.info(f"Found {len(entities)} matches for '{query}'")
        return CityLookupResult(entities=entities)

    def by_zip(self, zip_code: str) -> ZipLocation:
        """Look up the location of a zip or post code.

        Args:
            zip_code: Zip code and ISO 3166 country code divided by comma
                (e.g. "30318,US")

        Returns:
            Location of the zip code

        Raises:
            TransportError: If the request fails
            APIError: If the service rejects the request
            DecodeError: If the response is malformed
        """
        logger.info(f"Geocoding zip code: {zip_code}")
        params = {"zip": zip_code, "appid": self.api_key}
        body = fetch_text(self.client, self.zip_url, params)

        try:
            location = ZipLocation.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Invalid zip lookup response: {e}\nRaw body: {body}")
            raise DecodeError("Invalid zip lookup response", raw_body=body, cause=e) from e

        logger.info(f"Resolved zip '{zip_code}' to {location.name} ({location.lat}, {location.lon})")
        return location

    def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
