"""Weather service combining location resolution and forecast retrieval."""

import logging
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional, Union

import httpx

from owm_forecast.config import (
    DEFAULT_LANG, DEFAULT_UNITS_NAME, HTTP_TIMEOUT_SECONDS, OWM_API_KEY, OWM_GEO_DIRECT_URL,
    OWM_GEO_ZIP_URL, OWM_ICON_BASE_URL, OWM_ONECALL_URL
)
from owm_forecast.weather.client import OpenWeatherClient
from owm_forecast.weather.constants import Section, Units
from owm_forecast.weather.errors import MissingLocation
from owm_forecast.weather.geocoding import GeocodingClient
from owm_forecast.weather.models import CityLookupResult, Location, WeatherSnapshot, ZipLocation
from owm_forecast.weather.options import ClientOptions

logger = logging.getLogger(__name__)


class WeatherService:
    """Resolves locations and fetches normalized weather for them."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        onecall_url: str = OWM_ONECALL_URL,
        direct_url: str = OWM_GEO_DIRECT_URL,
        zip_url: str = OWM_GEO_ZIP_URL,
        icon_base_url: str = OWM_ICON_BASE_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        http_client_factory: Optional[Callable[[], httpx.Client]] = None
    ):
        """Initialize the weather service.

        Args:
            api_key: OpenWeatherMap API key (defaults to OWM_API_KEY)
            onecall_url: One Call endpoint
            direct_url: City lookup endpoint
            zip_url: Zip code lookup endpoint
            icon_base_url: Base URL for icon assets
            timeout: Request timeout in seconds
            http_client_factory: Optional factory for the per-call HTTP client;
                each client it makes is closed when the call returns
        """
        self.api_key = api_key if api_key is not None else OWM_API_KEY
        self.onecall_url = onecall_url
        self.direct_url = direct_url
        self.zip_url = zip_url
        self.icon_base_url = icon_base_url
        self.timeout = timeout
        self.http_client_factory = http_client_factory

    @contextmanager
    def _http_client(self) -> Iterator[Optional[httpx.Client]]:
        """Yield a factory-made HTTP client for one call and close it afterwards."""
        if self.http_client_factory is None:
            yield None
            return
        with self.http_client_factory() as http_client:
            yield http_client

    @contextmanager
    def _geocoder(self) -> Iterator[GeocodingClient]:
        with self._http_client() as http_client, GeocodingClient(
            self.api_key,
            direct_url=self.direct_url,
            zip_url=self.zip_url,
            timeout=self.timeout,
            http_client=http_client
        ) as geocoder:
            yield geocoder

    def lookup_city(self, query: str, limit: Optional[int] = None) -> CityLookupResult:
        """Look up locations matching a city name."""
        with self._geocoder() as geocoder:
            if limit is None:
                return geocoder.by_city(query)
            return geocoder.by_city(query, limit=limit)

    def lookup_zip(self, zip_code: str) -> ZipLocation:
        """Look up the location of a zip code."""
        with self._geocoder() as geocoder:
            return geocoder.by_zip(zip_code)

    def resolve_location(
        self,
        *,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        city: Optional[str] = None,
        zip_code: Optional[str] = None
    ) -> Location:
        """Resolve coordinates, a city name or a zip code to a Location.

        Args:
            lat: Latitude (with lon)
            lon: Longitude (with lat)
            city: City name; the first match is used
            zip_code: Zip code and country code

        Returns:
            Location to query

        Raises:
            MissingLocation: If nothing resolvable was given or the city has no match
        """
        if lat is not None and lon is not None:
            return Location(lat=lat, lon=lon)

        if zip_code:
            return self.lookup_zip(zip_code).location

        if city:
            result = self.lookup_city(city, limit=1)
            if not result.entities:
                logger.warning(f"No geocoding match for city '{city}'")
                raise MissingLocation(f"City '{city}' not found")
            match = result.entities[0]
            logger.info(f"Resolved '{city}' to {match.name}, {match.country} ({match.lat}, {match.lon})")
            return match.location

        raise MissingLocation("Must provide coordinates, a city name or a zip code")

    def get_weather(
        self,
        location: Location,
        *,
        units: Union[Units, str] = DEFAULT_UNITS_NAME,
        lang: str = DEFAULT_LANG,
        excludes: Iterable[Union[Section, str]] = ()
    ) -> WeatherSnapshot:
        """Fetch the weather for a location.

        Args:
            location: Location to query
            units: Unit system; unknown values fall back to metric
            lang: Language code; unknown values fall back to English
            excludes: Sections to leave out of the response

        Returns:
            Normalized and enriched WeatherSnapshot

        Raises:
            MissingCredential: If no API key is configured
            TransportError: If the request fails
            APIError: If the service rejects the request
            DecodeError: If the response is malformed
            EnrichmentError: If an icon URL cannot be built
        """
        config = (
            ClientOptions()
            .with_api_key(self.api_key)
            .with_location(location)
            .with_units(units)
            .with_language(lang)
            .with_excludes(excludes)
            .with_base_url(self.onecall_url)
            .with_icon_base_url(self.icon_base_url)
            .with_timeout(self.timeout)
            .build()
        )

        with self._http_client() as http_client, OpenWeatherClient(config, http_client=http_client) as client:
            return client.get_weather()
