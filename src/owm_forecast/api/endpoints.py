"""API endpoints for the OpenWeatherMap forecast service."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response

from owm_forecast.config import DEFAULT_LANG, DEFAULT_UNITS_NAME, GEOCODING_LIMIT
from owm_forecast.weather.constants import Section
from owm_forecast.weather.errors import (
    APIError, DecodeError, EnrichmentError, MissingCredential, MissingLocation,
    OpenWeatherError, TransportError
)
from owm_forecast.weather.serialization import MEDIA_TYPES, OutputFormat, serialize
from owm_forecast.weather.service import WeatherService
from owm_forecast.weather.text import render_location_text, render_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])

FORMAT_PATTERN = "^(json|yaml|toml|text)$"


def get_weather_service() -> WeatherService:
    """Dependency to get weather service instance."""
    return WeatherService()


def http_error(error: OpenWeatherError) -> HTTPException:
    """Translate a client error into an HTTPException."""
    if isinstance(error, MissingCredential):
        logger.error(f"Service misconfigured: {error}")
        return HTTPException(status_code=500, detail="Weather service is not configured with an API key")
    if isinstance(error, MissingLocation):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, APIError):
        status_code = error.code if 400 <= error.code < 500 else 502
        return HTTPException(status_code=status_code, detail=error.message)
    if isinstance(error, (TransportError, DecodeError)):
        return HTTPException(status_code=502, detail="Weather service temporarily unavailable")
    if isinstance(error, EnrichmentError):
        return HTTPException(status_code=500, detail="Internal server error: invalid icon configuration")
    return HTTPException(status_code=500, detail=str(error))


def parse_excludes(exclude: Optional[str]) -> List[str]:
    """Split a comma separated exclude parameter."""
    if not exclude:
        return []
    return [part.strip() for part in exclude.split(",") if part.strip()]


@router.get("/")
def get_weather(
    lat: Optional[float] = Query(
        None,
        ge=-90,
        le=90,
        description="Latitude in decimal degrees (use with lon)"
    ),
    lon: Optional[float] = Query(
        None,
        ge=-180,
        le=180,
        description="Longitude in decimal degrees (use with lat)"
    ),
    city: Optional[str] = Query(
        None,
        description="City name, optionally with state and country code"
    ),
    zip_code: Optional[str] = Query(
        None,
        alias="zip",
        description="Zip code and country code, e.g. 30318,US"
    ),
    units: str = Query(DEFAULT_UNITS_NAME, description="standard, metric or imperial"),
    lang: str = Query(DEFAULT_LANG, description="Language code"),
    exclude: Optional[str] = Query(
        None,
        description="Comma separated sections to exclude: current, minutely, hourly, daily, alerts"
    ),
    output_format: str = Query("json", alias="format", pattern=FORMAT_PATTERN),
    brief: bool = Query(False, description="Brief text output"),
    service: WeatherService = Depends(get_weather_service)
) -> Response:
    """Get the One Call weather for a location in the requested format.

    Args:
        lat: Latitude in decimal degrees (must provide with lon)
        lon: Longitude in decimal degrees (must provide with lat)
        city: City name as alternative to lat/lon
        zip_code: Zip code as alternative to lat/lon
        units: Unit system
        lang: Language code
        exclude: Sections to exclude
        output_format: json, yaml, toml or text
        brief: Shorter text output
        service: Weather service

    Returns:
        Serialized weather snapshot

    Raises:
        HTTPException: If parameters are invalid or the request fails
    """
    validate_location_parameters(lat, lon, city, zip_code)

    try:
        location = service.resolve_location(lat=lat, lon=lon, city=city, zip_code=zip_code)
        snapshot = service.get_weather(
            location,
            units=units,
            lang=lang,
            excludes=parse_excludes(exclude)
        )
    except OpenWeatherError as e:
        logger.error(f"Error getting weather: {e}")
        raise http_error(e) from e

    logger.info(f"Successfully retrieved weather with sections "
                f"{sorted(section.value for section in snapshot.present_sections())}")

    if output_format == "text":
        return PlainTextResponse(render_text(snapshot, brief=brief))
    fmt = OutputFormat(output_format)
    return Response(content=serialize(snapshot, fmt), media_type=MEDIA_TYPES[fmt])


@router.get("/lookup")
def lookup_location(
    city: Optional[str] = Query(None, description="City name, optionally with state and country code"),
    zip_code: Optional[str] = Query(None, alias="zip", description="Zip code and country code"),
    limit: int = Query(GEOCODING_LIMIT, ge=1, le=5, description="Maximum city matches"),
    output_format: str = Query("json", alias="format", pattern=FORMAT_PATTERN),
    service: WeatherService = Depends(get_weather_service)
) -> Response:
    """Look up coordinates for a city name or zip code.

    Raises:
        HTTPException: If parameters are invalid or the request fails
    """
    if (city is None) == (zip_code is None):
        raise HTTPException(status_code=400, detail="Provide exactly one of city or zip.")

    try:
        if zip_code is not None:
            result = service.lookup_zip(zip_code)
        else:
            result = service.lookup_city(city, limit=limit)
    except OpenWeatherError as e:
        logger.error(f"Error looking up location: {e}")
        raise http_error(e) from e

    if output_format == "text":
        return PlainTextResponse(render_location_text(result))
    fmt = OutputFormat(output_format)
    return Response(content=serialize(result, fmt), media_type=MEDIA_TYPES[fmt])


def validate_location_parameters(
    lat: Optional[float],
    lon: Optional[float],
    city: Optional[str],
    zip_code: Optional[str]
):
    """
    Validate location request parameters.

    Args:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        city: City name
        zip_code: Zip code

    Raises:
        HTTPException: If validation fails
    """
    has_coordinates = lat is not None or lon is not None
    given = sum([has_coordinates, city is not None, zip_code is not None])

    if given > 1:
        raise HTTPException(
            status_code=400,
            detail="Provide only one of lat/lon, city or zip."
        )

    if given == 0:
        raise HTTPException(
            status_code=400,
            detail="A location is required: lat/lon, city or zip."
        )

    if has_coordinates and (lat is None or lon is None):
        raise HTTPException(
            status_code=400,
            detail="Both latitude and longitude must be provided when using coordinates."
        )


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "owm-forecast"}


@router.get("/info")
def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including defaults and supported formats
    """
    return {
        "service": "OpenWeatherMap Forecast Service",
        "version": "0.1.0",
        "defaults": {
            "units": DEFAULT_UNITS_NAME,
            "lang": DEFAULT_LANG
        },
        "formats": [fmt.value for fmt in OutputFormat] + ["text"],
        "sections": [section.value for section in Section],
        "data_source": "OpenWeatherMap One Call and Geocoding APIs"
    }
