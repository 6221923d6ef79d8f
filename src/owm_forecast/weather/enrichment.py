"""Derived fields computed after normalization."""

import logging
from typing import Iterator

import httpx

from owm_forecast.weather.constants import ICON_SUFFIX
from owm_forecast.weather.errors import EnrichmentError
from owm_forecast.weather.models import Condition, WeatherSnapshot

logger = logging.getLogger(__name__)


def build_icon_url(icon_base_url: str, icon: str) -> str:
    """Join the icon base URL with an icon code.

    Args:
        icon_base_url: Base path, e.g. https://openweathermap.org/img/wn/
        icon: Icon code, e.g. 10d

    Returns:
        Absolute icon URL

    Raises:
        EnrichmentError: If the result is not an absolute http(s) URL
    """
    candidate = f"{icon_base_url}{icon}{ICON_SUFFIX}"
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as e:
        raise EnrichmentError(f"Malformed icon URL '{candidate}'", cause=e) from e

    if url.scheme not in ("http", "https") or not url.host:
        raise EnrichmentError(f"Malformed icon URL '{candidate}'")
    return str(url)


def iter_conditions(snapshot: WeatherSnapshot) -> Iterator[Condition]:
    """Yield every condition of the current, hourly and daily sections."""
    if snapshot.current is not None:
        yield from snapshot.current.weather
    for entry in snapshot.hourly or []:
        yield from entry.weather
    for entry in snapshot.daily or []:
        yield from entry.weather


def enrich(snapshot: WeatherSnapshot, icon_base_url: str) -> WeatherSnapshot:
    """Attach icon URLs to every condition with an icon code.

    Conditions without an icon code keep icon_url unset. Running the pass
    again yields the same URLs.

    Args:
        snapshot: Normalized snapshot, modified in place
        icon_base_url: Base path for icon assets

    Returns:
        The same snapshot

    Raises:
        EnrichmentError: If an icon URL cannot be built
    """
    count = 0
    for condition in iter_conditions(snapshot):
        if not condition.icon:
            continue
        try:
            condition.icon_url = build_icon_url(icon_base_url, condition.icon)
        except EnrichmentError as e:
            logger.error(f"Error building icon URL: {e}")
            raise
        count += 1

    logger.debug(f"Attached {count} icon URLs")
    return snapshot
