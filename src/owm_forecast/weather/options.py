"""Client options with validation and fallback to defaults."""

import logging
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from owm_forecast.config import HTTP_TIMEOUT_SECONDS, OWM_ICON_BASE_URL, OWM_ONECALL_URL
from owm_forecast.weather.constants import (
    DEFAULT_LANGUAGE, DEFAULT_UNITS, SUPPORTED_LANGUAGES, Section, Units
)
from owm_forecast.weather.errors import MissingCredential, MissingLocation
from owm_forecast.weather.models import Location

logger = logging.getLogger(__name__)


class ClientConfiguration(BaseModel):
    """Fully resolved, immutable settings for a weather client."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="OpenWeatherMap API key")
    location: Location = Field(..., description="Location to query")
    units: Units = Field(DEFAULT_UNITS, description="Resolved unit system")
    lang: str = Field(DEFAULT_LANGUAGE, description="Resolved language code")
    excludes: Tuple[Section, ...] = Field((), description="Sections excluded from the response")
    base_url: str = Field(OWM_ONECALL_URL, description="One Call endpoint")
    icon_base_url: str = Field(OWM_ICON_BASE_URL, description="Base URL for icon assets")
    timeout: float = Field(HTTP_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds")

    @property
    def excluded_sections(self) -> FrozenSet[Section]:
        return frozenset(self.excludes)


def resolve_units(units: Union[Units, str, None]) -> Units:
    """Map a unit system input to a supported value.

    Args:
        units: Units member or its name, case-insensitive

    Returns:
        Matching Units member, or metric for unknown input
    """
    if isinstance(units, Units):
        return units
    try:
        return Units(str(units).strip().lower())
    except ValueError:
        logger.warning(f"Unsupported units '{units}', falling back to {DEFAULT_UNITS.value}")
        return DEFAULT_UNITS


def resolve_language(lang: Optional[str]) -> str:
    """Check a language code against the supported list.

    Args:
        lang: Language code, e.g. 'de' or 'pt_br'

    Returns:
        The code if supported, otherwise the default language
    """
    if lang in SUPPORTED_LANGUAGES:
        return lang
    logger.warning(f"Unsupported language '{lang}', falling back to {DEFAULT_LANGUAGE}")
    return DEFAULT_LANGUAGE


def resolve_timeout(timeout: Union[float, int, str, None]) -> float:
    """Check a request timeout.

    Args:
        timeout: Timeout in seconds

    Returns:
        The timeout if it is a positive number, otherwise HTTP_TIMEOUT_SECONDS
    """
    try:
        value = float(timeout)
    except (TypeError, ValueError):
        value = 0.0
    if value > 0:
        return value
    logger.warning(f"Invalid timeout '{timeout}', falling back to {HTTP_TIMEOUT_SECONDS}")
    return HTTP_TIMEOUT_SECONDS


def resolve_excludes(sections: Iterable[Union[Section, str]]) -> Tuple[Section, ...]:
    """Keep recognized section names once, in first-seen order.

    Args:
        sections: Section members or names

    Returns:
        Tuple of recognized sections; unknown names are dropped
    """
    resolved = []
    for item in sections:
        try:
            section = item if isinstance(item, Section) else Section(str(item).strip().lower())
        except ValueError:
            logger.warning(f"Ignoring unknown exclude section '{item}'")
            continue
        if section not in resolved:
            resolved.append(section)
    return tuple(resolved)


class ClientOptions:
    """Builder for ClientConfiguration.

    Setters are applied in call order and return the builder, so later calls
    override earlier ones for the same field. Invalid units, languages,
    timeouts and exclude names fall back to defaults with a warning; only a missing API key
    or location fails the build.

    Example:
        config = (
            ClientOptions()
            .with_api_key("abc123")
            .with_location(Location(lat=33.749, lon=-84.388))
            .with_units("imperial")
            .with_excludes(["minutely", "alerts"])
            .build()
        )
    """

    def __init__(self):
        self._api_key: Optional[str] = None
        self._location: Optional[Location] = None
        self._units: Units = DEFAULT_UNITS
        self._lang: str = DEFAULT_LANGUAGE
        self._excludes: Tuple[Section, ...] = ()
        self._base_url: str = OWM_ONECALL_URL
        self._icon_base_url: str = OWM_ICON_BASE_URL
        self._timeout: float = HTTP_TIMEOUT_SECONDS

    def with_api_key(self, api_key: Optional[str]) -> "ClientOptions":
        self._api_key = api_key
        return self

    def with_location(self, location: Optional[Location]) -> "ClientOptions":
        self._location = location
        return self

    def with_coordinates(self, lat: float, lon: float) -> "ClientOptions":
        return self.with_location(Location(lat=lat, lon=lon))

    def with_units(self, units: Union[Units, str, None]) -> "ClientOptions":
        self._units = resolve_units(units)
        return self

    def with_language(self, lang: Optional[str]) -> "ClientOptions":
        self._lang = resolve_language(lang)
        return self

    def with_excludes(self, sections: Iterable[Union[Section, str]]) -> "ClientOptions":
        self._excludes = resolve_excludes(sections)
        return self

    def with_base_url(self, base_url: str) -> "ClientOptions":
        self._base_url = base_url
        return self

    def with_icon_base_url(self, icon_base_url: str) -> "ClientOptions":
        self._icon_base_url = icon_base_url
        return self

    def with_timeout(self, timeout: Union[float, int, str, None]) -> "ClientOptions":
        self._timeout = resolve_timeout(timeout)
        return self

    def build(self) -> ClientConfiguration:
        """Resolve the options into an immutable configuration.

        Returns:
            ClientConfiguration

        Raises:
            MissingCredential: If no API key was supplied
            MissingLocation: If no location was supplied
        """
        if not self._api_key:
            raise MissingCredential()
        if self._location is None:
            raise MissingLocation()

        return ClientConfiguration(
            api_key=self._api_key,
            location=self._location,
            units=self._units,
            lang=self._lang,
            excludes=self._excludes,
            base_url=self._base_url,
            icon_base_url=self._icon_base_url,
            timeout=self._timeout
        )
