"""Lookup tables and enumerations for the OpenWeatherMap API."""

from enum import Enum
from types import MappingProxyType
from typing import Final, FrozenSet, Mapping


class Units(str, Enum):
    """Unit systems accepted by the One Call API."""
    STANDARD = "standard"
    METRIC = "metric"
    IMPERIAL = "imperial"


class Section(str, Enum):
    """Response sections that can be excluded from a One Call request."""
    CURRENT = "current"
    MINUTELY = "minutely"
    HOURLY = "hourly"
    DAILY = "daily"
    ALERTS = "alerts"


DEFAULT_UNITS: Final[Units] = Units.METRIC
DEFAULT_LANGUAGE: Final[str] = "en"

SUPPORTED_LANGUAGES: Final[FrozenSet[str]] = frozenset({
    "af", "al", "ar", "az", "bg", "ca", "cz", "da", "de", "el", "en", "eu",
    "fa", "fi", "fr", "gl", "he", "hi", "hr", "hu", "id", "it", "ja", "kr",
    "la", "lt", "mk", "no", "nl", "pl", "pt", "pt_br", "ro", "ru", "sv", "se",
    "sk", "sl", "sp", "es", "sr", "th", "tr", "ua", "uk", "vi", "zh_cn", "zh_tw", "zu",
})

ICON_SUFFIX: Final[str] = ".png"

# Icon code -> display symbol, used by the text renderer
ICON_SYMBOLS: Final[Mapping[str, str]] = MappingProxyType({
    "01d": "☀️",
    "01n": "🌙",
    "02d": "🌤️",
    "02n": "🌤️",
    "03d": "🌥️",
    "03n": "🌥️",
    "04d": "⛅",
    "04n": "⛅",
    "09d": "⛈️",
    "09n": "⛈️",
    "10d": "🌧️",
    "10n": "🌧️",
    "11d": "🌩️",
    "11n": "🌩️",
    "13d": "❄️",
    "13n": "❄️",
    "50d": "🌫️",
    "50n": "🌫️",
})

TEMPERATURE_LABELS: Final[Mapping[Units, str]] = MappingProxyType({
    Units.STANDARD: "K",
    Units.METRIC: "°C",
    Units.IMPERIAL: "°F",
})

SPEED_LABELS: Final[Mapping[Units, str]] = MappingProxyType({
    Units.STANDARD: "m/s",
    Units.METRIC: "m/s",
    Units.IMPERIAL: "mph",
})
