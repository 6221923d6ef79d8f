"""Configuration settings for the OpenWeatherMap forecast client."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# API Configuration
OWM_ONECALL_URL: Final[str] = os.getenv("OWM_ONECALL_URL", "https://api.openweathermap.org/data/3.0/onecall")
OWM_GEO_DIRECT_URL: Final[str] = os.getenv("OWM_GEO_DIRECT_URL", "https://api.openweathermap.org/geo/1.0/direct")
OWM_GEO_ZIP_URL: Final[str] = os.getenv("OWM_GEO_ZIP_URL", "https://api.openweathermap.org/geo/1.0/zip")
OWM_ICON_BASE_URL: Final[str] = os.getenv("OWM_ICON_BASE_URL", "https://openweathermap.org/img/wn/")
USER_AGENT: Final[str] = "OWMForecast/0.1 (user@example.com)"

# Credentials
OWM_API_KEY: str = os.getenv("OWM_API_KEY", "")

# Request defaults
DEFAULT_UNITS_NAME: str = os.getenv("DEFAULT_UNITS", "metric")
DEFAULT_LANG: str = os.getenv("DEFAULT_LANG", "en")
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))
GEOCODING_LIMIT: int = int(os.getenv("GEOCODING_LIMIT", "5"))  # Max matches for city lookups

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
