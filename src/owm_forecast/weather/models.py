"""Data models for the OpenWeatherMap forecast client."""

from datetime import datetime
from typing import Annotated, Any, Dict, FrozenSet, List, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from owm_forecast.weather.constants import Section, Units


def _flatten_precipitation(value: Any) -> Any:
    # Current and hourly entries report {"1h": mm}, daily entries a bare number
    if isinstance(value, dict):
        return value.get("1h", value.get("3h"))
    return value


Precipitation = Annotated[Optional[float], BeforeValidator(_flatten_precipitation)]


class Location(BaseModel):
    """Geographic coordinates; the remote service validates ranges."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., description="Latitude in decimal degrees")
    lon: float = Field(..., description="Longitude in decimal degrees")


class Condition(BaseModel):
    """Weather condition reported for a point in time."""
    id: int = Field(..., description="OpenWeatherMap condition code")
    main: str = Field(..., description="Condition group, e.g. Rain")
    description: str = Field("", description="Condition description in the requested language")
    icon: str = Field("", description="Icon code, e.g. 10d")
    icon_url: Optional[str] = Field(None, description="Derived icon asset URL")


class CurrentWeather(BaseModel):
    """Current conditions block."""
    dt: datetime = Field(..., description="Observation time (UTC)")
    sunrise: Optional[datetime] = Field(None, description="Sunrise time (UTC)")
    sunset: Optional[datetime] = Field(None, description="Sunset time (UTC)")
    temp: float = Field(..., description="Temperature")
    feels_like: Optional[float] = Field(None, description="Apparent temperature")
    pressure: Optional[int] = Field(None, description="Sea level pressure in hPa")
    humidity: Optional[int] = Field(None, description="Humidity in %")
    dew_point: Optional[float] = Field(None, description="Dew point temperature")
    clouds: Optional[int] = Field(None, description="Cloudiness in %")
    uvi: Optional[float] = Field(None, description="UV index")
    visibility: Optional[int] = Field(None, description="Visibility in metres")
    wind_speed: Optional[float] = Field(None, description="Wind speed")
    wind_gust: Optional[float] = Field(None, description="Wind gust")
    wind_deg: Optional[int] = Field(None, description="Wind direction in degrees")
    rain: Precipitation = Field(None, description="Rain volume in mm")
    snow: Precipitation = Field(None, description="Snow volume in mm")
    weather: List[Condition] = Field(..., min_length=1, description="Conditions, primary first")


class HourlyWeather(BaseModel):
    """Hourly forecast entry."""
    dt: datetime = Field(..., description="Forecast time (UTC)")
    temp: float = Field(..., description="Temperature")
    feels_like: Optional[float] = Field(None, description="Apparent temperature")
    pressure: Optional[int] = Field(None, description="Sea level pressure in hPa")
    humidity: Optional[int] = Field(None, description="Humidity in %")
    dew_point: Optional[float] = Field(None, description="Dew point temperature")
    uvi: Optional[float] = Field(None, description="UV index")
    clouds: Optional[int] = Field(None, description="Cloudiness in %")
    visibility: Optional[int] = Field(None, description="Visibility in metres")
    wind_speed: Optional[float] = Field(None, description="Wind speed")
    wind_gust: Optional[float] = Field(None, description="Wind gust")
    wind_deg: Optional[int] = Field(None, description="Wind direction in degrees")
    pop: Optional[float] = Field(None, description="Probability of precipitation, 0-1")
    rain: Precipitation = Field(None, description="Rain volume in mm")
    snow: Precipitation = Field(None, description="Snow volume in mm")
    weather: List[Condition] = Field(..., min_length=1, description="Conditions, primary first")


class DailyTemperature(BaseModel):
    """Temperatures over the periods of a day."""
    morn: Optional[float] = None
    day: float
    eve: Optional[float] = None
    night: Optional[float] = None
    min: float
    max: float


class DailyFeelsLike(BaseModel):
    """Apparent temperatures over the periods of a day."""
    morn: Optional[float] = None
    day: Optional[float] = None
    eve: Optional[float] = None
    night: Optional[float] = None


class DailyWeather(BaseModel):
    """Daily forecast entry."""
    dt: datetime = Field(..., description="Forecast day, midday (UTC)")
    sunrise: Optional[datetime] = Field(None, description="Sunrise time (UTC)")
    sunset: Optional[datetime] = Field(None, description="Sunset time (UTC)")
    moonrise: Optional[datetime] = Field(None, description="Moonrise time (UTC)")
    moonset: Optional[datetime] = Field(None, description="Moonset time (UTC)")
    moon_phase: Optional[float] = Field(None, description="Moon phase, 0-1")
    summary: Optional[str] = Field(None, description="Human readable day summary")
    temp: DailyTemperature = Field(..., description="Temperatures by period")
    feels_like: DailyFeelsLike = Field(default_factory=DailyFeelsLike, description="Apparent temperatures by period")
    pressure: Optional[int] = Field(None, description="Sea level pressure in hPa")
    humidity: Optional[int] = Field(None, description="Humidity in %")
    dew_point: Optional[float] = Field(None, description="Dew point temperature")
    wind_speed: Optional[float] = Field(None, description="Wind speed")
    wind_gust: Optional[float] = Field(None, description="Wind gust")
    wind_deg: Optional[int] = Field(None, description="Wind direction in degrees")
    clouds: Optional[int] = Field(None, description="Cloudiness in %")
    uvi: Optional[float] = Field(None, description="UV index")
    pop: Optional[float] = Field(None, description="Probability of precipitation, 0-1")
    rain: Precipitation = Field(None, description="Rain volume in mm")
    snow: Precipitation = Field(None, description="Snow volume in mm")
    weather: List[Condition] = Field(..., min_length=1, description="Conditions, primary first")


class MinutelyPrecipitation(BaseModel):
    """Minute-level precipitation for the next hour."""
    dt: datetime = Field(..., description="Forecast time (UTC)")
    precipitation: float = Field(0.0, description="Precipitation in mm/h")


class Alert(BaseModel):
    """Government weather alert."""
    sender_name: str = Field("", description="Issuing agency")
    event: str = Field(..., description="Alert event name")
    start: datetime = Field(..., description="Start of the alert (UTC)")
    end: datetime = Field(..., description="End of the alert (UTC)")
    description: str = Field("", description="Alert text")
    tags: List[str] = Field(default_factory=list, description="Alert categories")

    @field_validator("tags")
    @classmethod
    def deduplicate_tags(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


class WeatherSnapshot(BaseModel):
    """Normalized One Call response.

    Optional sections are None when absent. An empty list means the section
    was returned but held no entries.
    """
    units: Units = Field(Units.METRIC, description="Unit system of the values")
    lat: float = Field(..., description="Latitude in decimal degrees")
    lon: float = Field(..., description="Longitude in decimal degrees")
    timezone: Optional[str] = Field(None, description="Timezone name")
    timezone_offset: int = Field(0, description="Shift in seconds from UTC")
    current: Optional[CurrentWeather] = Field(None, description="Current conditions")
    minutely: Optional[List[MinutelyPrecipitation]] = Field(None, description="Minute forecast")
    hourly: Optional[List[HourlyWeather]] = Field(None, description="Hourly forecast")
    daily: Optional[List[DailyWeather]] = Field(None, description="Daily forecast")
    alerts: Optional[List[Alert]] = Field(None, description="Weather alerts")

    @property
    def location(self) -> Location:
        return Location(lat=self.lat, lon=self.lon)

    def has_section(self, section: Section) -> bool:
        """Return True if the given section is present."""
        return getattr(self, Section(section).value) is not None

    def present_sections(self) -> FrozenSet[Section]:
        """Return the set of sections present in this snapshot."""
        return frozenset(section for section in Section if self.has_section(section))


class RemoteErrorPayload(BaseModel):
    """Error body returned by the remote service on failure."""
    code: Optional[int] = Field(None, validation_alias=AliasChoices("cod", "code"), description="Remote error code")
    message: str = Field("", description="Remote error message")


class ZipLocation(BaseModel):
    """Result of a zip/post code lookup."""
    zip: str = Field(..., description="Zip or post code")
    name: str = Field(..., description="Area name")
    lat: float = Field(..., description="Latitude in decimal degrees")
    lon: float = Field(..., description="Longitude in decimal degrees")
    country: str = Field(..., description="ISO 3166 country code")

    @property
    def location(self) -> Location:
        return Location(lat=self.lat, lon=self.lon)


class CityLocation(BaseModel):
    """Single match of a city name lookup."""
    name: str = Field(..., description="City name")
    lat: float = Field(..., description="Latitude in decimal degrees")
    lon: float = Field(..., description="Longitude in decimal degrees")
    country: str = Field(..., description="ISO 3166 country code")
    state: Optional[str] = Field(None, description="State, where available")
    local_names: Dict[str, str] = Field(default_factory=dict, description="Name by language code")

    @property
    def location(self) -> Location:
        return Location(lat=self.lat, lon=self.lon)


class CityLookupResult(BaseModel):
    """Ordered matches of a city name lookup."""
    entities: List[CityLocation] = Field(default_factory=list, description="Matches, best first")
