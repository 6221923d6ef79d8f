"""Human readable rendering of snapshots and lookup results."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

from owm_forecast.weather.constants import ICON_SYMBOLS, SPEED_LABELS, TEMPERATURE_LABELS
from owm_forecast.weather.models import (
    CityLookupResult, Condition, DailyWeather, HourlyWeather, WeatherSnapshot, ZipLocation
)

BRIEF_HOURS = 12


def _local(snapshot: WeatherSnapshot, value: Optional[datetime]) -> str:
    if value is None:
        return "n/a"
    tz = timezone(timedelta(seconds=snapshot.timezone_offset))
    return value.astimezone(tz).strftime("%Y-%m-%d %H:%M")


def _day(snapshot: WeatherSnapshot, value: datetime) -> str:
    tz = timezone(timedelta(seconds=snapshot.timezone_offset))
    return value.astimezone(tz).strftime("%A (%Y %B %d)")


def _num(value: Optional[float], fmt: str = ".1f") -> str:
    return "n/a" if value is None else format(value, fmt)


def _condition(conditions: List[Condition]) -> str:
    primary = conditions[0]
    symbol = ICON_SYMBOLS.get(primary.icon, "")
    return f"{symbol} {primary.main} ({primary.description})".strip()


def _pop(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value * 100:.0f}%"


def _hour_line(snapshot: WeatherSnapshot, hour: HourlyWeather, unit: str, speed: str) -> str:
    return (f"{_local(snapshot, hour.dt)} {_condition(hour.weather)} "
            f"Temp: {_num(hour.temp)}{unit} Wind: {_num(hour.wind_speed)} {speed} "
            f"Precip: {_pop(hour.pop)}")


def _day_lines(snapshot: WeatherSnapshot, day: DailyWeather, unit: str, speed: str) -> List[str]:
    return [
        _day(snapshot, day.dt),
        f"  {_condition(day.weather)}",
        f"  High {_num(day.temp.max)}{unit} Low {_num(day.temp.min)}{unit}",
        f"  Morning: {_num(day.temp.morn)}{unit} ({_num(day.feels_like.morn)}{unit})",
        f"  Day: {_num(day.temp.day)}{unit} ({_num(day.feels_like.day)}{unit})",
        f"  Evening: {_num(day.temp.eve)}{unit} ({_num(day.feels_like.eve)}{unit})",
        f"  Night: {_num(day.temp.night)}{unit} ({_num(day.feels_like.night)}{unit})",
        f"  Wind speed: {_num(day.wind_speed)} {speed} (gust {_num(day.wind_gust)} {speed}) "
        f"from {_num(day.wind_deg, 'd')}°",
        f"  Cloudiness: {_num(day.clouds, 'd')}% UV: {_num(day.uvi)}",
        f"  Probability of precipitation: {_pop(day.pop)}",
        f"  Rain: {_num(day.rain or 0.0)} mm Snow: {_num(day.snow or 0.0)} mm",
        f"  Sunrise ({_local(snapshot, day.sunrise)}) Sunset ({_local(snapshot, day.sunset)})",
    ]


def render_text(snapshot: WeatherSnapshot, brief: bool = False) -> str:
    """Render a snapshot as plain text.

    Args:
        snapshot: Enriched snapshot
        brief: Only show current conditions, daily highs/lows and the next
            twelve hours

    Returns:
        Multi-line text
    """
    unit = TEMPERATURE_LABELS[snapshot.units]
    speed = SPEED_LABELS[snapshot.units]
    lines: List[str] = []

    current = snapshot.current
    if current is not None:
        lines.append(f"Current weather for {snapshot.lat}, {snapshot.lon} as of {_local(snapshot, current.dt)}")
        lines.append(f"  {_condition(current.weather)}")
        lines.append(f"  Temperature: {_num(current.temp)}{unit} Feels like: {_num(current.feels_like)}{unit}")
        if not brief:
            lines.extend([
                f"  Humidity: {_num(current.humidity, 'd')}%",
                f"  Pressure: {_num(current.pressure, 'd')} hPa",
                f"  Dew point: {_num(current.dew_point)}{unit}",
                f"  Wind gust: {_num(current.wind_gust)} {speed}",
                f"  Rain: {_num(current.rain or 0.0)} mm",
                f"  Snow: {_num(current.snow or 0.0)} mm",
                f"  Visibility: {_num(current.visibility, 'd')} m",
                f"  Sunrise: {_local(snapshot, current.sunrise)}",
                f"  Sunset: {_local(snapshot, current.sunset)}",
            ])
        lines.append(f"  Wind speed: {_num(current.wind_speed)} {speed} from {_num(current.wind_deg, 'd')}°")
        lines.append(f"  Cloudiness: {_num(current.clouds, 'd')}% UV index: {_num(current.uvi)}")
    else:
        lines.append(f"Weather for {snapshot.lat}, {snapshot.lon}")

    if snapshot.alerts and not brief:
        lines.append("")
        lines.append("Alerts:")
        for alert in snapshot.alerts:
            lines.append("---")
            lines.append(f"  {alert.sender_name} :: {alert.event}")
            lines.append(f"  From {_local(snapshot, alert.start)} :: Until {_local(snapshot, alert.end)}")
            lines.append(f"  {alert.description}")
        lines.append("---")

    for day in snapshot.daily or []:
        lines.append("")
        if brief:
            lines.append(_day(snapshot, day.dt))
            lines.append(f"  {_condition(day.weather)} High {_num(day.temp.max)}{unit} "
                         f"Low {_num(day.temp.min)}{unit} with {_pop(day.pop)} chance of precipitation")
        else:
            lines.extend(_day_lines(snapshot, day, unit, speed))

    hours = snapshot.hourly or []
    if brief:
        hours = hours[:BRIEF_HOURS]
    if hours:
        lines.append("")
        lines.extend(_hour_line(snapshot, hour, unit, speed) for hour in hours)

    return "\n".join(lines) + "\n"


def render_location_text(result: Union[ZipLocation, CityLookupResult]) -> str:
    """Render a geocoding result as plain text."""
    if isinstance(result, ZipLocation):
        return (f"Name:     {result.name}\nCountry:  {result.country}\nZip:      {result.zip}\n"
                f"Lat:      {result.lat}\nLon:      {result.lon}\n")

    blocks = [
        f"Name:     {entity.name}\nCountry:  {entity.country}\nLat:      {entity.lat}\nLon:      {entity.lon}\n"
        for entity in result.entities
    ]
    return "\n".join(blocks)
