"""Align the hourly series to "now" and project the forecast strip."""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from city_weather.config import FORECAST_HOURS
from city_weather.weather.codes import lookup_weather_code
from city_weather.weather.models import (
    CurrentConditions, CurrentSnapshot, ForecastData, ForecastSample,
    HourlySeries, Location
)

logger = logging.getLogger(__name__)

UV_UNAVAILABLE = "N/A"
DEFAULT_DESCRIPTION = "Weather"


def parse_timestamp(value: str) -> datetime:
    """Parse an Open-Meteo timestamp into a naive datetime.

    Forecasts requested with timezone=auto carry local wall-clock times
    without an offset. Offset-aware input is normalized to naive UTC so
    comparisons never mix the two kinds.

    Raises:
        ValueError: If the value is not ISO-8601
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def find_next_index(times: Sequence[str], now: datetime) -> Optional[int]:
    """Index of the first timestamp strictly after now, or None."""
    for index, value in enumerate(times):
        if parse_timestamp(value) > now:
            return index
    return None


def build_forecast(
    hourly: HourlySeries,
    start: Optional[int],
    hours: int = FORECAST_HOURS
) -> List[ForecastSample]:
    """Join the hourly arrays into samples for indices [start, start + hours).

    The window is clamped to the series length; fewer samples come back
    when the series runs out.
    """
    if start is None:
        return []

    samples = []
    for i in range(start, min(start + hours, len(hourly))):
        code = hourly.weathercode[i]
        info = lookup_weather_code(code)
        samples.append(ForecastSample(
            timestamp=hourly.time[i],
            temperature_c=hourly.temperature_2m[i],
            feels_like_c=hourly.apparent_temperature[i],
            precipitation_mm=hourly.precipitation[i],
            uv_index=hourly.uv_index[i],
            weather_code=code,
            label=info.label,
            icon_url=info.icon_url
        ))
    return samples


def _previous_value(values: Sequence, next_index: Optional[int]):
    # No sample at or before now when the scan failed or hit index 0
    if not next_index:
        return None
    return values[next_index - 1]


def build_current_conditions(
    location: Location,
    snapshot: CurrentSnapshot,
    hourly: HourlySeries,
    next_index: Optional[int]
) -> CurrentConditions:
    """Current conditions from the snapshot plus the last hourly sample.

    Feels-like, precipitation and UV come from the hourly sample just before
    next_index; the description and icon come from the snapshot's own code.
    """
    feels_like = _previous_value(hourly.apparent_temperature, next_index)
    precipitation = _previous_value(hourly.precipitation, next_index)
    uv_index = _previous_value(hourly.uv_index, next_index)

    if feels_like is None or uv_index is None:
        logger.debug(f"No hourly sample before {snapshot.time}, using degraded current values")

    info = lookup_weather_code(snapshot.weathercode)

    return CurrentConditions(
        city=location.name,
        country=location.country,
        region=location.region,
        timestamp=snapshot.time,
        temperature_c=snapshot.temperature,
        feels_like_c=feels_like if feels_like is not None else snapshot.temperature,
        wind_speed=snapshot.windspeed,
        weather_code=snapshot.weathercode,
        description=info.label or DEFAULT_DESCRIPTION,
        icon_url=info.icon_url,
        precipitation_mm=precipitation if precipitation is not None else 0,
        uv_index=uv_index if uv_index is not None else UV_UNAVAILABLE
    )


def window_forecast(
    location: Location,
    data: ForecastData,
    hours: int = FORECAST_HOURS
) -> Tuple[CurrentConditions, List[ForecastSample]]:
    """Current conditions and the next hours of forecast for a location.

    Raises:
        ValueError: If a timestamp cannot be parsed
    """
    now = parse_timestamp(data.current.time)
    next_index = find_next_index(data.hourly.time, now)

    forecast = build_forecast(data.hourly, next_index, hours)
    current = build_current_conditions(location, data.current, data.hourly, next_index)

    logger.info(f"Windowed forecast at {data.current.time}: next index {next_index}, {len(forecast)} samples")
    return current, forecast
