"""Unit conversion and display formatting."""

from enum import Enum
from typing import Optional, Union

from city_weather.weather.models import (
    ConditionsView, CurrentConditions, ForecastSample, SampleView,
    SearchResult, SearchView
)
from city_weather.weather.windowing import parse_timestamp

PLACEHOLDER = "—"


class TemperatureUnit(str, Enum):
    """Temperature unit selected for display."""
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


def toggle_unit(unit: TemperatureUnit) -> TemperatureUnit:
    """Switch between Celsius and Fahrenheit."""
    if unit == TemperatureUnit.CELSIUS:
        return TemperatureUnit.FAHRENHEIT
    return TemperatureUnit.CELSIUS


def temperature_symbol(unit: Union[TemperatureUnit, str]) -> str:
    """Unit suffix shown after the main temperature."""
    return "°C" if unit == TemperatureUnit.CELSIUS else "°F"


def format_temp(value: Optional[float], unit: Union[TemperatureUnit, str]) -> str:
    """Format a Celsius value in the selected unit with one decimal place.

    Anything other than Celsius is shown in Fahrenheit. A missing value
    yields the placeholder.
    """
    if value is None:
        return PLACEHOLDER
    if unit == TemperatureUnit.CELSIUS:
        return f"{value:.1f}"
    return f"{value * 9 / 5 + 32:.1f}"


def format_clock(timestamp: Optional[str]) -> str:
    """Local wall-clock time as HH:MM."""
    if not timestamp:
        return PLACEHOLDER
    try:
        return parse_timestamp(timestamp).strftime("%H:%M")
    except ValueError:
        return PLACEHOLDER


def _format_amount(value, suffix: str) -> str:
    """Wind or precipitation as reported, with its unit."""
    if value is None:
        return PLACEHOLDER
    return f"{value} {suffix}"


def format_conditions(current: CurrentConditions, unit: TemperatureUnit) -> ConditionsView:
    """Display strings for the current conditions card.

    Only the main temperature carries the unit letter; feels-like shows a
    bare degree sign.
    """
    heading = ", ".join(part for part in (current.city, current.country) if part)
    return ConditionsView(
        location=heading,
        local_time=format_clock(current.timestamp),
        temperature=f"{format_temp(current.temperature_c, unit)}{temperature_symbol(unit)}",
        feels_like=f"{format_temp(current.feels_like_c, unit)}°",
        description=current.description,
        icon_url=current.icon_url,
        wind=_format_amount(current.wind_speed, "km/h"),
        precipitation=_format_amount(current.precipitation_mm, "mm"),
        uv_index=str(current.uv_index)
    )


def format_sample(sample: ForecastSample, unit: TemperatureUnit) -> SampleView:
    """Display strings for one hour of the forecast strip."""
    return SampleView(
        time=format_clock(sample.timestamp),
        temperature=f"{format_temp(sample.temperature_c, unit)}°",
        label=sample.label,
        icon_url=sample.icon_url
    )


def render_result(result: SearchResult, unit: TemperatureUnit) -> SearchView:
    """Render a search result in the selected unit.

    Failed results render with no conditions so an error never sits next
    to a stale forecast.
    """
    if not result.ok:
        return SearchView(
            generation=result.generation,
            query=result.query,
            unit=unit.value,
            error=result.error
        )

    return SearchView(
        generation=result.generation,
        query=result.query,
        unit=unit.value,
        current=result.current,
        forecast=result.forecast,
        display=format_conditions(result.current, unit),
        forecast_display=[format_sample(sample, unit) for sample in result.forecast]
    )
