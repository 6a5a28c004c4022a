"""Tests for unit conversion and display formatting."""

import pytest

from city_weather.weather.codes import UNKNOWN_WEATHER_CODE, WEATHER_CODES, lookup_weather_code
from city_weather.weather.formatting import (
    PLACEHOLDER, TemperatureUnit, format_clock, format_conditions, format_sample,
    format_temp, render_result, temperature_symbol, toggle_unit
)
from city_weather.weather.models import (
    CurrentConditions, ForecastSample, SearchError, SearchResult
)

CURRENT = CurrentConditions(
    city="Oslo",
    country="Norway",
    region="Oslo",
    timestamp="2024-01-15T08:45",
    temperature_c=-3.0,
    feels_like_c=-7.0,
    wind_speed=14.2,
    weather_code=71,
    description="Snow",
    icon_url="https://cdn-icons-png.flaticon.com/512/642/642102.png",
    precipitation_mm=0.4,
    uv_index="N/A",
)

SAMPLE = ForecastSample(
    timestamp="2024-01-15T09:00",
    temperature_c=-2.5,
    feels_like_c=-6.0,
    precipitation_mm=0.3,
    uv_index=0.0,
    weather_code=71,
    label="Snow",
    icon_url="https://cdn-icons-png.flaticon.com/512/642/642102.png",
)


@pytest.mark.parametrize("value, unit, expected", [
    (20, TemperatureUnit.CELSIUS, "20.0"),
    (20, TemperatureUnit.FAHRENHEIT, "68.0"),
    (-40, TemperatureUnit.FAHRENHEIT, "-40.0"),
    (0, TemperatureUnit.FAHRENHEIT, "32.0"),
    (21.36, TemperatureUnit.CELSIUS, "21.4"),
    (20, "celsius", "20.0"),
    (20, "fahrenheit", "68.0"),
])
def test_format_temp(value, unit, expected):
    assert format_temp(value, unit) == expected


@pytest.mark.parametrize("unit", list(TemperatureUnit))
def test_format_temp_missing_value(unit):
    assert format_temp(None, unit) == "—"


def test_toggle_unit_round_trips():
    assert toggle_unit(TemperatureUnit.CELSIUS) is TemperatureUnit.FAHRENHEIT
    assert toggle_unit(TemperatureUnit.FAHRENHEIT) is TemperatureUnit.CELSIUS


def test_temperature_symbol():
    assert temperature_symbol(TemperatureUnit.CELSIUS) == "°C"
    assert temperature_symbol(TemperatureUnit.FAHRENHEIT) == "°F"


def test_format_clock():
    assert format_clock("2024-01-15T08:45") == "08:45"
    assert format_clock("not a time") == PLACEHOLDER
    assert format_clock(None) == PLACEHOLDER


def test_lookup_weather_code_is_total():
    assert lookup_weather_code(95).label == "Thunderstorm"
    assert lookup_weather_code(999) == UNKNOWN_WEATHER_CODE
    assert lookup_weather_code(None) == UNKNOWN_WEATHER_CODE
    assert UNKNOWN_WEATHER_CODE.label == ""
    assert UNKNOWN_WEATHER_CODE.icon_url == ""
    assert sorted(WEATHER_CODES) == [0, 1, 2, 3, 45, 48, 51, 61, 71, 95]


def test_format_conditions_in_fahrenheit():
    view = format_conditions(CURRENT, TemperatureUnit.FAHRENHEIT)

    assert view.location == "Oslo, Norway"
    assert view.local_time == "08:45"
    assert view.temperature == "26.6°F"
    assert view.feels_like == "19.4°"
    assert view.wind == "14.2 km/h"
    assert view.precipitation == "0.4 mm"
    assert view.uv_index == "N/A"
    assert view.description == "Snow"


def test_format_sample_in_celsius():
    view = format_sample(SAMPLE, TemperatureUnit.CELSIUS)

    assert view.time == "09:00"
    assert view.temperature == "-2.5°"
    assert view.label == "Snow"


def test_render_failed_result_has_no_conditions():
    result = SearchResult(
        generation=3,
        query="Atlantis",
        error=SearchError(kind="not_found", message="City not found. Please check the spelling."),
    )

    view = render_result(result, TemperatureUnit.CELSIUS)

    assert view.error.kind == "not_found"
    assert view.current is None
    assert view.display is None
    assert view.forecast == []
    assert view.forecast_display == []


def test_render_successful_result():
    result = SearchResult(generation=1, query="oslo", current=CURRENT, forecast=[SAMPLE])

    view = render_result(result, TemperatureUnit.CELSIUS)

    assert view.unit == "celsius"
    assert view.display.temperature == "-3.0°C"
    assert [hour.temperature for hour in view.forecast_display] == ["-2.5°"]


def test_search_result_cannot_mix_error_and_data():
    with pytest.raises(ValueError):
        SearchResult(
            generation=1,
            query="oslo",
            current=CURRENT,
            error=SearchError(kind="fetch_failed", message="Failed to fetch weather. Please try again."),
        )


def test_format_conditions_with_missing_temperatures():
    current = CURRENT.model_copy(update={"temperature_c": None, "feels_like_c": None, "wind_speed": None})

    view = format_conditions(current, TemperatureUnit.CELSIUS)

    assert view.temperature == "—°C"
    assert view.feels_like == "—°"
    assert view.wind == PLACEHOLDER
