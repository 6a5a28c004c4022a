"""Tests for the search session result slot."""

import asyncio

import httpx

from city_weather.weather.exceptions import LocationNotFoundError
from city_weather.weather.formatting import TemperatureUnit
from city_weather.weather.session import SearchSession

from conftest import make_forecast_payload


class GatedService:
    """Wraps a real service, holding selected searches until released."""

    def __init__(self, service):
        self.service = service
        self.gates = {}

    def hold(self, city: str) -> asyncio.Event:
        self.gates[city] = asyncio.Event()
        return self.gates[city]

    async def search(self, city):
        if city in self.gates:
            await self.gates[city].wait()
        return await self.service.search(city)


class ExplodingService:
    async def search(self, city):
        raise RuntimeError("boom")


async def test_successful_search_is_published(weather_service):
    session = SearchSession(weather_service)

    result = await session.submit("Paris")

    assert result.ok
    assert result.generation == 1
    assert result.query == "Paris"
    assert session.current is result
    assert len(result.forecast) == 6


async def test_blank_search_publishes_validation_error(weather_service, open_meteo):
    session = SearchSession(weather_service)

    result = await session.submit("  ")

    assert result.error.kind == "validation"
    assert result.error.message == "Please enter a city name"
    assert open_meteo.requests == []


async def test_error_replaces_previous_forecast(weather_service, open_meteo):
    session = SearchSession(weather_service)
    await session.submit("Paris")

    open_meteo.geocoding_response = httpx.Response(200, json={"results": []})
    result = await session.submit("Atlantis")

    assert session.current is result
    assert result.error.kind == "not_found"
    assert result.error.message == "City not found. Please check the spelling."
    assert result.current is None
    assert result.forecast == []


async def test_fetch_failure_message(weather_service, open_meteo):
    open_meteo.forecast_response = httpx.Response(500)
    session = SearchSession(weather_service)

    result = await session.submit("Paris")

    assert result.error.kind == "fetch_failed"
    assert result.error.message == "Failed to fetch weather. Please try again."


async def test_unexpected_error_is_reported_as_fetch_failed():
    session = SearchSession(ExplodingService())

    result = await session.submit("Paris")

    assert result.error.kind == "fetch_failed"
    assert session.current is result


async def test_stale_result_is_not_published(weather_service):
    gated = GatedService(weather_service)
    slow = gated.hold("Paris")
    session = SearchSession(gated)

    older = asyncio.create_task(session.submit("Paris"))
    await asyncio.sleep(0)
    newer = await session.submit("London")
    slow.set()
    stale = await older

    assert stale.generation == 1
    assert newer.generation == 2
    assert session.current is newer
    assert session.generation == 2


async def test_stale_error_does_not_clear_newer_result(weather_service):
    gated = GatedService(weather_service)
    slow = gated.hold("   ")
    session = SearchSession(gated)

    older = asyncio.create_task(session.submit("   "))
    await asyncio.sleep(0)
    newer = await session.submit("Paris")
    slow.set()
    await older

    assert session.current is newer
    assert session.current.ok


async def test_repeated_searches_render_identically(weather_service):
    session = SearchSession(weather_service)

    first = await session.submit("Paris")
    second = await session.submit("Paris")

    assert first.current == second.current
    assert first.forecast == second.forecast


async def test_unit_toggle_changes_rendering(weather_service, open_meteo):
    open_meteo.forecast_response = httpx.Response(
        200, json=make_forecast_payload(current_temperature=20.0)
    )
    session = SearchSession(weather_service)
    await session.submit("Paris")

    assert session.render().display.temperature == "20.0°C"
    assert session.toggle_unit() is TemperatureUnit.FAHRENHEIT
    assert session.render().display.temperature == "68.0°F"
    assert session.render(unit=TemperatureUnit.CELSIUS).display.temperature == "20.0°C"

    session.set_unit("celsius")
    assert session.unit is TemperatureUnit.CELSIUS


async def test_render_before_any_search_is_none(weather_service):
    assert SearchSession(weather_service).render() is None


def test_lookup_errors_carry_user_messages():
    assert LocationNotFoundError.kind == "not_found"
    assert LocationNotFoundError("x").user_message == "City not found. Please check the spelling."
