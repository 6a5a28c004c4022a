"""Shared fixtures: canned Open-Meteo payloads served through httpx.MockTransport."""

from typing import Any, Dict, List, Optional

import httpx
import pytest

from city_weather.weather.client import OpenMeteoClient
from city_weather.weather.geocoding import GeocodingClient
from city_weather.weather.service import WeatherService

GEOCODING_HOST = "geocoding-api.open-meteo.com"
FORECAST_HOST = "api.open-meteo.com"

PARIS = {
    "name": "Paris",
    "latitude": 48.85341,
    "longitude": 2.3488,
    "country": "France",
    "admin1": "Île-de-France",
}

HOURLY_CODES = [0, 1, 2, 3, 45, 48, 51, 61, 71, 95, 999, 0]


def hourly_times(day: str = "2024-05-01", hours: int = 24) -> List[str]:
    return [f"{day}T{hour:02d}:00" for hour in range(hours)]


def make_forecast_payload(
    current_time: str = "2024-05-01T10:30",
    times: Optional[List[str]] = None,
    current_code: Optional[int] = 2,
    current_temperature: float = 18.4
) -> Dict[str, Any]:
    """Forecast response where hour i has temperature 10 + i and feels-like 9 + i."""
    times = hourly_times() if times is None else times
    count = len(times)
    return {
        "latitude": 48.86,
        "longitude": 2.34,
        "timezone": "Europe/Paris",
        "current_weather": {
            "time": current_time,
            "temperature": current_temperature,
            "windspeed": 12.5,
            "winddirection": 240,
            "weathercode": current_code,
        },
        "hourly": {
            "time": times,
            "temperature_2m": [10.0 + i for i in range(count)],
            "apparent_temperature": [9.0 + i for i in range(count)],
            "precipitation": [round(0.1 * i, 1) for i in range(count)],
            "uv_index": [i / 2 for i in range(count)],
            "weathercode": [HOURLY_CODES[i % len(HOURLY_CODES)] for i in range(count)],
        },
    }


class FakeOpenMeteo:
    """Routes geocoding and forecast requests to canned responses."""

    def __init__(self):
        self.geocoding_response: httpx.Response = httpx.Response(200, json={"results": [PARIS]})
        self.forecast_response: httpx.Response = httpx.Response(200, json=make_forecast_payload())
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == GEOCODING_HOST:
            return self._fresh(self.geocoding_response)
        if request.url.host == FORECAST_HOST:
            return self._fresh(self.forecast_response)
        return httpx.Response(404)

    @staticmethod
    def _fresh(response: httpx.Response) -> httpx.Response:
        # A response object is bound to one request, so serve a copy each time
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    def requests_to(self, host: str) -> List[httpx.Request]:
        return [request for request in self.requests if request.url.host == host]


@pytest.fixture
def open_meteo() -> FakeOpenMeteo:
    return FakeOpenMeteo()


@pytest.fixture
async def http_client(open_meteo):
    async with httpx.AsyncClient(transport=httpx.MockTransport(open_meteo.handler)) as client:
        yield client


@pytest.fixture
def geocoder(http_client) -> GeocodingClient:
    return GeocodingClient(http_client=http_client)


@pytest.fixture
def forecast_client(http_client) -> OpenMeteoClient:
    return OpenMeteoClient(http_client=http_client)


@pytest.fixture
def weather_service(geocoder, forecast_client) -> WeatherService:
    return WeatherService(geocoder=geocoder, client=forecast_client)
