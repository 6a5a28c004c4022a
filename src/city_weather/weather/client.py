"""HTTP client for the Open-Meteo forecast API."""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from city_weather.config import (
    FORECAST_API_URL, HOURLY_VARIABLES, HTTP_TIMEOUT_SECONDS, USER_AGENT
)
from city_weather.weather.exceptions import FetchFailedError
from city_weather.weather.models import ForecastData, Location

logger = logging.getLogger(__name__)


class OpenMeteoClient:
    """Async client fetching current weather and hourly series together."""

    def __init__(
        self,
        base_url: str = FORECAST_API_URL,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the forecast client.

        Args:
            base_url: Forecast endpoint
            http_client: Shared HTTP client; a private one is created if None
        """
        self.base_url = base_url
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=HTTP_TIMEOUT_SECONDS
        )

    @staticmethod
    def build_params(location: Location) -> Dict[str, Any]:
        """Query parameters for a forecast request at the location."""
        return {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current_weather": "true",
            "hourly": ",".join(HOURLY_VARIABLES),
            "timezone": "auto",
        }

    async def get_forecast(self, location: Location) -> ForecastData:
        """Fetch current weather and hourly series for a location.

        Timestamps in the result are local wall-clock time at the location.

        Args:
            location: Geocoded location

        Returns:
            Current snapshot and hourly series

        Raises:
            FetchFailedError: If the request fails or the payload is malformed
        """
        logger.info(f"Fetching forecast for {location.name} (lat={location.latitude}, lon={location.longitude})")

        try:
            response = await self.client.get(self.base_url, params=self.build_params(location))
            response.raise_for_status()
            data = ForecastData.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from forecast API: {e.response.status_code} - {e.response.text}")
            raise FetchFailedError(f"Forecast request failed with status {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error to forecast API: {e}")
            raise FetchFailedError(f"Forecast request failed: {e}") from e
        except ValidationError as e:
            logger.error(f"Invalid forecast response format: {e}")
            raise FetchFailedError("Invalid forecast response format") from e
        except ValueError as e:
            logger.error(f"Forecast response is not valid JSON: {e}")
            raise FetchFailedError("Forecast response is not valid JSON") from e

        logger.info(f"Fetched forecast with {len(data.hourly)} hourly entries")
        return data

    async def aclose(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
