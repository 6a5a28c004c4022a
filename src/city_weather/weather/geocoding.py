"""Geocoding client resolving city names through Open-Meteo."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from city_weather.config import GEOCODING_API_URL, HTTP_TIMEOUT_SECONDS, USER_AGENT
from city_weather.weather.exceptions import (
    FetchFailedError, LocationNotFoundError, SearchValidationError
)
from city_weather.weather.models import GeocodingResponse, Location

logger = logging.getLogger(__name__)


def normalize_city_name(name: Optional[str]) -> str:
    """Trim a city name, rejecting blank input.

    Raises:
        SearchValidationError: If the name is empty after trimming
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise SearchValidationError("City name must not be blank")
    return cleaned


class GeocodingClient:
    """Async client for the Open-Meteo geocoding API."""

    def __init__(
        self,
        base_url: str = GEOCODING_API_URL,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the geocoding client.

        Args:
            base_url: Geocoding search endpoint
            http_client: Shared HTTP client; a private one is created if None
        """
        self.base_url = base_url
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=HTTP_TIMEOUT_SECONDS
        )

    async def search(self, name: str) -> Location:
        """Resolve a city name to its best matching location.

        Args:
            name: Free-text city name

        Returns:
            The first (best) match

        Raises:
            SearchValidationError: If the name is blank
            LocationNotFoundError: If the provider has no match
            FetchFailedError: If the request or response parsing fails
        """
        city = normalize_city_name(name)
        params = {"name": city, "count": 1}

        logger.info(f"Geocoding city: {city}")

        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()
            payload = GeocodingResponse.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from geocoding API: {e.response.status_code} - {e.response.text}")
            raise FetchFailedError(f"Geocoding request failed with status {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error to geocoding API: {e}")
            raise FetchFailedError(f"Geocoding request failed: {e}") from e
        except ValidationError as e:
            logger.error(f"Invalid geocoding response format: {e}")
            raise FetchFailedError("Invalid geocoding response format") from e
        except ValueError as e:
            logger.error(f"Geocoding response is not valid JSON: {e}")
            raise FetchFailedError("Geocoding response is not valid JSON") from e

        if not payload.results:
            logger.info(f"No geocoding results for '{city}'")
            raise LocationNotFoundError(f"City '{city}' not found")

        best = payload.results[0]
        location = Location(
            name=best.name,
            country=best.country,
            region=best.admin1,
            latitude=best.latitude,
            longitude=best.longitude
        )
        logger.info(f"Geocoded '{city}' to {location.name} ({location.latitude}, {location.longitude})")
        return location

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
