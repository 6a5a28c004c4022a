"""Weather service running the geocode, fetch and window pipeline."""

import logging
from typing import List, Optional, Tuple

import httpx

from city_weather.config import FORECAST_HOURS, HTTP_TIMEOUT_SECONDS, USER_AGENT
from city_weather.weather.client import OpenMeteoClient
from city_weather.weather.exceptions import FetchFailedError
from city_weather.weather.geocoding import GeocodingClient, normalize_city_name
from city_weather.weather.models import CurrentConditions, ForecastSample, Location
from city_weather.weather.windowing import window_forecast

logger = logging.getLogger(__name__)

SearchOutcome = Tuple[Location, CurrentConditions, List[ForecastSample]]


class WeatherService:
    """Service resolving a city and producing its current conditions and forecast."""

    def __init__(
        self,
        geocoder: Optional[GeocodingClient] = None,
        client: Optional[OpenMeteoClient] = None,
        hours: int = FORECAST_HOURS
    ):
        """Initialize the weather service.

        Both collaborators share one HTTP client when they are created here.

        Args:
            geocoder: Geocoding client (creates default if None)
            client: Forecast client (creates default if None)
            hours: Length of the forecast strip
        """
        self._http_client = None
        if geocoder is None or client is None:
            self._http_client = httpx.AsyncClient(
                headers={"User-Agent": USER_AGENT},
                timeout=HTTP_TIMEOUT_SECONDS
            )
        self.geocoder = geocoder or GeocodingClient(http_client=self._http_client)
        self.client = client or OpenMeteoClient(http_client=self._http_client)
        self.hours = hours

    async def search(self, city: str) -> SearchOutcome:
        """Look up current conditions and the forecast strip for a city.

        The forecast request is only issued once geocoding succeeded.

        Args:
            city: Free-text city name

        Returns:
            Tuple of (location, current conditions, forecast samples)

        Raises:
            SearchValidationError: If the city name is blank
            LocationNotFoundError: If no location matches
            FetchFailedError: If either request or the data processing fails
        """
        name = normalize_city_name(city)
        location = await self.geocoder.search(name)
        data = await self.client.get_forecast(location)

        try:
            current, forecast = window_forecast(location, data, self.hours)
        except ValueError as e:
            logger.error(f"Error processing forecast for {location.name}: {e}")
            raise FetchFailedError(f"Invalid forecast timestamps: {e}") from e

        logger.info(f"Search for '{name}' resolved to {location.name} with {len(forecast)} forecast hours")
        return location, current, forecast

    async def aclose(self):
        """Close the HTTP clients."""
        for closable in (self.geocoder, self.client):
            try:
                await closable.aclose()
            except Exception as e:
                logger.error(f"Error closing {type(closable).__name__}: {e}")
        if self._http_client is not None:
            await self._http_client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
