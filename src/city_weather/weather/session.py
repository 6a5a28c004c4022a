"""Search session holding the single current result slot."""

import logging
from typing import Optional

from city_weather.weather.exceptions import WeatherLookupError
from city_weather.weather.formatting import TemperatureUnit, render_result, toggle_unit
from city_weather.weather.models import SearchError, SearchResult, SearchView
from city_weather.weather.service import WeatherService

logger = logging.getLogger(__name__)


class SearchSession:
    """Widget state: latest search result plus the display unit.

    Each submit takes a new generation number. A result is published to the
    slot only if no newer search started meanwhile, so overlapping searches
    never leave an older answer on display.
    """

    def __init__(
        self,
        service: WeatherService,
        unit: TemperatureUnit = TemperatureUnit.CELSIUS
    ):
        self.service = service
        self.unit = unit
        self._generation = 0
        self._current: Optional[SearchResult] = None

    @property
    def current(self) -> Optional[SearchResult]:
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    async def submit(self, city: str) -> SearchResult:
        """Run a search and publish its result if it is still the latest.

        Failures never raise; they come back as a result carrying the
        user-facing message and no forecast data.

        Args:
            city: City name as typed by the user

        Returns:
            The result of this search, published or not
        """
        self._generation += 1
        generation = self._generation

        try:
            _, current, forecast = await self.service.search(city)
            result = SearchResult(
                generation=generation,
                query=city,
                current=current,
                forecast=forecast
            )
        except WeatherLookupError as e:
            logger.warning(f"Search #{generation} for '{city}' failed ({e.kind}): {e}")
            result = self._failed(generation, city, e.kind, e.user_message)
        except Exception:
            logger.exception(f"Unexpected error in search #{generation} for '{city}'")
            result = self._failed(
                generation, city, WeatherLookupError.kind, WeatherLookupError.user_message
            )

        self._publish(result)
        return result

    def _failed(self, generation: int, city: str, kind: str, message: str) -> SearchResult:
        return SearchResult(
            generation=generation,
            query=city,
            error=SearchError(kind=kind, message=message)
        )

    def _publish(self, result: SearchResult) -> bool:
        if result.generation != self._generation:
            logger.info(
                f"Discarding stale result #{result.generation} for '{result.query}', "
                f"latest search is #{self._generation}"
            )
            return False
        self._current = result
        return True

    def set_unit(self, unit: TemperatureUnit) -> TemperatureUnit:
        self.unit = TemperatureUnit(unit)
        return self.unit

    def toggle_unit(self) -> TemperatureUnit:
        """Switch the display unit between Celsius and Fahrenheit."""
        self.unit = toggle_unit(self.unit)
        return self.unit

    def render(
        self,
        result: Optional[SearchResult] = None,
        unit: Optional[TemperatureUnit] = None
    ) -> Optional[SearchView]:
        """Render a result (the current slot by default) for display."""
        result = result or self._current
        if result is None:
            return None
        return render_result(result, TemperatureUnit(unit or self.unit))
