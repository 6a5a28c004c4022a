"""API endpoints for the city weather service."""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from city_weather.config import FORECAST_HOURS
from city_weather.weather.codes import WEATHER_CODES
from city_weather.weather.formatting import TemperatureUnit
from city_weather.weather.models import ErrorResponse, SearchView, WeatherCodeInfo
from city_weather.weather.session import SearchSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])

ERROR_STATUS_CODES: Dict[str, int] = {
    "validation": 400,
    "not_found": 404,
    "fetch_failed": 502,
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Blank city name"},
    404: {"model": ErrorResponse, "description": "City not found"},
    502: {"model": ErrorResponse, "description": "Open-Meteo unreachable or returned bad data"},
}


class APIError(HTTPException):
    """HTTP error rendered as an ErrorResponse body."""

    def __init__(self, status_code: int, error: str, detail: str):
        super().__init__(status_code=status_code, detail=detail)
        self.error = error


async def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Render an APIError as `{"error": <kind>, "detail": <message>}`."""
    body = ErrorResponse(error=exc.error, detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def get_search_session(request: Request) -> SearchSession:
    """Dependency returning the application's search session."""
    return request.app.state.search_session


@router.get("/", response_model=SearchView, responses=ERROR_RESPONSES)
async def search_weather(
    city: str = Query(
        "",
        description="City name to look up"
    ),
    unit: Optional[TemperatureUnit] = Query(
        None,
        description="Display unit; defaults to the session unit"
    ),
    session: SearchSession = Depends(get_search_session)
) -> SearchView:
    """Search a city and return current conditions plus the forecast strip.

    Args:
        city: City name as typed by the user
        unit: 'celsius' or 'fahrenheit' for the rendered strings

    Returns:
        Rendered search result

    Raises:
        APIError: 400 for a blank name, 404 for an unknown city,
            502 when Open-Meteo could not be reached
    """
    result = await session.submit(city)

    if not result.ok:
        status_code = ERROR_STATUS_CODES.get(result.error.kind, 502)
        raise APIError(status_code, error=result.error.kind, detail=result.error.message)

    logger.info(f"Search #{result.generation} returned {len(result.forecast)} forecast hours")
    return session.render(result, unit)


@router.get("/latest", response_model=SearchView, responses={404: {"model": ErrorResponse}})
async def get_latest_result(
    unit: Optional[TemperatureUnit] = Query(None, description="Display unit"),
    session: SearchSession = Depends(get_search_session)
) -> SearchView:
    """Return the result currently on display, including a failed one."""
    view = session.render(unit=unit)
    if view is None:
        raise APIError(404, error="no_result", detail="No search has been made yet")
    return view


@router.post("/unit/toggle")
async def toggle_display_unit(session: SearchSession = Depends(get_search_session)) -> dict:
    """Switch the session's display unit between Celsius and Fahrenheit."""
    unit = session.toggle_unit()
    return {"unit": unit.value}


@router.get("/codes", response_model=Dict[int, WeatherCodeInfo])
async def get_weather_codes() -> Dict[int, WeatherCodeInfo]:
    """Weather codes with their labels and icons."""
    return WEATHER_CODES


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "city-weather"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including features and data source
    """
    return {
        "service": "City Weather Service",
        "version": "0.1.0",
        "forecast_hours": FORECAST_HOURS,
        "units": [unit.value for unit in TemperatureUnit],
        "features": [
            "Current conditions by city name",
            f"Next {FORECAST_HOURS} hours forecast",
            "Celsius and Fahrenheit display"
        ],
        "data_source": "Open-Meteo geocoding and forecast APIs"
    }
