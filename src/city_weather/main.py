"""Main FastAPI application for the city weather service."""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from city_weather.api.endpoints import APIError, api_error_handler, router as weather_router
from city_weather.config import (
    HOST, PORT, DEBUG, RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS_PER_SECOND
)
from city_weather.logging_config import configure_logging
from city_weather.middleware.rate_limit import RateLimitMiddleware
from city_weather.weather.service import WeatherService
from city_weather.weather.session import SearchSession

configure_logging()
logger = logging.getLogger(__name__)


def create_app(
    service: Optional[WeatherService] = None,
    rate_limit_enabled: bool = RATE_LIMIT_ENABLED
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service: Weather service to search with (creates default if None)
        rate_limit_enabled: Whether to install the rate limiting middleware

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        weather_service = service or WeatherService()
        try:
            app.state.search_session = SearchSession(weather_service)
            logger.info("Starting City Weather Service")
            yield
        except Exception as e:
            logger.error(f"Startup error: {e}")
            logger.error(traceback.format_exc())
            raise
        finally:
            logger.info("Shutting down City Weather Service")
            await weather_service.aclose()

    app = FastAPI(
        title="City Weather Service",
        description="Current conditions and a short hourly forecast for any city, backed by Open-Meteo",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if rate_limit_enabled:
        app.add_middleware(RateLimitMiddleware, calls=RATE_LIMIT_REQUESTS_PER_SECOND, enabled=True)

    app.include_router(weather_router)
    app.add_exception_handler(APIError, api_error_handler)

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "City Weather Service",
            "docs": "/docs",
            "redoc": "/redoc",
            "weather": "/weather?city=<name>",
            "latest": "/weather/latest",
            "health": "/weather/health"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        "city_weather.main:app" if DEBUG else app,
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
