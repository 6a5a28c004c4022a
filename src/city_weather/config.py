"""Configuration settings for the city weather service."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# Open-Meteo API Configuration
GEOCODING_API_URL: str = os.getenv("GEOCODING_API_URL", "https://geocoding-api.open-meteo.com/v1/search")
FORECAST_API_URL: str = os.getenv("FORECAST_API_URL", "https://api.open-meteo.com/v1/forecast")
USER_AGENT: Final[str] = "CityWeatherService/0.1 (user@example.com)"
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Hourly variables requested from the forecast endpoint
HOURLY_VARIABLES: Final[tuple] = (
    "apparent_temperature",
    "precipitation",
    "uv_index",
    "temperature_2m",
    "weathercode",
)

# Forecast strip settings
FORECAST_HOURS: Final[int] = 6

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Redis configuration (rate limiting)
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

# Rate limiting configuration
RATE_LIMIT_REQUESTS_PER_SECOND: int = int(os.getenv("RATE_LIMIT_REQUESTS_PER_SECOND", "5"))
RATE_LIMIT_REDIS_KEY_PREFIX: str = os.getenv("RATE_LIMIT_REDIS_KEY_PREFIX", "city-weather:rate_limit")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
