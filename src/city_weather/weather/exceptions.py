"""Error taxonomy for city weather searches."""


class WeatherLookupError(Exception):
    """Base class for every failure a search can end with."""

    kind: str = "fetch_failed"
    user_message: str = "Failed to fetch weather. Please try again."


class SearchValidationError(WeatherLookupError):
    """Raised when the city name is blank; no network call is made."""

    kind = "validation"
    user_message = "Please enter a city name"


class LocationNotFoundError(WeatherLookupError):
    """Raised when the geocoder returns no results for a city."""

    kind = "not_found"
    user_message = "City not found. Please check the spelling."


class FetchFailedError(WeatherLookupError):
    """Raised on any transport, status or parse failure talking to Open-Meteo."""

    kind = "fetch_failed"
    user_message = "Failed to fetch weather. Please try again."
