"""Data models for the city weather service."""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Location(BaseModel):
    """Best geocoding match for a searched city."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Resolved city name")
    country: Optional[str] = Field(None, description="Country name")
    region: Optional[str] = Field(None, description="First-level administrative region")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class WeatherCodeInfo(BaseModel):
    """Display label and icon for a WMO weather code."""
    model_config = ConfigDict(frozen=True)

    label: str = Field("", description="Human readable condition")
    icon_url: str = Field("", description="Icon URL for the condition")


class GeocodingResult(BaseModel):
    """Single raw entry from the Open-Meteo geocoding API."""
    name: str
    latitude: float
    longitude: float
    country: Optional[str] = None
    admin1: Optional[str] = None


class GeocodingResponse(BaseModel):
    """Raw response from the Open-Meteo geocoding API."""
    results: Optional[List[GeocodingResult]] = None


class CurrentSnapshot(BaseModel):
    """Raw `current_weather` block of the forecast response."""
    model_config = ConfigDict(frozen=True)

    time: str = Field(..., description="Local ISO timestamp")
    temperature: Optional[float] = Field(..., description="Temperature in Celsius, null when not reported")
    windspeed: Optional[float] = Field(None, description="Wind speed in km/h")
    weathercode: Optional[int] = Field(None, description="WMO weather code")


class HourlySeries(BaseModel):
    """Parallel hourly arrays sharing one timestamp sequence."""
    model_config = ConfigDict(frozen=True)

    time: List[str]
    temperature_2m: List[Optional[float]]
    apparent_temperature: List[Optional[float]]
    precipitation: List[Optional[float]]
    uv_index: List[Optional[float]]
    weathercode: List[Optional[int]]

    @model_validator(mode="after")
    def check_equal_lengths(self) -> "HourlySeries":
        lengths = {
            "time": len(self.time),
            "temperature_2m": len(self.temperature_2m),
            "apparent_temperature": len(self.apparent_temperature),
            "precipitation": len(self.precipitation),
            "uv_index": len(self.uv_index),
            "weathercode": len(self.weathercode),
        }
        if len(set(lengths.values())) > 1:
            raise ValueError(f"Hourly arrays differ in length: {lengths}")
        return self

    def __len__(self) -> int:
        return len(self.time)


class ForecastData(BaseModel):
    """Current snapshot and hourly series fetched together."""
    model_config = ConfigDict(frozen=True)

    current: CurrentSnapshot = Field(..., alias="current_weather")
    hourly: HourlySeries


class ForecastSample(BaseModel):
    """One normalized hour of the forecast strip."""
    model_config = ConfigDict(frozen=True)

    timestamp: str
    temperature_c: Optional[float] = None
    feels_like_c: Optional[float] = None
    precipitation_mm: Optional[float] = None
    uv_index: Optional[float] = None
    weather_code: Optional[int] = None
    label: str = ""
    icon_url: str = ""


class CurrentConditions(BaseModel):
    """Current conditions at the searched location."""
    model_config = ConfigDict(frozen=True)

    city: str
    country: Optional[str] = None
    region: Optional[str] = None
    timestamp: str
    temperature_c: Optional[float] = None
    feels_like_c: Optional[float] = None
    wind_speed: Optional[float] = None
    weather_code: Optional[int] = None
    description: str
    icon_url: str = ""
    precipitation_mm: float
    uv_index: Union[float, str]


class SearchError(BaseModel):
    """User-facing outcome of a failed search."""
    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="validation, not_found or fetch_failed")
    message: str = Field(..., description="Message shown to the user")


class SearchResult(BaseModel):
    """Outcome of one search; replaced wholesale by the next one."""
    model_config = ConfigDict(frozen=True)

    generation: int = Field(..., ge=0, description="Search number on the session")
    query: str = Field(..., description="City name as typed")
    current: Optional[CurrentConditions] = None
    forecast: List[ForecastSample] = Field(default_factory=list)
    error: Optional[SearchError] = None

    @model_validator(mode="after")
    def check_data_or_error(self) -> "SearchResult":
        if self.error is not None and (self.current is not None or self.forecast):
            raise ValueError("A failed search cannot carry forecast data")
        if self.error is None and self.current is None:
            raise ValueError("A successful search needs current conditions")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx the API produces itself."""
    error: str = Field(..., description="Machine readable kind, e.g. not_found or fetch_failed")
    detail: Optional[str] = Field(None, description="Message shown to the user")


class ConditionsView(BaseModel):
    """Display-ready current conditions."""
    location: str = Field(..., description="City and country heading")
    local_time: str = Field(..., description="Local time as HH:MM")
    temperature: str = Field(..., description="Temperature with unit symbol")
    feels_like: str = Field(..., description="Feels-like temperature")
    description: str
    icon_url: str
    wind: str
    precipitation: str
    uv_index: str


class SampleView(BaseModel):
    """Display-ready forecast hour."""
    time: str = Field(..., description="Local time as HH:MM")
    temperature: str
    label: str
    icon_url: str


class SearchView(BaseModel):
    """Rendered search result for the display layer."""
    generation: int
    query: str
    unit: str
    current: Optional[CurrentConditions] = None
    forecast: List[ForecastSample] = Field(default_factory=list)
    display: Optional[ConditionsView] = None
    forecast_display: List[SampleView] = Field(default_factory=list)
    error: Optional[SearchError] = None
