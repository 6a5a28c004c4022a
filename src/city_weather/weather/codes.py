"""WMO weather code labels and icons."""

from typing import Dict, Optional

from city_weather.weather.models import WeatherCodeInfo

UNKNOWN_WEATHER_CODE = WeatherCodeInfo(label="", icon_url="")

WEATHER_CODES: Dict[int, WeatherCodeInfo] = {
    0: WeatherCodeInfo(label="Clear", icon_url="https://cdn-icons-png.flaticon.com/512/869/869869.png"),
    1: WeatherCodeInfo(label="Mainly Clear", icon_url="https://cdn-icons-png.flaticon.com/512/1146/1146869.png"),
    2: WeatherCodeInfo(label="Partly Cloudy", icon_url="https://cdn-icons-png.flaticon.com/512/414/414825.png"),
    3: WeatherCodeInfo(label="Overcast", icon_url="https://cdn-icons-png.flaticon.com/512/414/414825.png"),
    45: WeatherCodeInfo(label="Fog", icon_url="https://cdn-icons-png.flaticon.com/512/4005/4005901.png"),
    48: WeatherCodeInfo(label="Rime Fog", icon_url="https://cdn-icons-png.flaticon.com/512/4005/4005901.png"),
    51: WeatherCodeInfo(label="Light Drizzle", icon_url="https://cdn-icons-png.flaticon.com/512/3076/3076129.png"),
    61: WeatherCodeInfo(label="Rain", icon_url="https://cdn-icons-png.flaticon.com/512/116/116251.png"),
    71: WeatherCodeInfo(label="Snow", icon_url="https://cdn-icons-png.flaticon.com/512/642/642102.png"),
    95: WeatherCodeInfo(label="Thunderstorm", icon_url="https://cdn-icons-png.flaticon.com/512/1146/1146860.png"),
}


def lookup_weather_code(code: Optional[int]) -> WeatherCodeInfo:
    """Return label and icon for a weather code.

    Args:
        code: WMO weather code, possibly missing

    Returns:
        Mapped info, or UNKNOWN_WEATHER_CODE for anything not in the table
    """
    if code is None:
        return UNKNOWN_WEATHER_CODE
    return WEATHER_CODES.get(code, UNKNOWN_WEATHER_CODE)
