"""
Weather tool.
Current conditions from Open-Meteo for a coordinate pair.
"""

from typing import Optional

from ...task_graph.values import Coordinates
from ..base_tool import ToolExecutionError
from ..tool_schemas import (
    ToolResult,
    ToolParameter,
    ParameterType,
    ToolCategory,
)
from .http_tool import HttpJsonTool

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# WMO weather interpretation codes
WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


class GetWeatherTool(HttpJsonTool):
    """Current weather at a coordinate pair."""

    name = "getWeather"
    description = (
        "Use to get the current weather. Depend on a getLocationCoordinates or "
        "getCurrentLocation task; its coordinates are passed in automatically."
    )
    category = ToolCategory.WEATHER

    parameters = [
        ToolParameter(
            name="coordinates",
            type=ParameterType.COORDINATES,
            description="Latitude/longitude of the place",
            required=True,
        ),
        ToolParameter(
            name="location",
            type=ParameterType.STRING,
            description="Display name of the place",
            required=False,
        ),
    ]

    async def execute(
        self,
        coordinates: Coordinates,
        location: Optional[str] = None,
    ) -> ToolResult:
        """Execute the weather lookup."""
        data = await self._fetch_json(
            FORECAST_URL,
            params={
                "latitude": coordinates.latitude,
                "longitude": coordinates.longitude,
                "current": "temperature_2m,weather_code",
            },
        )

        current = (data or {}).get("current") or {}
        temp_c = current.get("temperature_2m")
        if temp_c is None:
            raise ToolExecutionError(f"No weather data for {location or coordinates}.")

        condition = WEATHER_CODES.get(current.get("weather_code"), "Unknown conditions")
        place = location or coordinates.label or str(coordinates)
        temp_f = celsius_to_fahrenheit(temp_c)

        return ToolResult.success_result(
            f"The weather in {place} is {condition} with a temperature of "
            f"{temp_c:.1f}°C ({temp_f:.1f}°F).",
            temperature_c=temp_c,
        )
