"""
Location tools.
Resolve place names or the caller's network location to coordinates.
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

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
IP_LOCATION_URL = "https://ipapi.co/json/"


class GetLocationCoordinatesTool(HttpJsonTool):
    """Geocode a place name."""

    name = "getLocationCoordinates"
    description = "Use to find the latitude and longitude of a named place."
    category = ToolCategory.LOCATION

    parameters = [
        ToolParameter(
            name="location",
            type=ParameterType.STRING,
            description="Place name, e.g. Tokyo, Japan",
            required=True,
            min_length=1,
        ),
    ]

    async def execute(self, location: str) -> ToolResult:
        """Execute the geocoding lookup."""
        # The geocoder matches on the city name only
        name = location.split(",")[0].strip()
        data = await self._fetch_json(
            GEOCODING_URL,
            params={"name": name, "count": 1, "language": "en", "format": "json"},
        )

        results = (data or {}).get("results") or []
        if not results:
            raise ToolExecutionError(f"Could not find coordinates for {location}.")

        place = results[0]
        label = ", ".join(
            part for part in (place.get("name"), place.get("country")) if part
        ) or location
        coordinates = Coordinates.from_mapping({
            "latitude": place.get("latitude"),
            "longitude": place.get("longitude"),
            "label": label,
        })
        if coordinates is None:
            raise ToolExecutionError(f"Geocoder returned no coordinates for {location}.")

        return ToolResult.success_result(coordinates, source="open-meteo")


class GetCurrentLocationTool(HttpJsonTool):
    """Locate the caller from their public IP address."""

    name = "getCurrentLocation"
    description = "Use to find the user's current location (latitude and longitude)."
    category = ToolCategory.LOCATION

    parameters = []

    async def execute(self) -> ToolResult:
        """Execute the IP geolocation lookup."""
        data = await self._fetch_json(IP_LOCATION_URL) or {}
        if data.get("error"):
            raise ToolExecutionError(
                f"Could not determine current location: {data.get('reason', 'unknown reason')}"
            )

        coordinates = Coordinates.from_mapping({
            "latitude": data.get("latitude"),
            "longitude": data.get("longitude"),
            "label": self._label(data),
        })
        if coordinates is None:
            raise ToolExecutionError("Could not determine current location.")

        return ToolResult.success_result(coordinates, source="ipapi")

    @staticmethod
    def _label(data: dict) -> Optional[str]:
        parts = [data.get("city"), data.get("country_name")]
        return ", ".join(part for part in parts if part) or None
