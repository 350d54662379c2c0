"""
Built-in tools for the tool system.
Provides search, summarization, arithmetic, location and weather tools.
"""

import logging

from ...services.llm_client import LLMClient
from .search_tools import WebSearchTool, SummarizeTool
from .math_tools import CalculateTool
from .location_tools import GetLocationCoordinatesTool, GetCurrentLocationTool
from .weather_tools import GetWeatherTool

logger = logging.getLogger(__name__)

__all__ = [
    "WebSearchTool",
    "SummarizeTool",
    "CalculateTool",
    "GetLocationCoordinatesTool",
    "GetCurrentLocationTool",
    "GetWeatherTool",
    "register_all_builtin_tools",
]


def register_all_builtin_tools(registry, llm_client: LLMClient) -> None:
    """Register all built-in tools with the registry."""
    builtin_tools = [
        WebSearchTool(llm_client),
        CalculateTool(),
        GetWeatherTool(),
        SummarizeTool(llm_client),
        GetCurrentLocationTool(),
        GetLocationCoordinatesTool(),
    ]

    for tool in builtin_tools:
        try:
            registry.register(tool)
        except Exception as e:
            logger.error(f"Failed to register built-in tool {tool.name}: {e}")
