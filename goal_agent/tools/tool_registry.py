"""
Tool Registry for the tool system.
Central registry for tool registration, discovery, and retrieval.
"""

from typing import Dict, List, Optional, Set, Type, Union
import logging
from dataclasses import dataclass, field

from .base_tool import BaseTool
from .tool_schemas import ToolCategory, ToolSchema

logger = logging.getLogger(__name__)


@dataclass
class ToolRegistration:
    """Registration record for a tool."""
    instance: BaseTool
    enabled: bool = True
    tags: Set[str] = field(default_factory=set)


class ToolRegistry:
    """
    Central registry for all tools.

    Provides:
    - Tool registration and lookup by the name plans use
    - Category-based filtering
    - The structured-input table used by the argument resolver
    - The tool catalog shown to the planner

    Example:
        registry = ToolRegistry()
        registry.register(CalculateTool)
        registry.register(WebSearchTool(llm_client))

        calculator = registry.get("calculate")
    """

    _instance: Optional["ToolRegistry"] = None

    def __init__(self):
        """Initialize the registry."""
        self._tools: Dict[str, ToolRegistration] = {}

    @classmethod
    def get_instance(cls) -> "ToolRegistry":
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(
        self,
        tool: Union[BaseTool, Type[BaseTool]],
        enabled: bool = True,
        tags: Optional[Set[str]] = None,
    ) -> BaseTool:
        """
        Register a tool.

        Args:
            tool: A tool instance, or a tool class constructible without arguments
            enabled: Whether the tool is enabled by default
            tags: Optional tags for filtering

        Returns:
            The registered instance
        """
        if isinstance(tool, type):
            try:
                instance = tool()
            except Exception as e:
                logger.error(f"Failed to instantiate tool {tool.__name__}: {e}")
                raise
        else:
            instance = tool

        if instance.name in self._tools:
            logger.warning(f"Tool '{instance.name}' is already registered, overwriting")

        self._tools[instance.name] = ToolRegistration(
            instance=instance,
            enabled=enabled,
            tags=tags or set(),
        )

        logger.info(f"Registered tool: {instance.name} ({instance.category.value})")
        return instance

    def unregister(self, name: str) -> bool:
        """Unregister a tool. Returns False if it was not registered."""
        if name not in self._tools:
            return False
        del self._tools[name]
        logger.info(f"Unregistered tool: {name}")
        return True

    def get(self, name: str) -> Optional[BaseTool]:
        """Get an enabled tool instance by name."""
        registration = self._tools.get(name)
        if not registration or not registration.enabled:
            return None
        return registration.instance

    def get_all(self, include_disabled: bool = False) -> List[BaseTool]:
        """Get all registered tools in registration order."""
        return [
            registration.instance
            for registration in self._tools.values()
            if include_disabled or registration.enabled
        ]

    def get_by_category(self, category: ToolCategory) -> List[BaseTool]:
        """Get all enabled tools in a category."""
        return [tool for tool in self.get_all() if tool.category == category]

    def tool_names(self) -> List[str]:
        """Names of all enabled tools."""
        return [tool.name for tool in self.get_all()]

    def enable(self, name: str) -> bool:
        registration = self._tools.get(name)
        if registration:
            registration.enabled = True
            return True
        return False

    def disable(self, name: str) -> bool:
        registration = self._tools.get(name)
        if registration:
            registration.enabled = False
            return True
        return False

    def get_schemas(self) -> List[ToolSchema]:
        return [tool.get_schema() for tool in self.get_all()]

    def structured_inputs(self) -> Dict[str, Dict[str, type]]:
        """tool name -> {parameter name -> shape} for tools with injected inputs."""
        table = {}
        for tool in self.get_all():
            shapes = tool.structured_inputs()
            if shapes:
                table[tool.name] = shapes
        return table

    def describe_for_planner(self) -> str:
        """Tool catalog, one line per tool."""
        return "\n".join(schema.describe() for schema in self.get_schemas())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def get_tool_registry() -> ToolRegistry:
    """Get the global tool registry."""
    return ToolRegistry.get_instance()
