"""
Base tool class for the tool system.
All tools should inherit from BaseTool.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional
import asyncio
import time
import logging

from ..task_graph.values import Coordinates, ToolValue, match_coordinates
from .tool_schemas import (
    ToolSchema,
    ToolResult,
    ToolParameter,
    ToolCategory,
    ParameterType,
)

logger = logging.getLogger(__name__)

# Re-export for convenience
__all__ = [
    "BaseTool",
    "ToolResult",
    "ToolParameter",
    "ToolCategory",
    "ParameterType",
    "ToolValidationError",
    "ToolExecutionError",
]


class ToolValidationError(Exception):
    """Raised when tool parameter validation fails."""
    pass


class ToolExecutionError(Exception):
    """Raised when tool execution fails."""
    pass


class BaseTool(ABC):
    """
    Base class for all tools.

    Each tool should:
    - Define its name (the name plans refer to) and description
    - Define its parameters
    - Implement the execute method

    Example:
        class EchoTool(BaseTool):
            name = "echo"
            description = "Repeat the given text."
            category = ToolCategory.TEXT

            parameters = [
                ToolParameter(
                    name="text",
                    type=ParameterType.STRING,
                    description="Text to repeat",
                ),
            ]

            async def execute(self, text: str) -> ToolResult:
                return ToolResult.success_result(text)
    """

    # Class-level attributes to be overridden
    name: str = ""
    description: str = ""
    category: ToolCategory = ToolCategory.CUSTOM

    # Tool parameters
    parameters: List[ToolParameter] = []

    # When True, execute() also receives ``dependency_outputs``
    uses_dependency_outputs: bool = False

    timeout_seconds: int = 30

    def __init__(self):
        """Initialize the tool."""
        if not self.name:
            raise ValueError(f"Tool {self.__class__.__name__} must define a 'name'")
        if not self.description:
            raise ValueError(f"Tool {self.__class__.__name__} must define a 'description'")

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """
        Execute the tool with the given arguments.

        Args:
            **kwargs: Tool-specific arguments as defined in parameters

        Returns:
            ToolResult: The result of the tool execution
        """
        pass

    async def validate_and_execute(
        self,
        dependency_outputs: Optional[Mapping[str, ToolValue]] = None,
        **kwargs,
    ) -> ToolResult:
        """
        Validate parameters and execute the tool.

        This is the main entry point for tool execution.
        It handles validation, timeout and error handling; it never raises.
        """
        start_time = time.time()

        try:
            validated_args = self.validate_parameters(**kwargs)
            if self.uses_dependency_outputs:
                validated_args["dependency_outputs"] = dict(dependency_outputs or {})

            result = await asyncio.wait_for(
                self.execute(**validated_args),
                timeout=self.timeout_seconds
            )

            result.execution_time_ms = (time.time() - start_time) * 1000

            return result

        except asyncio.TimeoutError:
            return ToolResult.error_result(
                f"Tool execution timed out after {self.timeout_seconds} seconds",
                "TimeoutError"
            )
        except ToolValidationError as e:
            return ToolResult.error_result(str(e), "ValidationError")
        except ToolExecutionError as e:
            return ToolResult.error_result(str(e), "ExecutionError")
        except Exception as e:
            logger.exception(f"Unexpected error in tool {self.name}")
            return ToolResult.error_result(str(e), type(e).__name__)

    def validate_parameters(self, **kwargs) -> Dict[str, Any]:
        """
        Validate and normalize input parameters.

        Unknown arguments are dropped.

        Raises:
            ToolValidationError: If validation fails
        """
        validated = {}

        for param in self.parameters:
            value = kwargs.get(param.name)
            if value is None:
                if param.required:
                    raise ToolValidationError(
                        f"Required parameter '{param.name}' is missing"
                    )
                validated[param.name] = param.default
                continue

            if param.type == ParameterType.COORDINATES:
                validated[param.name] = self._to_coordinates(param, value)
            else:
                validated[param.name] = self._to_text(param, value)

        return validated

    def _to_text(self, param: ToolParameter, value: Any) -> str:
        text = str(value)
        if param.min_length is not None and len(text) < param.min_length:
            raise ToolValidationError(
                f"Parameter '{param.name}' must have length >= {param.min_length}"
            )
        return text

    def _to_coordinates(self, param: ToolParameter, value: Any) -> Coordinates:
        coordinates = match_coordinates(value)
        if coordinates is None:
            raise ToolValidationError(
                f"Parameter '{param.name}' must be a latitude/longitude pair"
            )
        return coordinates

    def get_schema(self) -> ToolSchema:
        """Get the tool schema."""
        return ToolSchema(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
        )

    def structured_inputs(self) -> Dict[str, type]:
        """Parameters filled by type-directed injection: name -> shape."""
        return {
            param.name: Coordinates
            for param in self.parameters
            if param.type == ParameterType.COORDINATES
        }

    def __repr__(self) -> str:
        return f"<Tool: {self.name} ({self.category.value})>"
