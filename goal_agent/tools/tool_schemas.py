"""
Tool schema definitions for the tool system.
Provides parameter metadata and the result type shared by all tools.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..task_graph.values import ToolValue


class ToolCategory(str, Enum):
    """Categories of tools."""
    SEARCH = "search"
    MATH = "math"
    TEXT = "text"
    LOCATION = "location"
    WEATHER = "weather"
    CUSTOM = "custom"


class ParameterType(str, Enum):
    """Supported parameter types."""
    STRING = "string"
    COORDINATES = "coordinates"  # injected from a dependency's output


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: ParameterType
    description: str
    required: bool = True
    default: Any = None
    min_length: Optional[int] = None

    @property
    def is_structured(self) -> bool:
        return self.type == ParameterType.COORDINATES

    def to_json_schema(self) -> Dict[str, Any]:
        """Convert to JSON Schema format."""
        if self.type == ParameterType.COORDINATES:
            schema: Dict[str, Any] = {
                "type": "object",
                "description": self.description,
                "properties": {
                    "latitude": {"type": "number"},
                    "longitude": {"type": "number"},
                },
                "required": ["latitude", "longitude"],
            }
            return schema

        schema = {
            "type": self.type.value,
            "description": self.description,
        }

        if self.default is not None:
            schema["default"] = self.default
        if self.min_length is not None:
            schema["minLength"] = self.min_length

        return schema


@dataclass
class ToolSchema:
    """Schema definition for a tool."""
    name: str
    description: str
    parameters: List[ToolParameter] = field(default_factory=list)

    def to_json_schema(self) -> Dict[str, Any]:
        """Convert to JSON Schema format."""
        properties = {}
        required = []

        for param in self.parameters:
            properties[param.name] = param.to_json_schema()
            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def describe(self) -> str:
        """One-line description used in the planner prompt."""
        arg_parts = []
        for param in self.parameters:
            if param.is_structured:
                arg_parts.append(f'"{param.name}": <taken from a dependency>')
            else:
                suffix = "" if param.required else " (optional)"
                arg_parts.append(f'"{param.name}": {param.type.value}{suffix}')
        args = ", ".join(arg_parts)
        return f"- '{self.name}': {self.description} Args: {{ {args} }}."


@dataclass
class ToolResult:
    """Result of a tool execution."""
    success: bool
    output: ToolValue
    error: Optional[str] = None
    error_type: Optional[str] = None
    execution_time_ms: float = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success_result(cls, output: ToolValue, **metadata) -> "ToolResult":
        """Create a successful result."""
        return cls(success=True, output=output, metadata=metadata)

    @classmethod
    def error_result(cls, error: str, error_type: str = "ExecutionError") -> "ToolResult":
        """Create an error result."""
        return cls(success=False, output=None, error=error, error_type=error_type)
