"""
Tool System.
Named tools that plans refer to, plus the invoker the graph executor calls.
"""

from .tool_registry import ToolRegistry, get_tool_registry
from .tool_invoker import ToolInvoker
from .base_tool import BaseTool, ToolResult, ToolParameter
from .tool_schemas import ToolSchema, ToolCategory, ParameterType

__all__ = [
    "ToolRegistry",
    "get_tool_registry",
    "ToolInvoker",
    "BaseTool",
    "ToolResult",
    "ToolParameter",
    "ToolSchema",
    "ToolCategory",
    "ParameterType",
]
