"""
Tool Invoker for the tool system.
Runs one named tool for a task and turns failed results into ToolError.
"""

from typing import Any, Dict, Mapping, Optional
import logging

from ..errors import ToolError
from ..task_graph.values import ToolValue
from .tool_registry import ToolRegistry, get_tool_registry

logger = logging.getLogger(__name__)


class ToolInvoker:
    """
    Executes registered tools on behalf of the graph executor.

    ``invoke`` keeps no per-call state, so concurrent calls for different
    tasks are safe.

    Example:
        invoker = ToolInvoker(registry)
        executor = GraphExecutor(graph, invoke_tool=invoker.invoke)
    """

    def __init__(self, registry: Optional[ToolRegistry] = None):
        self.registry = registry or get_tool_registry()

    async def invoke(
        self,
        tool_name: str,
        args: Dict[str, Any],
        dependency_outputs: Optional[Mapping[str, ToolValue]] = None,
    ) -> ToolValue:
        """
        Invoke a tool.

        Args:
            tool_name: Registered tool name
            args: Resolved arguments
            dependency_outputs: Outputs of the task's dependencies

        Returns:
            The tool's output value

        Raises:
            ToolError: If the tool is unknown or its execution failed
        """
        tool = self.registry.get(tool_name)
        if tool is None:
            raise ToolError(f'Tool "{tool_name}" not found.', tool_name=tool_name)

        logger.debug(f"Invoking {tool_name} with args {list(args)}")
        result = await tool.validate_and_execute(
            dependency_outputs=dependency_outputs,
            **args,
        )

        if not result.success:
            raise ToolError(
                result.error or f'Tool "{tool_name}" failed.',
                tool_name=tool_name,
            )

        logger.debug(f"{tool_name} finished in {result.execution_time_ms:.0f}ms")
        return result.output
