"""
LLM-backed text tools.
Provides the webSearch and summarize tools.
"""

from typing import Dict, Optional

from ...errors import LLMError
from ...services.llm_client import LLMClient
from ...task_graph.values import ToolValue, to_display_text
from ..base_tool import BaseTool, ToolExecutionError
from ..tool_schemas import (
    ToolResult,
    ToolParameter,
    ParameterType,
    ToolCategory,
)


class LLMTool(BaseTool):
    """Base for tools answered by the LLM."""

    timeout_seconds = 120

    def __init__(self, llm_client: LLMClient):
        super().__init__()
        self.llm_client = llm_client

    async def _complete(self, prompt: str) -> str:
        try:
            return await self.llm_client.complete(prompt)
        except LLMError as e:
            raise ToolExecutionError(f"{self.name} failed: {e.message}")


class WebSearchTool(LLMTool):
    """Look up information for a query."""

    name = "webSearch"
    description = "Use to find information on the internet."
    category = ToolCategory.SEARCH

    parameters = [
        ToolParameter(
            name="query",
            type=ParameterType.STRING,
            description="The search query",
            required=True,
            min_length=2,
        ),
    ]

    async def execute(self, query: str) -> ToolResult:
        """Execute the search."""
        prompt = (
            f"Please search for: {query}\n\n"
            "Answer with the most relevant, up-to-date facts you know. "
            "Be concise and mention your sources when you can."
        )
        summary = await self._complete(prompt)
        return ToolResult.success_result(f"Search Summary: {summary}", query=query)


class SummarizeTool(LLMTool):
    """Summarize text, or the outputs of the task's dependencies."""

    name = "summarize"
    description = "Use to summarize a large block of text."
    category = ToolCategory.TEXT
    uses_dependency_outputs = True

    parameters = [
        ToolParameter(
            name="query",
            type=ParameterType.STRING,
            description="Text to summarize; dependency results are used when empty",
            required=False,
            default="",
        ),
    ]

    async def execute(
        self,
        query: str = "",
        dependency_outputs: Optional[Dict[str, ToolValue]] = None,
    ) -> ToolResult:
        """Execute the summarization."""
        text = query.strip()
        if not text and dependency_outputs:
            text = "\n\n".join(
                f"{task_id}: {to_display_text(value)}"
                for task_id, value in dependency_outputs.items()
            )
        if not text:
            raise ToolExecutionError("Nothing to summarize")

        summary = await self._complete(f"Please summarize the following text: \n\n{text}")
        return ToolResult.success_result(summary)
