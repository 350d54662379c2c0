"""
Shared base for tools that call JSON HTTP APIs.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from ..base_tool import BaseTool, ToolExecutionError


class HttpJsonTool(BaseTool):
    """Tool that fetches JSON over HTTP with aiohttp."""

    timeout_seconds = 20
    user_agent = "goal-agent/1.0"

    async def _fetch_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET ``url`` and decode the JSON body.

        Raises:
            ToolExecutionError: On network errors, non-200 responses or timeouts
        """
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                    headers={"User-Agent": self.user_agent},
                ) as response:
                    if response.status != 200:
                        raise ToolExecutionError(
                            f"HTTP {response.status}: {response.reason}"
                        )
                    return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise ToolExecutionError(f"Request to {url} failed: {e}")
        except asyncio.TimeoutError:
            raise ToolExecutionError(f"Request timed out after {self.timeout_seconds}s")
