"""
Pytest Configuration and Fixtures

테스트 전역 설정 및 공유 fixtures입니다.
"""

import pytest
from unittest.mock import MagicMock, AsyncMock

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from goal_agent.services.llm_client import LLMClient
from goal_agent.tools import ToolRegistry
from goal_agent.tools.builtin import register_all_builtin_tools


@pytest.fixture
def mock_llm_client() -> MagicMock:
    """LLMClient 모킹 (parse_json은 실제 구현 사용)"""
    client = MagicMock()
    client.call = AsyncMock(return_value="")
    client.complete = AsyncMock(return_value="")
    client.close = AsyncMock()
    client.parse_json = LLMClient.parse_json
    return client


@pytest.fixture
def registry(mock_llm_client) -> ToolRegistry:
    """내장 Tool이 모두 등록된 레지스트리"""
    registry = ToolRegistry()
    register_all_builtin_tools(registry, mock_llm_client)
    return registry


@pytest.fixture
def sample_plan_data() -> dict:
    """샘플 계획 (LLM 응답 형식)"""
    return {
        "tasks": [
            {
                "id": "task1",
                "description": "Find the coordinates of Tokyo",
                "tool": "getLocationCoordinates",
                "args": {"location": "Tokyo"},
                "dependsOn": []
            },
            {
                "id": "task2",
                "description": "Get the weather in Tokyo",
                "tool": "getWeather",
                "args": {"location": "Tokyo"},
                "dependsOn": ["task1"]
            },
            {
                "id": "task3",
                "description": "Calculate 15% of 80",
                "tool": "calculate",
                "args": {"expression": "80 * 0.15"},
                "dependsOn": []
            }
        ]
    }
