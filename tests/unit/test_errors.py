"""
Errors Unit Tests

표준 예외와 관찰자 합성의 단위 테스트입니다.
"""

from unittest.mock import MagicMock

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from goal_agent.errors import (
    GoalAgentError,
    LLMError,
    PlanningError,
    ResolutionError,
    ToolError,
)
from goal_agent.task_graph import CompositeObserver, TaskNode


class TestExceptions:
    """예외 클래스 테스트"""

    def test_to_dict(self):
        error = PlanningError("Planner returned invalid JSON", goal="Weather")
        assert error.to_dict() == {
            "code": "PLANNING_ERROR",
            "message": "Planner returned invalid JSON",
            "details": {"goal": "Weather"},
        }

    def test_hierarchy(self):
        """모든 예외는 GoalAgentError"""
        assert isinstance(ResolutionError("getWeather", "coordinates"), ToolError)
        assert isinstance(LLMError("x"), GoalAgentError)

    def test_resolution_error_details(self):
        error = ResolutionError("getWeather", "coordinates")
        assert error.code == "RESOLUTION_ERROR"
        assert error.details == {"tool_name": "getWeather", "argument": "coordinates"}


class TestCompositeObserver:
    """CompositeObserver 테스트"""

    def test_fan_out_continues_after_failure(self):
        """한 observer가 실패해도 나머지는 호출"""
        first = MagicMock(side_effect=RuntimeError("broken"))
        second = MagicMock()
        composite = CompositeObserver([first])
        composite.add(second)
        node = TaskNode(id="a", description="A", tool="calculate")

        composite(node)

        first.assert_called_once_with(node)
        second.assert_called_once_with(node)
        assert len(composite) == 2
