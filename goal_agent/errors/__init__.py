"""
Errors - 에러 처리 모듈

계획, Tool 실행, 상태 전이에 대한 표준화된 예외를 제공합니다.
"""

from .exceptions import (
    GoalAgentError,
    PlanningError,
    ToolError,
    ResolutionError,
    TaskTimeoutError,
    LLMError,
    InvalidTransitionError,
)

__all__ = [
    "GoalAgentError",
    "PlanningError",
    "ToolError",
    "ResolutionError",
    "TaskTimeoutError",
    "LLMError",
    "InvalidTransitionError",
]
