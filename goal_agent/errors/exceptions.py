"""
Exceptions - 커스텀 예외 클래스

프로젝트 전체에서 사용하는 표준화된 예외 클래스입니다.
"""

from typing import Optional, Dict, Any


class GoalAgentError(Exception):
    """Goal Agent 기본 에러 클래스"""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            message: 에러 메시지
            code: 에러 코드
            details: 추가 상세 정보
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict:
        """에러를 딕셔너리로 변환"""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class PlanningError(GoalAgentError):
    """계획 생성 실패 시 발생 (실행이 시작되지 않음)"""

    def __init__(self, message: str, goal: Optional[str] = None):
        super().__init__(
            message=message,
            code="PLANNING_ERROR",
            details={"goal": goal} if goal else {}
        )


class ToolError(GoalAgentError):
    """단일 Task의 Tool 실행 실패"""

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        code: str = "TOOL_ERROR"
    ):
        super().__init__(
            message=message,
            code=code,
            details={"tool_name": tool_name} if tool_name else {}
        )
        self.tool_name = tool_name


class ResolutionError(ToolError):
    """구조화된 입력값을 의존성 결과에서 찾지 못한 경우"""

    def __init__(self, tool_name: str, argument: str):
        super().__init__(
            message=(
                f"Tool '{tool_name}' requires a structured '{argument}' value, "
                f"but no dependency produced one"
            ),
            tool_name=tool_name,
            code="RESOLUTION_ERROR",
        )
        self.details["argument"] = argument
        self.argument = argument


class LLMError(GoalAgentError):
    """LLM 호출 관련 에러"""

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(
            message=message,
            code="LLM_ERROR",
            details={
                "model": model,
                "status_code": status_code
            }
        )
        self.status_code = status_code


class InvalidTransitionError(GoalAgentError):
    """허용되지 않은 Task 상태 전이"""

    def __init__(self, task_id: str, current: str, target: str):
        super().__init__(
            message=f"Task '{task_id}' cannot move from {current} to {target}",
            code="INVALID_TRANSITION",
            details={"task_id": task_id, "from": current, "to": target}
        )


class TaskTimeoutError(ToolError):
    """Task 실행이 설정된 제한 시간을 넘은 경우"""

    def __init__(self, timeout_seconds: float, tool_name: Optional[str] = None):
        super().__init__(
            message=f"Timeout after {timeout_seconds}s",
            tool_name=tool_name,
            code="TASK_TIMEOUT",
        )
        self.timeout_seconds = timeout_seconds
