from .plan import ExecutionPlan, PlannedTask, ToolName
from .state import AgentState

__all__ = [
    "ExecutionPlan",
    "PlannedTask",
    "ToolName",
    "AgentState",
]
