from typing import Optional

from pydantic import BaseModel

from ..task_graph.dag import TaskNode
from .plan import ExecutionPlan


class AgentState(BaseModel):
    """Latest goal, plan and answer, as persisted between sessions."""
    goal: str
    plan: Optional[ExecutionPlan] = None
    final_result: Optional[str] = None
    is_done: bool = False

    def apply_transition(self, node: TaskNode) -> None:
        """Copy a task's new status, result and error into the plan."""
        if self.plan is None:
            return
        task = self.plan.get_task(node.id)
        if task is None:
            return
        task.status = node.status
        task.result = node.result
        task.error = node.error
