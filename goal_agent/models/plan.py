from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..task_graph.dag import TaskStatus

ToolName = Literal[
    "webSearch",
    "calculate",
    "getWeather",
    "summarize",
    "getCurrentLocation",
    "getLocationCoordinates",
]


class PlannedTask(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    description: str
    tool: ToolName
    args: Dict[str, Any]
    depends_on: List[str] = Field(alias="dependsOn")
    status: TaskStatus = TaskStatus.QUEUED
    result: Optional[str] = None
    error: Optional[str] = None


class ExecutionPlan(BaseModel):
    tasks: List[PlannedTask] = Field(min_length=1)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "ExecutionPlan":
        seen = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id: {task.id}")
            seen.add(task.id)
        return self

    def get_task(self, task_id: str) -> Optional[PlannedTask]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None
