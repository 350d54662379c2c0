"""
Task graph model.
Represents a plan's tasks and their dependencies as an arena of nodes keyed by id.
"""

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import uuid

from ..errors import InvalidTransitionError
from .values import ToolValue, to_display_text

logger = logging.getLogger(__name__)


class TaskStatus(str, Enum):
    """Status of a task node."""
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({TaskStatus.SUCCEEDED, TaskStatus.FAILED, TaskStatus.SKIPPED})

# queued -> running -> succeeded|failed, or queued -> skipped
ALLOWED_TRANSITIONS = {
    TaskStatus.QUEUED: frozenset({TaskStatus.RUNNING, TaskStatus.SKIPPED}),
    TaskStatus.RUNNING: frozenset({TaskStatus.SUCCEEDED, TaskStatus.FAILED}),
    TaskStatus.SUCCEEDED: frozenset(),
    TaskStatus.FAILED: frozenset(),
    TaskStatus.SKIPPED: frozenset(),
}


@dataclass(frozen=True)
class TaskOutcome:
    """Terminal result of a task, recorded once per run."""
    id: str
    status: TaskStatus
    value: ToolValue = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == TaskStatus.SUCCEEDED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "status": self.status.value,
            "value": to_display_text(self.value) if self.value is not None else None,
            "error": self.error,
        }


@dataclass
class TaskNode:
    """
    A node in the task graph.

    ``args`` and ``depends_on`` are fixed when the plan is built; only the
    scheduler changes ``status``, ``result``, ``error`` and the timestamps.
    """
    id: str
    description: str
    tool: str
    args: Dict[str, Any] = field(default_factory=dict)
    depends_on: Tuple[str, ...] = ()
    status: TaskStatus = TaskStatus.QUEUED
    result: Optional[str] = None
    error: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "description": self.description,
            "tool": self.tool,
            "args": dict(self.args),
            "dependsOn": list(self.depends_on),
            "status": self.status.value,
            "result": self.result,
            "error": self.error,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def snapshot(self) -> "TaskNode":
        """Copy of the node handed to observers."""
        return dataclasses.replace(self, args=dict(self.args))


class TaskGraph:
    """
    Arena of task nodes addressed by id, in plan order.

    Dependency links are plain id references, so cycles and references to
    ids that are not in the graph are representable; the executor resolves
    them at run time.

    Example:
        graph = TaskGraph()
        graph.add_task("task1", "Find Tokyo", tool="getLocationCoordinates",
                       args={"location": "Tokyo"})
        graph.add_task("task2", "Weather there", tool="getWeather",
                       depends_on=["task1"])

        executor = GraphExecutor(graph, invoke_tool=invoker.invoke)
        report = await executor.execute_all()
    """

    def __init__(self, name: Optional[str] = None):
        """Initialize the task graph."""
        self.name = name or f"graph_{uuid.uuid4().hex[:8]}"
        self._nodes: Dict[str, TaskNode] = {}
        self._outcomes: Dict[str, TaskOutcome] = {}

    @classmethod
    def from_plan(cls, tasks: Iterable[Any], name: Optional[str] = None) -> "TaskGraph":
        """
        Build a graph from planned tasks.

        Each item needs ``id``, ``description``, ``tool``, ``args`` and
        ``depends_on`` attributes (see ``models.plan.PlannedTask``).
        """
        graph = cls(name=name)
        for task in tasks:
            graph.add_task(
                task_id=task.id,
                description=task.description,
                tool=task.tool,
                args=task.args,
                depends_on=task.depends_on,
            )
        return graph

    def add_task(
        self,
        task_id: str,
        description: str,
        tool: str,
        args: Optional[Dict[str, Any]] = None,
        depends_on: Optional[Iterable[str]] = None,
    ) -> TaskNode:
        """
        Add a queued task to the graph.

        Raises:
            ValueError: If a task with the same id already exists
        """
        if task_id in self._nodes:
            raise ValueError(f"Duplicate task id: {task_id}")

        node = TaskNode(
            id=task_id,
            description=description,
            tool=tool,
            args=dict(args or {}),
            depends_on=tuple(depends_on or ()),
        )
        self._nodes[task_id] = node
        logger.debug(f"Added task {task_id}: {description}")
        return node

    def get_node(self, task_id: str) -> Optional[TaskNode]:
        """Get a task node by ID."""
        return self._nodes.get(task_id)

    def all_tasks(self) -> List[TaskNode]:
        """All task nodes in plan order."""
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._nodes

    def outcome_of(self, task_id: str) -> Optional[TaskOutcome]:
        """Recorded outcome for a task, or None if it has not finished."""
        return self._outcomes.get(task_id)

    def record_outcome(self, task_id: str, outcome: TaskOutcome) -> None:
        """
        Record the terminal outcome of a task.

        Raises:
            KeyError: If the task is unknown
            ValueError: If an outcome was already recorded or is not terminal
        """
        if task_id not in self._nodes:
            raise KeyError(f"Task not found: {task_id}")
        if task_id in self._outcomes:
            raise ValueError(f"Outcome already recorded for task {task_id}")
        if not outcome.status.is_terminal:
            raise ValueError(f"Outcome for {task_id} must be terminal, got {outcome.status.value}")
        self._outcomes[task_id] = outcome

    def outcomes(self) -> List[TaskOutcome]:
        """Recorded outcomes in plan order."""
        return [self._outcomes[task_id] for task_id in self._nodes if task_id in self._outcomes]

    def remaining(self) -> List[TaskNode]:
        """Tasks without a recorded outcome, in plan order."""
        return [node for task_id, node in self._nodes.items() if task_id not in self._outcomes]

    def update_task_status(
        self,
        task_id: str,
        status: TaskStatus,
        result: Optional[str] = None,
        error: Optional[str] = None,
    ) -> TaskNode:
        """
        Move a task to a new status.

        Raises:
            KeyError: If the task is unknown
            InvalidTransitionError: If the move breaks the status order
        """
        node = self._nodes.get(task_id)
        if node is None:
            raise KeyError(f"Task not found: {task_id}")

        if status not in ALLOWED_TRANSITIONS[node.status]:
            raise InvalidTransitionError(task_id, node.status.value, status.value)

        node.status = status

        if status == TaskStatus.RUNNING:
            node.started_at = datetime.utcnow()

        if status.is_terminal:
            node.completed_at = datetime.utcnow()
            node.result = result
            node.error = error

        return node

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the graph."""
        status_counts = {}
        for status in TaskStatus:
            status_counts[status.value] = sum(
                1 for node in self._nodes.values()
                if node.status == status
            )

        return {
            "total_tasks": len(self._nodes),
            "status_counts": status_counts,
            "graph_name": self.name,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert graph to dictionary."""
        return {
            "name": self.name,
            "tasks": [node.to_dict() for node in self._nodes.values()],
            "stats": self.get_stats(),
        }
