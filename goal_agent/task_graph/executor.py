"""
Graph Executor for executing task graphs.
Runs tasks in waves: every task whose dependencies have all succeeded is
started together, and the next wave begins only after the whole wave ended.
"""

import asyncio
import logging
import os
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional
from dataclasses import dataclass, field

from ..errors import TaskTimeoutError
from .dag import TaskGraph, TaskNode, TaskOutcome, TaskStatus
from .observer import CompositeObserver, TransitionObserver
from .resolver import ArgumentResolver
from .values import ToolValue, to_display_text

logger = logging.getLogger(__name__)


# (tool name, resolved args, dependency outputs) -> value
ToolInvokeFunc = Callable[[str, Dict[str, Any], Dict[str, ToolValue]], Awaitable[ToolValue]]

UNMET_DEPENDENCIES_REASON = "Skipped due to unmet or failed dependencies"
FAILED_DEPENDENCY_REASON = "Skipped due to a failed dependency"
CANCELLED_REASON = "Run cancelled before the task could start"
UNKNOWN_ERROR = "An unknown error occurred"


@dataclass
class ExecutionConfig:
    """Configuration for graph execution."""
    max_parallel: Optional[int] = None
    timeout_seconds: Optional[float] = None

    @classmethod
    def from_env(cls) -> "ExecutionConfig":
        """Read MAX_PARALLEL_TASKS and TOOL_TIMEOUT_SECONDS (unset or 0 = no limit)."""
        max_parallel = int(os.getenv("MAX_PARALLEL_TASKS", "0"))
        timeout = float(os.getenv("TOOL_TIMEOUT_SECONDS", "0"))
        return cls(
            max_parallel=max_parallel or None,
            timeout_seconds=timeout or None,
        )


@dataclass
class ExecutionReport:
    """Outcome of a full graph run."""
    outcomes: List[TaskOutcome]
    waves_executed: int
    execution_time_seconds: float
    cancelled: bool = False
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> List[TaskOutcome]:
        return [o for o in self.outcomes if o.status == TaskStatus.SUCCEEDED]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "outcomes": [o.to_dict() for o in self.outcomes],
            "waves_executed": self.waves_executed,
            "execution_time_seconds": self.execution_time_seconds,
            "cancelled": self.cancelled,
            "stats": self.stats,
        }


class GraphExecutor:
    """
    Executes a task graph in dependency-respecting waves.

    Features:
    - Concurrent execution of every ready task in a wave
    - Per-task failure containment (a failing task never aborts its siblings)
    - Cascading skips for dependents of failed tasks
    - Deadlock check that skips tasks which can never become ready
      (cycles, unknown dependency ids, blocked chains)

    Example:
        executor = GraphExecutor(graph, invoke_tool=invoker.invoke,
                                 on_transition=print_transition)
        report = await executor.execute_all()
    """

    def __init__(
        self,
        graph: TaskGraph,
        invoke_tool: ToolInvokeFunc,
        resolver: Optional[ArgumentResolver] = None,
        on_transition: Optional[TransitionObserver] = None,
        config: Optional[ExecutionConfig] = None,
    ):
        """
        Initialize the graph executor.

        Args:
            graph: The task graph to execute
            invoke_tool: Async function running one tool invocation
            resolver: Argument resolver (defaults to placeholder substitution only)
            on_transition: Observer called once per status change
            config: Execution configuration
        """
        self.graph = graph
        self.invoke_tool = invoke_tool
        self.resolver = resolver or ArgumentResolver()
        self.config = config or ExecutionConfig()

        self._observer = CompositeObserver([on_transition] if on_transition else [])
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._cancel_event: Optional[asyncio.Event] = None
        self._waves = 0

    def cancel(self) -> None:
        """Stop starting new waves. Queued tasks will be skipped."""
        if self._cancel_event is None:
            self._cancel_event = asyncio.Event()
        self._cancel_event.set()

    async def execute_all(self, cancel_event: Optional[asyncio.Event] = None) -> ExecutionReport:
        """
        Execute all tasks in the graph.

        Args:
            cancel_event: Optional run-scoped signal checked before each wave

        Returns:
            ExecutionReport with every task's outcome in plan order
        """
        if cancel_event is not None:
            self._cancel_event = cancel_event
        elif self._cancel_event is None:
            self._cancel_event = asyncio.Event()

        if self.config.max_parallel and self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.config.max_parallel)

        start_time = time.time()
        cancelled = False
        self._waves = 0

        logger.info(f"Starting execution of graph '{self.graph.name}' ({len(self.graph)} task(s))")

        while True:
            queued = self._queued()
            if not queued:
                break

            if self._cancel_event.is_set():
                logger.warning(f"Run cancelled, skipping {len(queued)} queued task(s)")
                for node in queued:
                    self._skip(node, CANCELLED_REASON)
                cancelled = True
                break

            frontier = [node for node in queued if self._dependencies_succeeded(node)]

            if not frontier:
                logger.warning(
                    f"No runnable tasks left, skipping {len(queued)} task(s) "
                    f"with unmet dependencies"
                )
                for node in queued:
                    self._skip(node, self._unmet_reason(node))
                break

            self._waves += 1
            logger.info(
                f"Executing wave {self._waves} ({len(frontier)} task(s): "
                f"{', '.join(node.id for node in frontier)})"
            )
            await self._execute_wave(frontier)
            self._cascade_failures()

        elapsed = time.time() - start_time
        stats = self.graph.get_stats()
        report = ExecutionReport(
            outcomes=self.graph.outcomes(),
            waves_executed=self._waves,
            execution_time_seconds=round(elapsed, 2),
            cancelled=cancelled,
            stats=stats,
        )

        counts = stats["status_counts"]
        logger.info(
            f"Execution complete: {counts['succeeded']} succeeded, {counts['failed']} failed, "
            f"{counts['skipped']} skipped in {self._waves} wave(s), {elapsed:.2f}s"
        )
        return report

    async def _execute_wave(self, frontier: List[TaskNode]) -> None:
        """Start every frontier task and wait until all of them finished."""
        for node in frontier:
            self._transition(node.id, TaskStatus.RUNNING)

        results = await asyncio.gather(
            *(self._execute_single_task(node) for node in frontier),
            return_exceptions=True,
        )

        # _execute_single_task records its own outcome; this only catches
        # failures in the bookkeeping itself.
        for node, result in zip(frontier, results):
            if isinstance(result, BaseException) and self.graph.outcome_of(node.id) is None:
                logger.error(f"Task {node.id} ended without an outcome: {result!r}")
                self._finish(node, TaskStatus.FAILED, error=str(result) or UNKNOWN_ERROR)

    async def _execute_single_task(self, node: TaskNode) -> None:
        """Resolve arguments, invoke the tool and record the outcome."""
        dependency_outputs = {
            dep_id: self.graph.outcome_of(dep_id).value for dep_id in node.depends_on
        }
        start_time = time.time()

        try:
            args = self.resolver.resolve(node.tool, node.args, dependency_outputs)
            if self._semaphore is not None:
                async with self._semaphore:
                    value = await self._invoke(node, args, dependency_outputs)
            else:
                value = await self._invoke(node, args, dependency_outputs)
        except TaskTimeoutError as e:
            logger.warning(f"Task {node.id} ({node.tool}) timed out")
            self._finish(node, TaskStatus.FAILED, error=e.message)
            return
        except Exception as e:
            logger.warning(f"Task {node.id} ({node.tool}) failed: {e}")
            self._finish(node, TaskStatus.FAILED, error=str(e) or UNKNOWN_ERROR)
            return

        logger.debug(
            f"Task {node.id} succeeded ({(time.time() - start_time) * 1000:.0f}ms)"
        )
        self._finish(node, TaskStatus.SUCCEEDED, value=value)

    async def _invoke(
        self,
        node: TaskNode,
        args: Dict[str, Any],
        dependency_outputs: Dict[str, ToolValue],
    ) -> ToolValue:
        call = self.invoke_tool(node.tool, args, dict(dependency_outputs))
        if not self.config.timeout_seconds:
            return await call

        # Errors raised by the tool stay on the task; only the deadline raises TaskTimeoutError
        task = asyncio.ensure_future(call)
        done, _ = await asyncio.wait({task}, timeout=self.config.timeout_seconds)
        if not done:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            raise TaskTimeoutError(self.config.timeout_seconds, tool_name=node.tool)
        return task.result()

    def _cascade_failures(self) -> None:
        """Skip queued tasks that depend directly on a failed task."""
        for node in self._queued():
            failed = [
                dep_id for dep_id in node.depends_on
                if self._status_of(dep_id) == TaskStatus.FAILED
            ]
            if failed:
                self._skip(node, f"{FAILED_DEPENDENCY_REASON}: {', '.join(failed)}")

    def _queued(self) -> List[TaskNode]:
        return [node for node in self.graph.all_tasks() if node.status == TaskStatus.QUEUED]

    def _status_of(self, task_id: str) -> Optional[TaskStatus]:
        """Recorded terminal status, or None while the task has no outcome."""
        outcome = self.graph.outcome_of(task_id)
        return outcome.status if outcome else None

    def _dependencies_succeeded(self, node: TaskNode) -> bool:
        return all(
            self._status_of(dep_id) == TaskStatus.SUCCEEDED for dep_id in node.depends_on
        )

    def _unmet_reason(self, node: TaskNode) -> str:
        unmet = [
            dep_id for dep_id in node.depends_on
            if self._status_of(dep_id) != TaskStatus.SUCCEEDED
        ]
        if not unmet:
            return f"{UNMET_DEPENDENCIES_REASON}."
        return f"{UNMET_DEPENDENCIES_REASON}: {', '.join(unmet)}"

    def _skip(self, node: TaskNode, reason: str) -> None:
        self._finish(node, TaskStatus.SKIPPED, error=reason)

    def _finish(
        self,
        node: TaskNode,
        status: TaskStatus,
        value: ToolValue = None,
        error: Optional[str] = None,
    ) -> None:
        """Record a terminal outcome, then report the transition."""
        self.graph.record_outcome(
            node.id,
            TaskOutcome(id=node.id, status=status, value=value, error=error),
        )
        result = to_display_text(value) if status == TaskStatus.SUCCEEDED else None
        self._transition(node.id, status, result=result, error=error)

    def _transition(
        self,
        task_id: str,
        status: TaskStatus,
        result: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        node = self.graph.update_task_status(task_id, status, result=result, error=error)
        self._observer(node.snapshot())
