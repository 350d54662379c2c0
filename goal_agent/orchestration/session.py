#!/usr/bin/env python3
"""
Agent Session - 목표 제출부터 최종 답변까지

계획 생성 -> 상태 저장 -> 그래프 실행 -> 요약 -> 최종 상태 저장 흐름을 관리합니다.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from ..errors import GoalAgentError, PlanningError
from ..models.plan import ExecutionPlan
from ..models.state import AgentState
from ..task_graph.aggregator import OutcomeAggregator
from ..task_graph.dag import TaskGraph, TaskOutcome
from ..task_graph.executor import ExecutionConfig, ExecutionReport, GraphExecutor
from ..task_graph.observer import CompositeObserver, TransitionObserver
from ..task_graph.resolver import ArgumentResolver
from ..task_graph.values import ToolValue
from ..utils.state_storage import StateStore
from .logger import RunLogger

logger = logging.getLogger(__name__)

PlanGenerateFunc = Callable[[str], Awaitable[ExecutionPlan]]
ToolInvokeFunc = Callable[[str, Dict[str, Any], Dict[str, ToolValue]], Awaitable[ToolValue]]
SummaryGenerateFunc = Callable[[str, List[TaskOutcome]], Awaitable[str]]


@dataclass
class SessionResult:
    """한 번의 목표 실행 결과"""
    state: AgentState
    report: ExecutionReport

    @property
    def final_result(self) -> Optional[str]:
        return self.state.final_result


class AgentSession:
    """
    Agent 세션

    책임:
    - 목표 -> 계획 (PlanningError는 호출자에게 그대로 전달)
    - 계획 실행 및 상태 전이 반영
    - 최종 요약 생성 및 상태 저장

    Example:
        session = AgentSession.create_default()
        result = await session.submit_goal("What's the weather in Tokyo?")
        print(result.final_result)
    """

    def __init__(
        self,
        generate_plan: PlanGenerateFunc,
        invoke_tool: ToolInvokeFunc,
        generate_summary: SummaryGenerateFunc,
        resolver: Optional[ArgumentResolver] = None,
        store: Optional[StateStore] = None,
        observers: Optional[Sequence[TransitionObserver]] = None,
        config: Optional[ExecutionConfig] = None,
        run_logger: Optional[RunLogger] = None,
    ):
        self.generate_plan = generate_plan
        self.invoke_tool = invoke_tool
        self.aggregator = OutcomeAggregator(generate_summary)
        self.resolver = resolver or ArgumentResolver()
        self.store = store
        self.observers: List[TransitionObserver] = list(observers or [])
        self.config = config or ExecutionConfig()
        self.run_logger = run_logger or RunLogger()

        self.state: Optional[AgentState] = None
        self._executor: Optional[GraphExecutor] = None
        self._cancel_event: Optional[asyncio.Event] = None
        self._closers: List[Callable[[], Awaitable[None]]] = []

    @classmethod
    def create_default(
        cls,
        observers: Optional[Sequence[TransitionObserver]] = None,
        store: Optional[StateStore] = None,
    ) -> "AgentSession":
        """환경 변수 설정으로 LLM, Tool, 저장소를 구성한 세션 생성"""
        from ..agents import PlannerAgent, SummaryAgent
        from ..services.llm_client import LLMClient
        from ..tools import ToolInvoker, ToolRegistry
        from ..tools.builtin import register_all_builtin_tools

        llm_client = LLMClient()
        registry = ToolRegistry()
        register_all_builtin_tools(registry, llm_client)

        planner = PlannerAgent(llm_client, registry)
        summarizer = SummaryAgent(llm_client)
        invoker = ToolInvoker(registry)

        session = cls(
            generate_plan=planner.generate_plan,
            invoke_tool=invoker.invoke,
            generate_summary=summarizer.generate_final_summary,
            resolver=ArgumentResolver(registry.structured_inputs()),
            store=store or StateStore(),
            observers=observers,
            config=ExecutionConfig.from_env(),
        )
        session._closers.append(llm_client.close)
        return session

    @property
    def is_running(self) -> bool:
        return self._cancel_event is not None

    async def submit_goal(self, goal: str) -> SessionResult:
        """
        목표 실행

        Raises:
            PlanningError: 계획 생성 실패 (실행은 시작되지 않음)
            GoalAgentError: 이미 실행 중인 경우
        """
        if self.is_running:
            raise GoalAgentError("A run is already in progress", code="RUN_IN_PROGRESS")

        self._cancel_event = asyncio.Event()
        try:
            return await self._run(goal)
        finally:
            self._cancel_event = None
            self._executor = None

    async def _run(self, goal: str) -> SessionResult:
        self.run_logger.clear()
        self.state = AgentState(goal=goal)
        await self._save()

        try:
            plan = await self.generate_plan(goal)
        except PlanningError as e:
            logger.error(f"Planning failed: {e.message}")
            self.state = None
            await self._clear()
            raise

        self.state = AgentState(goal=goal, plan=plan)
        await self._save()
        self.run_logger.info(f"Plan ready with {len(plan.tasks)} task(s)")

        graph = TaskGraph.from_plan(plan.tasks, name=goal[:50])
        observer = CompositeObserver([self.state.apply_transition, self.run_logger, *self.observers])

        self._executor = GraphExecutor(
            graph,
            invoke_tool=self.invoke_tool,
            resolver=self.resolver,
            on_transition=observer,
            config=self.config,
        )
        report = await self._executor.execute_all(cancel_event=self._cancel_event)

        summary = await self.aggregator.summarize(goal, report.outcomes)

        self.state.final_result = summary
        self.state.is_done = True
        await self._save()

        return SessionResult(state=self.state, report=report)

    def cancel(self) -> None:
        """진행 중인 실행에서 새 wave 시작을 중단"""
        if self._cancel_event is not None:
            self._cancel_event.set()

    async def load_state(self) -> Optional[AgentState]:
        """저장된 마지막 상태 로드"""
        if self.store is None:
            return self.state
        self.state = await self.store.load()
        return self.state

    async def reset(self) -> None:
        """상태 초기화"""
        self.state = None
        await self._clear()

    async def close(self) -> None:
        for closer in self._closers:
            await closer()

    async def _save(self) -> None:
        if self.store is not None and self.state is not None:
            await self.store.save(self.state)

    async def _clear(self) -> None:
        if self.store is not None:
            await self.store.clear()
