#!/usr/bin/env python3
"""
Planner Agent - 목표를 실행 계획으로 분해

사용자 목표를 LLM에 전달하여 Tool 호출 Task와 의존성으로 구성된
ExecutionPlan을 생성합니다.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from ..errors import LLMError, PlanningError
from ..models.plan import ExecutionPlan
from ..services.llm_client import LLMClient
from ..task_graph.dag import TaskStatus
from ..tools.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


PLANNER_PROMPT = """You are an expert AI planner. Your job is to break down a user's goal into a series of tasks that can be executed by a machine.

You have access to the following tools:
{tools}

Rules:
1.  Create a step-by-step plan as a JSON object of the form {{"tasks": [...]}}.
2.  Each task has "id", "description", "tool", "args" and "dependsOn".
3.  Each task must have a unique 'id' (e.g., "task1", "task2").
4.  Define dependencies ('dependsOn') correctly. A task can only depend on tasks that come before it. If a task needs data from another, list its ID in 'dependsOn'. The output of the dependency will be available. You can reference dependency results in args using the format '{{{{task_id}}}}', e.g., {{ "query": "summarize {{{{task1}}}}" }}.
5.  To get the weather, first add a getLocationCoordinates task (or getCurrentLocation for "here"), then a getWeather task that depends on it.
6.  Keep descriptions concise and clear.
7.  Ensure the plan logically flows to achieve the user's final goal.

User Goal: "{goal}"

Generate the JSON execution plan."""


class PlannerAgent:
    """
    목표 -> ExecutionPlan 생성기

    LLM 응답을 pydantic 스키마로 검증하며, 어떤 실패든 PlanningError로 전달합니다.
    """

    def __init__(self, llm_client: LLMClient, registry: ToolRegistry):
        self.llm_client = llm_client
        self.registry = registry

    def build_prompt(self, goal: str) -> str:
        return PLANNER_PROMPT.format(
            tools=self.registry.describe_for_planner(),
            goal=goal,
        )

    async def generate_plan(self, goal: str) -> ExecutionPlan:
        """
        실행 계획 생성

        Raises:
            PlanningError: LLM 호출 실패, JSON 파싱 실패, 스키마 위반
        """
        if not goal or not goal.strip():
            raise PlanningError("Goal must not be empty")

        logger.info(f"Generating plan for goal: {goal[:100]}")

        try:
            response = await self.llm_client.call(
                [{"role": "user", "content": self.build_prompt(goal)}],
                json_mode=True,
            )
        except LLMError as e:
            raise PlanningError(f"Planner is unavailable: {e.message}", goal=goal) from e

        return self.parse_plan(response, goal)

    def parse_plan(self, response: str, goal: Optional[str] = None) -> ExecutionPlan:
        """LLM 응답 텍스트를 검증된 ExecutionPlan으로 변환"""
        try:
            data = self.llm_client.parse_json(response)
        except json.JSONDecodeError as e:
            raise PlanningError(f"Planner returned invalid JSON: {e}", goal=goal) from e

        try:
            plan = ExecutionPlan.model_validate(data)
        except ValidationError as e:
            raise PlanningError(
                f"Planner returned an invalid plan: {e.error_count()} error(s), "
                f"first: {e.errors()[0]['msg']}",
                goal=goal,
            ) from e

        unknown = [task.tool for task in plan.tasks if self.registry.get(task.tool) is None]
        if unknown:
            raise PlanningError(f"Plan uses unavailable tools: {', '.join(unknown)}", goal=goal)

        # 새 계획의 Task는 항상 queued 상태로 시작
        for task in plan.tasks:
            task.status = TaskStatus.QUEUED
            task.result = None
            task.error = None

        logger.info(f"Plan created with {len(plan.tasks)} task(s)")
        return plan
