"""
State Storage Unit Tests

Agent 상태 영구 저장의 단위 테스트입니다.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from goal_agent.models import AgentState, ExecutionPlan
from goal_agent.task_graph import TaskNode, TaskStatus
from goal_agent.utils.state_storage import StateStore


class TestStateStore:
    """StateStore 테스트"""

    @pytest.fixture
    def store(self, tmp_path):
        return StateStore(tmp_path / "nested" / "agent_state.json")

    @pytest.mark.asyncio
    async def test_save_and_load(self, store, sample_plan_data):
        """저장 후 로드"""
        state = AgentState(
            goal="Weather in Tokyo",
            plan=ExecutionPlan.model_validate(sample_plan_data),
            final_result="Sunny",
            is_done=True,
        )

        await store.save(state)
        loaded = await store.load()

        assert loaded == state

    @pytest.mark.asyncio
    async def test_load_missing(self, store):
        """파일이 없으면 None"""
        assert await store.load() is None

    @pytest.mark.asyncio
    async def test_load_corrupted(self, store):
        """손상된 파일은 None"""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")

        assert await store.load() is None

    @pytest.mark.asyncio
    async def test_clear(self, store):
        """삭제"""
        await store.save(AgentState(goal="goal"))
        await store.clear()

        assert not store.path.exists()
        await store.clear()

    def test_path_from_env(self, monkeypatch, tmp_path):
        """AGENT_STATE_FILE 환경 변수"""
        monkeypatch.setenv("AGENT_STATE_FILE", str(tmp_path / "custom.json"))
        assert StateStore().path == tmp_path / "custom.json"


class TestAgentState:
    """AgentState 테스트"""

    def test_apply_transition(self, sample_plan_data):
        """Task 전이를 계획에 반영"""
        state = AgentState(goal="goal", plan=ExecutionPlan.model_validate(sample_plan_data))
        node = TaskNode(id="task3", description="Math", tool="calculate",
                        status=TaskStatus.SUCCEEDED, result="12")

        state.apply_transition(node)

        task = state.plan.get_task("task3")
        assert task.status == TaskStatus.SUCCEEDED
        assert task.result == "12"

    def test_apply_transition_without_plan(self):
        """계획이 없으면 무시"""
        state = AgentState(goal="goal")
        state.apply_transition(TaskNode(id="x", description="", tool="calculate"))
        assert state.plan is None

    def test_planned_task_accepts_both_names(self):
        """dependsOn 별칭과 필드 이름 모두 허용"""
        plan = ExecutionPlan.model_validate({"tasks": [
            {"id": "a", "description": "A", "tool": "calculate", "args": {}, "dependsOn": []},
            {"id": "b", "description": "B", "tool": "calculate", "args": {}, "depends_on": ["a"]},
        ]})
        assert plan.get_task("b").depends_on == ["a"]
        assert plan.get_task("missing") is None
