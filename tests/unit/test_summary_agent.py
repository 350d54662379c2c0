"""
Summary Agent Unit Tests

최종 요약 Agent의 단위 테스트입니다.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from goal_agent.agents import SummaryAgent
from goal_agent.errors import LLMError
from goal_agent.task_graph import FALLBACK_SUMMARY, Coordinates, TaskOutcome, TaskStatus


OUTCOMES = [
    TaskOutcome(id="task1", status=TaskStatus.SUCCEEDED, value=Coordinates(35.6895, 139.6917)),
    TaskOutcome(id="task2", status=TaskStatus.FAILED, error="boom"),
    TaskOutcome(id="task3", status=TaskStatus.SUCCEEDED, value='Calculation result for "80 * 0.15" is: 12'),
    TaskOutcome(id="task4", status=TaskStatus.SKIPPED, error="Skipped due to a failed dependency: task2"),
]


class TestSummaryAgent:
    """SummaryAgent 테스트"""

    def test_context_lists_successful_results_only(self):
        """성공한 Task 결과만 컨텍스트에 포함"""
        context = SummaryAgent.build_context(OUTCOMES)

        lines = context.split("\n")
        assert lines == [
            'Task task1 result: {"latitude": 35.6895, "longitude": 139.6917}',
            'Task task3 result: "Calculation result for \\"80 * 0.15\\" is: 12"',
        ]

    @pytest.mark.asyncio
    async def test_generate_final_summary(self, mock_llm_client):
        """목표와 결과를 담은 프롬프트로 요약 생성"""
        mock_llm_client.complete.return_value = "**Answer**: 12"
        agent = SummaryAgent(mock_llm_client)

        summary = await agent.generate_final_summary("What is 15% of 80?", OUTCOMES)

        assert summary == "**Answer**: 12"
        prompt = mock_llm_client.complete.await_args.args[0]
        assert 'The user\'s original goal was: "What is 15% of 80?"' in prompt
        assert "Task task3 result:" in prompt
        assert "task2" not in prompt

    @pytest.mark.asyncio
    async def test_fallback_without_llm_call(self, mock_llm_client):
        """성공 결과가 없으면 LLM 호출 없이 고정 문구"""
        agent = SummaryAgent(mock_llm_client)

        summary = await agent.generate_final_summary("goal", OUTCOMES[1:2])

        assert summary == FALLBACK_SUMMARY
        mock_llm_client.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_llm_failure_lists_results(self, mock_llm_client):
        """LLM 실패 시 성공 결과 나열로 대체"""
        mock_llm_client.complete.side_effect = LLMError("API Error (500): down")
        agent = SummaryAgent(mock_llm_client)

        summary = await agent.generate_final_summary("goal", OUTCOMES)

        assert summary.startswith("A final summary could not be generated.")
        assert "Task task3 result:" in summary
