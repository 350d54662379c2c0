#!/usr/bin/env python3
"""
Summary Agent - 최종 답변 생성

성공한 Task 결과를 모아 사용자 목표에 대한 최종 요약을 작성합니다.
"""

import logging
from typing import Sequence

from ..errors import LLMError
from ..services.llm_client import LLMClient
from ..task_graph.aggregator import FALLBACK_SUMMARY
from ..task_graph.dag import TaskOutcome, TaskStatus
from ..task_graph.values import to_json_text

logger = logging.getLogger(__name__)


SUMMARY_PROMPT = """You are a helpful AI assistant.
The user's original goal was: "{goal}".

The following tasks were successfully executed with their results:
{context}

Based on these results, provide a comprehensive, well-formatted summary that directly addresses the user's original goal. Use Markdown for formatting if helpful (e.g., lists, bold text)."""


class SummaryAgent:
    """TaskOutcome 목록 -> 최종 요약 텍스트"""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    @staticmethod
    def build_context(outcomes: Sequence[TaskOutcome]) -> str:
        return "\n".join(
            f"Task {outcome.id} result: {to_json_text(outcome.value)}"
            for outcome in outcomes
            if outcome.status == TaskStatus.SUCCEEDED
        )

    async def generate_final_summary(self, goal: str, outcomes: Sequence[TaskOutcome]) -> str:
        """
        최종 요약 생성

        성공한 Task가 없으면 LLM을 호출하지 않고 고정 문구를 반환합니다.
        LLM 호출이 실패하면 성공한 결과를 나열한 텍스트로 대체합니다.
        """
        context = self.build_context(outcomes)
        if not context:
            return FALLBACK_SUMMARY

        try:
            return await self.llm_client.complete(
                SUMMARY_PROMPT.format(goal=goal, context=context)
            )
        except LLMError as e:
            logger.error(f"Summary generation failed: {e.message}")
            return (
                "A final summary could not be generated. "
                f"Results of the completed tasks:\n{context}"
            )
