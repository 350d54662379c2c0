"""
Outcome aggregation.
Collects terminal outcomes after a run and hands them to the summary generator.
"""

import logging
from typing import Awaitable, Callable, List, Sequence

from .dag import TaskGraph, TaskOutcome, TaskStatus

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = (
    "The process finished, but no tasks were successfully completed. "
    "Unable to provide a final summary."
)

# (goal, outcomes) -> summary text
SummaryGenerateFunc = Callable[[str, List[TaskOutcome]], Awaitable[str]]


def collect_outcomes(graph: TaskGraph) -> List[TaskOutcome]:
    """Every recorded outcome (succeeded, failed and skipped) in plan order."""
    return graph.outcomes()


def has_successful_outcome(outcomes: Sequence[TaskOutcome]) -> bool:
    return any(outcome.status == TaskStatus.SUCCEEDED for outcome in outcomes)


class OutcomeAggregator:
    """
    Turns a finished run into the final answer.

    The summary generator only sees runs with at least one successful task;
    otherwise the fixed fallback text is returned without calling it.
    """

    def __init__(self, generate_summary: SummaryGenerateFunc):
        self.generate_summary = generate_summary

    async def summarize(self, goal: str, outcomes: Sequence[TaskOutcome]) -> str:
        outcomes = list(outcomes)
        if not has_successful_outcome(outcomes):
            logger.info("No task succeeded, using fallback summary")
            return FALLBACK_SUMMARY

        logger.info(f"Generating final summary from {len(outcomes)} outcome(s)")
        return await self.generate_summary(goal, outcomes)

    async def summarize_graph(self, goal: str, graph: TaskGraph) -> str:
        return await self.summarize(goal, collect_outcomes(graph))
