"""
Agents - LLM 기반 계획/요약 Agent
"""

from .planner_agent import PlannerAgent
from .summary_agent import SummaryAgent

__all__ = [
    "PlannerAgent",
    "SummaryAgent",
]
