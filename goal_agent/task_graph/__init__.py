"""
Task Graph system.
Provides the task model, argument resolution and wave-based execution.
"""

from .dag import TaskGraph, TaskNode, TaskOutcome, TaskStatus
from .values import Coordinates, ToolValue, to_display_text, to_json_text
from .resolver import ArgumentResolver, substitute_placeholders
from .observer import CompositeObserver, TransitionObserver
from .executor import ExecutionConfig, ExecutionReport, GraphExecutor, ToolInvokeFunc
from .aggregator import FALLBACK_SUMMARY, OutcomeAggregator, collect_outcomes

__all__ = [
    # DAG
    "TaskGraph",
    "TaskNode",
    "TaskOutcome",
    "TaskStatus",
    # Values
    "Coordinates",
    "ToolValue",
    "to_display_text",
    "to_json_text",
    # Resolver
    "ArgumentResolver",
    "substitute_placeholders",
    # Observer
    "CompositeObserver",
    "TransitionObserver",
    # Executor
    "ExecutionConfig",
    "ExecutionReport",
    "GraphExecutor",
    "ToolInvokeFunc",
    # Aggregator
    "FALLBACK_SUMMARY",
    "OutcomeAggregator",
    "collect_outcomes",
]
