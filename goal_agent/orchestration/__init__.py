"""
Orchestration - 목표 실행 세션과 실행 로깅
"""

from .logger import LogEntry, LogLevel, RunLogger
from .session import AgentSession, SessionResult

__all__ = [
    "AgentSession",
    "SessionResult",
    "RunLogger",
    "LogEntry",
    "LogLevel",
]
