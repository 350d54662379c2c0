#!/usr/bin/env python3
"""
Run Logger - 구조화된 로깅

Task 상태 전이를 구조화된 LogEntry로 기록하고,
선택적으로 외부 콜백(UI 브로드캐스트 등)에 전달합니다.
"""

import json
import logging
from datetime import datetime
from typing import Dict, Any, Optional, Callable, List
from dataclasses import dataclass, field
from enum import Enum

from ..task_graph.dag import TaskNode, TaskStatus


class LogLevel(str, Enum):
    """로그 레벨"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# Task 상태 -> 로그 레벨
STATUS_LEVELS = {
    TaskStatus.RUNNING: LogLevel.INFO,
    TaskStatus.SUCCEEDED: LogLevel.INFO,
    TaskStatus.FAILED: LogLevel.ERROR,
    TaskStatus.SKIPPED: LogLevel.WARNING,
}

PYTHON_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@dataclass
class LogEntry:
    """구조화된 로그 엔트리"""
    timestamp: str
    level: LogLevel
    message: str
    task_id: Optional[str] = None
    status: Optional[str] = None
    details: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "task_id": self.task_id,
            "status": self.status,
            "details": self.details,
            "metadata": self.metadata,
        }

    def to_json(self) -> str:
        """JSON 문자열로 변환"""
        return json.dumps(self.to_dict(), ensure_ascii=False)


class RunLogger:
    """
    실행 로거

    책임:
    - Task 전이마다 LogEntry 생성
    - Python logging으로 출력
    - 브로드캐스트 콜백 호출 (선택적)

    GraphExecutor의 observer로 바로 사용할 수 있습니다 (``__call__``).
    """

    def __init__(
        self,
        broadcast_callback: Optional[Callable[[LogEntry], None]] = None,
        logger_name: str = "goal_agent.run",
        keep_history: bool = True,
    ):
        """
        Args:
            broadcast_callback: LogEntry를 전달받을 콜백
            logger_name: Python 로거 이름
            keep_history: 생성된 엔트리 보관 여부
        """
        self._broadcast = broadcast_callback
        self._logger = logging.getLogger(logger_name)
        self._keep_history = keep_history
        self.entries: List[LogEntry] = []

    def clear(self) -> None:
        """보관된 엔트리 삭제"""
        self.entries.clear()

    def set_broadcast_callback(self, callback: Callable[[LogEntry], None]) -> None:
        """브로드캐스트 콜백 설정"""
        self._broadcast = callback

    def log(
        self,
        level: LogLevel,
        message: str,
        task_id: Optional[str] = None,
        status: Optional[str] = None,
        details: Optional[str] = None,
        **metadata
    ) -> LogEntry:
        """
        로그 기록

        Returns:
            생성된 LogEntry
        """
        entry = LogEntry(
            timestamp=datetime.now().isoformat(),
            level=level,
            message=message,
            task_id=task_id,
            status=status,
            details=details,
            metadata=metadata,
        )

        self._logger.log(PYTHON_LEVELS[level], entry.message)

        if self._keep_history:
            self.entries.append(entry)

        if self._broadcast:
            self._broadcast(entry)

        return entry

    def __call__(self, task: TaskNode) -> None:
        """Task 전이 observer"""
        level = STATUS_LEVELS.get(task.status, LogLevel.INFO)

        if task.status == TaskStatus.RUNNING:
            message = f"[{task.id}] running: {task.description} ({task.tool})"
            details = None
        elif task.status == TaskStatus.SUCCEEDED:
            message = f"[{task.id}] succeeded"
            details = task.result
        else:
            message = f"[{task.id}] {task.status.value}: {task.error}"
            details = task.error

        self.log(level, message, task_id=task.id, status=task.status.value,
                 details=details, tool=task.tool)

    def info(self, message: str, **metadata) -> LogEntry:
        """INFO 레벨 로그"""
        return self.log(LogLevel.INFO, message, **metadata)

    def warning(self, message: str, **metadata) -> LogEntry:
        """WARNING 레벨 로그"""
        return self.log(LogLevel.WARNING, message, **metadata)

    def error(self, message: str, **metadata) -> LogEntry:
        """ERROR 레벨 로그"""
        return self.log(LogLevel.ERROR, message, **metadata)
