"""
Run Logger Unit Tests

Task 전이 로깅의 단위 테스트입니다.
"""

import json
import logging
from unittest.mock import MagicMock

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from goal_agent.orchestration import LogLevel, RunLogger
from goal_agent.task_graph import TaskNode, TaskStatus


def make_node(status: TaskStatus, result=None, error=None) -> TaskNode:
    return TaskNode(id="task1", description="Find Tokyo", tool="getLocationCoordinates",
                    status=status, result=result, error=error)


class TestRunLogger:
    """RunLogger 테스트"""

    def test_transition_levels(self):
        """상태별 로그 레벨"""
        run_logger = RunLogger()

        run_logger(make_node(TaskStatus.RUNNING))
        run_logger(make_node(TaskStatus.SUCCEEDED, result="ok"))
        run_logger(make_node(TaskStatus.FAILED, error="boom"))
        run_logger(make_node(TaskStatus.SKIPPED, error="blocked"))

        assert [e.level for e in run_logger.entries] == [
            LogLevel.INFO, LogLevel.INFO, LogLevel.ERROR, LogLevel.WARNING,
        ]
        assert run_logger.entries[1].details == "ok"
        assert run_logger.entries[2].message == "[task1] failed: boom"
        assert all(e.task_id == "task1" for e in run_logger.entries)

    def test_broadcast_callback(self):
        """브로드캐스트 콜백 호출"""
        callback = MagicMock()
        run_logger = RunLogger(broadcast_callback=callback, keep_history=False)

        run_logger(make_node(TaskStatus.RUNNING))

        callback.assert_called_once()
        entry = callback.call_args.args[0]
        assert entry.status == "running"
        assert entry.metadata == {"tool": "getLocationCoordinates"}
        assert run_logger.entries == []

    def test_python_logging(self, caplog):
        """Python logging으로 출력"""
        run_logger = RunLogger(logger_name="goal_agent.test")

        with caplog.at_level(logging.INFO, logger="goal_agent.test"):
            run_logger.warning("careful")

        assert "careful" in caplog.text

    def test_entry_json(self):
        """LogEntry JSON 변환"""
        entry = RunLogger().info("Plan ready", task_count=3)

        data = json.loads(entry.to_json())
        assert data["level"] == "info"
        assert data["metadata"] == {"task_count": 3}

    def test_clear(self):
        """보관된 엔트리 삭제"""
        run_logger = RunLogger()
        run_logger.info("first run")

        run_logger.clear()
        run_logger.info("second run")

        assert [e.message for e in run_logger.entries] == ["second run"]
