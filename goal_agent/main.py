#!/usr/bin/env python3
"""
Goal Agent 메인 엔트리포인트

사용법:
    python -m goal_agent "What's the weather in Tokyo and what is 15% of 80?"
"""
import os
import sys

# 출력 버퍼링 비활성화 (진행 상황 즉시 출력)
sys.stdout.reconfigure(line_buffering=True)
sys.stderr.reconfigure(line_buffering=True)

# 환경 변수는 반드시 다른 import 전에 로드해야 함!
from dotenv import load_dotenv
load_dotenv()

import asyncio
import logging
import signal
from typing import List, Optional

from goal_agent.errors import PlanningError
from goal_agent.orchestration import AgentSession
from goal_agent.task_graph import TaskNode, TaskStatus

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("goal_agent")

STATUS_ICONS = {
    TaskStatus.RUNNING: "▶",
    TaskStatus.SUCCEEDED: "✓",
    TaskStatus.FAILED: "✗",
    TaskStatus.SKIPPED: "-",
}


def print_transition(task: TaskNode) -> None:
    """Task 상태 전이를 콘솔에 출력"""
    icon = STATUS_ICONS.get(task.status, " ")
    line = f"{icon} [{task.id}] {task.status.value:<9} {task.description}"
    if task.status == TaskStatus.SUCCEEDED and task.result:
        line += f"\n    {task.result}"
    elif task.error:
        line += f"\n    {task.error}"
    print(line)


async def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    goal = " ".join(argv).strip() or input("Goal: ").strip()

    session = AgentSession.create_default(observers=[print_transition])

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, session.cancel)
    except (NotImplementedError, RuntimeError):
        pass  # Windows

    try:
        result = await session.submit_goal(goal)
    except PlanningError as e:
        print(f"Could not create a plan: {e.message}", file=sys.stderr)
        return 1
    finally:
        await session.close()

    report = result.report
    counts = report.stats["status_counts"]
    print(
        f"\n{counts['succeeded']} succeeded, {counts['failed']} failed, "
        f"{counts['skipped']} skipped in {report.waves_executed} wave(s)"
        + (" (cancelled)" if report.cancelled else "")
    )
    print(f"\n{result.final_result}")
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
