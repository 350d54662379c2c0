"""
Agent 상태 영구 저장 유틸리티

최근 {goal, plan, final_result, is_done}을 JSON 파일에 저장하고 로드합니다.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

import aiofiles
from pydantic import ValidationError

from ..models.state import AgentState

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = Path("data") / "agent_state.json"


class StateStore:
    """AgentState JSON 파일 저장소"""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or os.getenv("AGENT_STATE_FILE", str(DEFAULT_STATE_FILE)))

    async def save(self, state: AgentState) -> None:
        """상태 저장"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(state.model_dump_json(indent=2))
        logger.debug(f"Saved agent state to {self.path}")

    async def load(self) -> Optional[AgentState]:
        """저장된 상태 로드 (없거나 손상된 경우 None)"""
        if not self.path.exists():
            return None

        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()

        try:
            return AgentState.model_validate_json(raw)
        except (ValidationError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable agent state in {self.path}: {e}")
            return None

    async def clear(self) -> None:
        """저장된 상태 삭제"""
        if self.path.exists():
            self.path.unlink()
            logger.debug(f"Cleared agent state at {self.path}")
