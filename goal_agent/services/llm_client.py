"""
LLM Client - OpenAI 호환 Chat Completions 클라이언트

Connection pooling, retry, timeout을 지원합니다.
Planner, Summarizer, webSearch/summarize Tool이 공유합니다.
"""

import asyncio
import json
import logging
import math
import os
import time
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Optional

import aiohttp

from ..errors import LLMError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = {429, 500, 502, 503, 504}
MAX_RETRY_AFTER_SECONDS = 60.0


def retry_after_seconds(value: Optional[str]) -> Optional[float]:
    """
    Retry-After 헤더를 대기 시간(초)으로 변환

    초 단위 숫자와 HTTP-date 형식을 모두 받습니다. 해석할 수 없으면 None을
    돌려주고, 호출 측은 기본 backoff를 사용합니다.
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        try:
            seconds = parsedate_to_datetime(value).timestamp() - time.time()
        except (TypeError, ValueError, IndexError, OverflowError):
            return None
    if math.isnan(seconds):
        return None
    return min(max(seconds, 0.0), MAX_RETRY_AFTER_SECONDS)


class LLMClient:
    """
    LLM API 클라이언트

    설정은 환경 변수에서 읽습니다:
    LLM_API_URL, LLM_API_KEY, LLM_MODEL, LLM_TEMPERATURE, LLM_MAX_TOKENS
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        self.api_url = api_url or os.getenv("LLM_API_URL", "https://api.openai.com/v1/chat/completions")
        self.api_key = api_key if api_key is not None else os.getenv("LLM_API_KEY", "")
        self.model = model or os.getenv("LLM_MODEL", "gpt-4o-mini")
        self.default_temperature = float(os.getenv("LLM_TEMPERATURE", "0.2"))
        self.max_tokens = int(os.getenv("LLM_MAX_TOKENS", "2000"))
        self.timeout = aiohttp.ClientTimeout(total=120, connect=10)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._session: Optional[aiohttp.ClientSession] = None

        if not self.api_key:
            logger.warning("LLM_API_KEY is not set; LLM calls will fail")

    async def _get_session(self) -> aiohttp.ClientSession:
        """세션 재사용 (Connection pooling)"""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=20, limit_per_host=10)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=self.timeout
            )
        return self._session

    async def close(self) -> None:
        """세션 종료"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def call(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        json_mode: bool = False
    ) -> str:
        """
        LLM API 호출 with retry & timeout

        Returns:
            응답 텍스트

        Raises:
            LLMError: API 키 누락, 재시도 후에도 실패, 빈 응답
        """
        if not self.api_key:
            raise LLMError("LLM_API_KEY is not set", model=self.model)

        session = await self._get_session()

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}"
        }

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": temperature if temperature is not None else self.default_temperature,
            "stream": False
        }

        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        last_error = "Unknown error"
        last_status: Optional[int] = None
        logger.debug(f"Calling LLM: {self.api_url}, model={self.model}, messages={len(messages)}")

        for attempt in range(self.max_retries):
            try:
                async with session.post(self.api_url, headers=headers, json=payload) as response:
                    last_status = response.status
                    if response.status == 200:
                        data = await response.json()
                        content = self._extract_content(data)
                        if not content:
                            raise LLMError("LLM returned an empty response", model=self.model)
                        return content

                    error_text = await response.text()
                    last_error = f"API Error ({response.status}): {error_text[:500]}"
                    logger.warning(f"[LLM] {last_error}")

                    if response.status not in RETRYABLE_STATUSES:
                        break

                    if response.status == 429:
                        retry_after = retry_after_seconds(response.headers.get("Retry-After"))
                        if retry_after is not None:
                            await asyncio.sleep(retry_after)
                            continue

            except asyncio.TimeoutError:
                last_error = "Timeout"
                logger.warning(f"[LLM] Timeout on attempt {attempt + 1}")
            except aiohttp.ClientError as e:
                last_error = str(e)
                logger.warning(f"[LLM] Error on attempt {attempt + 1}: {e}")

            if attempt < self.max_retries - 1:
                await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise LLMError(last_error, model=self.model, status_code=last_status)

    async def complete(self, prompt: str, **kwargs) -> str:
        """단일 user 메시지 호출"""
        return await self.call([{"role": "user", "content": prompt}], **kwargs)

    @staticmethod
    def _extract_content(data: Dict[str, Any]) -> str:
        """OpenAI 형식 응답에서 텍스트 추출"""
        choices = data.get("choices") or []
        if not choices:
            return ""
        choice = choices[0]
        if "message" in choice:
            return choice["message"].get("content") or ""
        return choice.get("text") or ""

    @staticmethod
    def parse_json(text: str) -> Any:
        """
        응답 텍스트에서 JSON 추출

        ```json 코드 블록이나 앞뒤 설명이 섞여 있어도 첫 번째 객체를 파싱합니다.

        Raises:
            json.JSONDecodeError: JSON을 찾지 못한 경우
        """
        text = text.strip()
        if text.startswith("```"):
            text = text.strip("`")
            if text.lower().startswith("json"):
                text = text[4:]
        start, end = text.find("{"), text.rfind("}")
        if start != -1 and end > start:
            text = text[start:end + 1]
        return json.loads(text)
