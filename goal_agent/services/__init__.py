"""
Services - 외부 API 클라이언트
"""

from .llm_client import LLMClient

__all__ = [
    "LLMClient",
]
