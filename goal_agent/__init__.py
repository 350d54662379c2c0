"""
Goal Agent

사용자 목표를 Tool 호출 Task 그래프로 계획하고, 의존성 순서에 따라
wave 단위로 병렬 실행한 뒤 결과를 요약합니다.
"""

__version__ = "1.0.0"
