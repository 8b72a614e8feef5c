"""Enum types for workflow models."""

from enum import Enum
from typing import List


class NodeType(str, Enum):
    INPUT = "input"
    LLM = "llm"
    OUTPUT = "output"
    TRANSFORM = "transform"


class ProviderType(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    DEEPSEEK = "deepseek"

    @classmethod
    def get_supported_providers(cls) -> List[str]:
        """지원되는 LLM Provider 목록 반환"""
        return [provider.value for provider in cls]

    @classmethod
    def is_supported(cls, provider: str) -> bool:
        return provider in cls.get_supported_providers()


class ExecutionStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class StepStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
