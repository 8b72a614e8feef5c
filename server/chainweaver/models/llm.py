"""LLM request/response models shared by every provider."""

from typing import Optional
from pydantic import Field

from .base import CamelModel


class ProviderConfig(CamelModel):
    api_key: str = Field(..., description="Provider API key")
    base_url: Optional[str] = Field(None, description="Override of the vendor base URL")
    timeout: Optional[float] = Field(None, description="Request timeout in seconds")


class LLMConfig(CamelModel):
    model: str = Field(..., description="Model identifier")
    temperature: Optional[float] = Field(None)
    max_tokens: Optional[int] = Field(None)
    system_prompt: Optional[str] = Field(None)
    top_p: Optional[float] = Field(None)
    frequency_penalty: Optional[float] = Field(None)
    presence_penalty: Optional[float] = Field(None)


class TokenUsage(CamelModel):
    prompt_tokens: int = Field(0)
    completion_tokens: int = Field(0)
    total_tokens: int = Field(0)


class LLMResponse(CamelModel):
    content: str = Field(..., description="Generated text")
    usage: TokenUsage = Field(default_factory=TokenUsage)
    cost: float = Field(0.0, description="Cost in USD")
    execution_time: int = Field(0, description="Wall-clock time in milliseconds")
    model: str = Field(..., description="Model that produced the response")
    provider: str = Field(..., description="Provider id")
