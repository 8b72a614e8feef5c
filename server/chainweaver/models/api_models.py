"""API request and response models."""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import Field

from .base import CamelModel
from .llm import ProviderConfig, TokenUsage
from .workflow import Workflow, WorkflowExecution


class WorkflowExecutionRequest(CamelModel):
    workflow: Workflow = Field(..., description="Workflow to execute")
    input_prompt: str = Field(..., description="Runtime input text")
    provider_configs: Dict[str, ProviderConfig] = Field(..., description="API key per provider id")
    user_id: Optional[str] = Field(None, description="Caller ID")


class WorkflowExecutionResponse(CamelModel):
    success: bool = Field(..., description="True when the execution completed")
    execution: WorkflowExecution = Field(..., description="Execution record")
    total_time: int = Field(..., description="Request wall-clock time in milliseconds")
    timestamp: datetime = Field(...)


class ApiKeyValidationRequest(CamelModel):
    provider: str = Field(..., description="Provider id")
    api_key: str = Field(..., description="API key to check")


class ApiKeyValidationResponse(CamelModel):
    provider: str
    valid: bool


class LLMTestRequest(CamelModel):
    provider: str = Field(..., description="Provider id")
    api_key: str = Field(..., description="Provider API key")
    model: str = Field(..., description="Model id")
    prompt: str = Field(..., description="Prompt to send")
    temperature: Optional[float] = Field(None)
    max_tokens: Optional[int] = Field(None)
    system_prompt: Optional[str] = Field(None)


class LLMTestResponse(CamelModel):
    success: bool
    provider: str
    model: str
    response: str
    usage: TokenUsage
    cost: float
    execution_time: int = Field(..., description="Request wall-clock time in milliseconds")
    timestamp: datetime


class ProviderInfo(CamelModel):
    id: str
    name: str
    models: List[str]


class ProvidersResponse(CamelModel):
    providers: List[ProviderInfo]
