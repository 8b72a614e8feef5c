"""Workflow data models and type definitions."""

from .enums import NodeType, ProviderType, ExecutionStatus, StepStatus
from .llm import ProviderConfig, LLMConfig, TokenUsage, LLMResponse
from .workflow import (
    NodeLLMConfig,
    InputNodeData,
    LLMNodeData,
    OutputNodeData,
    TransformNodeData,
    InputNode,
    LLMNode,
    OutputNode,
    TransformNode,
    WorkflowNode,
    WorkflowEdge,
    Workflow,
    ExecutionStep,
    NodeDebugEntry,
    WorkflowExecution,
    ValidationResult
)
from .api_models import (
    WorkflowExecutionRequest,
    WorkflowExecutionResponse,
    ApiKeyValidationRequest,
    ApiKeyValidationResponse,
    LLMTestRequest,
    LLMTestResponse,
    ProviderInfo,
    ProvidersResponse
)

__all__ = [
    # Enums
    'NodeType',
    'ProviderType',
    'ExecutionStatus',
    'StepStatus',
    # LLM
    'ProviderConfig',
    'LLMConfig',
    'TokenUsage',
    'LLMResponse',
    # Workflow
    'NodeLLMConfig',
    'InputNodeData',
    'LLMNodeData',
    'OutputNodeData',
    'TransformNodeData',
    'InputNode',
    'LLMNode',
    'OutputNode',
    'TransformNode',
    'WorkflowNode',
    'WorkflowEdge',
    'Workflow',
    'ExecutionStep',
    'NodeDebugEntry',
    'WorkflowExecution',
    'ValidationResult',
    # API Models
    'WorkflowExecutionRequest',
    'WorkflowExecutionResponse',
    'ApiKeyValidationRequest',
    'ApiKeyValidationResponse',
    'LLMTestRequest',
    'LLMTestResponse',
    'ProviderInfo',
    'ProvidersResponse'
]
