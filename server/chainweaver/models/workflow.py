"""Workflow graph, execution step and execution record models."""

from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel
from .enums import ExecutionStatus, StepStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NodeLLMConfig(CamelModel):
    """Sampling parameters authored on an llm node."""
    temperature: Optional[float] = Field(None)
    max_tokens: Optional[int] = Field(None)
    top_p: Optional[float] = Field(None)
    frequency_penalty: Optional[float] = Field(None)
    presence_penalty: Optional[float] = Field(None)
    system_prompt: Optional[str] = Field(None)


class InputNodeData(CamelModel):
    label: Optional[str] = Field(None, description="Editor label")
    prompt: Optional[str] = Field(None, description="Authored text, replaced by the runtime input")


class LLMNodeData(CamelModel):
    label: Optional[str] = Field(None, description="Editor label")
    provider: Optional[str] = Field(None, description="Provider id")
    model: Optional[str] = Field(None, description="Model id")
    prompt: Optional[str] = Field(None, description="Prompt template with {name} placeholders")
    config: NodeLLMConfig = Field(default_factory=NodeLLMConfig)

    @field_validator("config", mode="before")
    @classmethod
    def _null_config_to_defaults(cls, value):
        # editor payloads send "config": null for untouched nodes
        return {} if value is None else value


class OutputNodeData(CamelModel):
    label: Optional[str] = Field(None, description="Editor label")


class TransformNodeData(CamelModel):
    label: Optional[str] = Field(None, description="Editor label")


class _BaseNode(CamelModel):
    id: str = Field(..., description="Node ID")
    position: Dict[str, float] = Field(default={"x": 0, "y": 0})

    @property
    def label(self) -> str:
        return self.data.label or self.id


class InputNode(_BaseNode):
    type: Literal["input"] = "input"
    data: InputNodeData = Field(default_factory=InputNodeData)


class LLMNode(_BaseNode):
    type: Literal["llm"] = "llm"
    data: LLMNodeData = Field(default_factory=LLMNodeData)


class OutputNode(_BaseNode):
    type: Literal["output"] = "output"
    data: OutputNodeData = Field(default_factory=OutputNodeData)


class TransformNode(_BaseNode):
    type: Literal["transform"] = "transform"
    data: TransformNodeData = Field(default_factory=TransformNodeData)


WorkflowNode = Annotated[
    Union[InputNode, LLMNode, OutputNode, TransformNode],
    Field(discriminator="type")
]


class WorkflowEdge(CamelModel):
    id: str = Field(..., description="Edge ID")
    source: str = Field(..., description="Source node ID")
    target: str = Field(..., description="Target node ID")
    source_handle: Optional[str] = Field(None)
    target_handle: Optional[str] = Field(None)


class Workflow(CamelModel):
    id: str = Field(..., description="Workflow ID")
    name: str = Field("", description="Workflow name")
    description: Optional[str] = Field(None)
    nodes: List[WorkflowNode] = Field(default_factory=list, description="Node list")
    edges: List[WorkflowEdge] = Field(default_factory=list, description="Edge list")
    user_id: Optional[str] = Field(None)
    is_template: bool = Field(False)
    is_public: bool = Field(False)
    created_at: Optional[datetime] = Field(None)
    updated_at: Optional[datetime] = Field(None)

    def get_node(self, node_id: str) -> Optional[WorkflowNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def outgoing_edges(self, node_id: str) -> List[WorkflowEdge]:
        return [edge for edge in self.edges if edge.source == node_id]


class ExecutionStep(CamelModel):
    """One executed llm node. Replaced, never mutated, when finalized."""
    model_config = ConfigDict(frozen=True)

    node_id: str = Field(..., description="Node ID")
    provider: str = Field(..., description="Provider id")
    model: str = Field(..., description="Model id")
    prompt: str = Field(..., description="Resolved prompt sent to the provider")
    output: Optional[str] = Field(None, description="Provider output")
    cost: float = Field(0.0, description="Cost in USD")
    execution_time: int = Field(0, description="Wall-clock time in milliseconds")
    status: StepStatus = Field(StepStatus.RUNNING)
    error: Optional[str] = Field(None)


class NodeDebugEntry(CamelModel):
    id: str = Field(..., description="Node ID")
    label: Optional[str] = Field(None)
    prompt: str = Field(..., description="Prompt actually sent")
    output: str = Field("", description="Output actually received")
    recommendations: Optional[str] = Field(None, description="<B_Edits> content")
    reasoning: Optional[str] = Field(None, description="<B_Reasoning> content")


class WorkflowExecution(CamelModel):
    id: str = Field(..., description="Execution ID")
    workflow_id: str = Field(..., description="Workflow ID")
    user_id: str = Field(..., description="Caller ID")
    input_prompt: str = Field(..., description="Original input")
    output_result: Optional[str] = Field(None, description="Final output")
    total_cost: float = Field(0.0)
    execution_time_ms: Optional[int] = Field(None)
    status: ExecutionStatus = Field(ExecutionStatus.RUNNING)
    error: Optional[str] = Field(None)
    node_debug: Optional[List[NodeDebugEntry]] = Field(None)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ValidationResult(CamelModel):
    is_valid: bool = Field(..., description="True when no errors were found")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
