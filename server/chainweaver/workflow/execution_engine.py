"""
Workflow execution engine - 단일 입력 노드에서 출발하는 선형 체인 실행
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from ..config import EXECUTION_CONFIG, LLM_CONFIG
from ..core import TAG_EXTRACTIONS, build_template_variables, extract_tag, resolve_template
from ..models import (
    ExecutionStatus,
    ExecutionStep,
    InputNode,
    LLMConfig,
    LLMNode,
    NodeDebugEntry,
    OutputNode,
    ProviderConfig,
    StepStatus,
    TransformNode,
    ValidationResult,
    Workflow,
    WorkflowExecution,
    WorkflowNode
)
from ..services import ProviderFactory, ProviderRegistry, create_provider
from ..utils import NodeExecutionError, WorkflowExecutionError, elapsed_ms, handle_llm_error, truncate_text
from .validator import WorkflowValidator

logger = logging.getLogger(__name__)


class WorkflowExecutionEngine:
    """
    노드 기반 워크플로우 실행 엔진

    실행 알고리즘:
    1. 요청에 포함된 providerConfigs로 요청 전용 ProviderRegistry 구성
    2. 유일한 input-node 탐색
    3. 첫 번째 outgoing edge를 따라 llm-node를 순서대로 실행
    4. output-node 또는 막다른 노드에서 종료

    The engine holds no per-execution state: the registry and the execution
    context live only inside one ``execute_workflow`` call, so one engine can
    serve concurrent executions.
    """

    def __init__(
        self,
        provider_factory: ProviderFactory = create_provider,
        max_chain_length: int = EXECUTION_CONFIG["max_chain_length"]
    ):
        self.provider_factory = provider_factory
        self.max_chain_length = max_chain_length
        self.validator = WorkflowValidator()

    def validate_workflow(self, workflow: Workflow) -> ValidationResult:
        return self.validator.validate_workflow(workflow)

    async def execute_workflow(
        self,
        workflow: Workflow,
        input_prompt: str,
        user_id: str,
        provider_configs: Mapping[str, Union[ProviderConfig, Mapping[str, Any]]]
    ) -> WorkflowExecution:
        """워크플로우 전체 실행. 실패도 예외 대신 failed 상태의 실행 기록으로 반환"""
        start_time = time.time()
        execution = WorkflowExecution(
            id=str(uuid.uuid4()),
            workflow_id=workflow.id,
            user_id=user_id,
            input_prompt=input_prompt,
            status=ExecutionStatus.RUNNING
        )
        steps: List[ExecutionStep] = []

        logger.info(f"Starting execution {execution.id} of workflow '{workflow.id}' ({len(workflow.nodes)} nodes)")

        try:
            registry = ProviderRegistry(self.provider_factory)
            for provider_type, config in provider_configs.items():
                registry.register(provider_type, config)

            input_node = self._find_input_node(workflow)
            output = await self._walk_chain(workflow, input_node, input_prompt, registry, steps)

            execution.output_result = output
            execution.status = ExecutionStatus.COMPLETED
        except Exception as e:
            logger.error(f"Execution {execution.id} failed: {str(e)}")
            execution.output_result = None
            execution.status = ExecutionStatus.FAILED
            execution.error = str(e) or type(e).__name__

        execution.total_cost = sum(step.cost for step in steps)
        execution.execution_time_ms = elapsed_ms(start_time)
        execution.node_debug = self._build_node_debug(workflow, steps)
        execution.updated_at = datetime.now(timezone.utc)

        logger.info(
            f"Execution {execution.id} {execution.status.value} in {execution.execution_time_ms}ms "
            f"({len(steps)} llm steps, cost ${execution.total_cost:.6f})"
        )
        return execution

    def _find_input_node(self, workflow: Workflow) -> InputNode:
        for node in workflow.nodes:
            if isinstance(node, InputNode):
                return node
        raise WorkflowExecutionError("Workflow must have an input node")

    async def _walk_chain(
        self,
        workflow: Workflow,
        start_node: WorkflowNode,
        input_prompt: str,
        registry: ProviderRegistry,
        steps: List[ExecutionStep]
    ) -> str:
        """
        첫 번째 outgoing edge만 따라가는 반복 실행

        The caller's runtime text seeds the chain; the input node's authored
        prompt is ignored.
        """
        context: Dict[str, str] = {}
        visited = set()
        current_node = start_node
        current_output = input_prompt

        while True:
            if current_node.id in visited:
                raise WorkflowExecutionError(f"Cycle detected at node {current_node.id}")
            visited.add(current_node.id)
            if len(visited) > self.max_chain_length:
                raise WorkflowExecutionError(
                    f"Workflow exceeds the maximum chain length of {self.max_chain_length} nodes"
                )

            if isinstance(current_node, LLMNode):
                step = await self._execute_llm_node(current_node, input_prompt, context, registry)
                steps.append(step)
                if step.status == StepStatus.FAILED:
                    raise NodeExecutionError(step.error, node_id=current_node.id)
                current_output = step.output
            elif isinstance(current_node, (InputNode, TransformNode, OutputNode)):
                pass
            else:
                raise WorkflowExecutionError(f"Unsupported node type for node {current_node.id}")

            context[current_node.id] = current_output

            outgoing_edges = workflow.outgoing_edges(current_node.id)
            if not outgoing_edges:
                return current_output

            next_edge = outgoing_edges[0]
            if len(outgoing_edges) > 1:
                logger.warning(
                    f"Node {current_node.id} has {len(outgoing_edges)} outgoing edges; following {next_edge.target}"
                )

            next_node = workflow.get_node(next_edge.target)
            if next_node is None:
                raise WorkflowExecutionError(f"Next node {next_edge.target} not found")

            if isinstance(next_node, OutputNode):
                return current_output

            current_node = next_node

    async def _execute_llm_node(
        self,
        node: LLMNode,
        input_prompt: str,
        context: Mapping[str, str],
        registry: ProviderRegistry
    ) -> ExecutionStep:
        """단일 llm-node 실행. 실패는 예외 대신 failed 상태의 step으로 반환"""
        start_time = time.time()
        data = node.data
        provider_type = data.provider or LLM_CONFIG["default_provider"]
        model = data.model or LLM_CONFIG["default_model"]

        variables = build_template_variables(input_prompt, context)
        prompt = resolve_template(data.prompt or "{input}", variables)

        step = ExecutionStep(
            node_id=node.id,
            provider=provider_type,
            model=model,
            prompt=prompt,
            status=StepStatus.RUNNING
        )
        logger.info(f"Node {node.id} [{provider_type}/{model}] prompt: {truncate_text(prompt, EXECUTION_CONFIG['log_preview_length'])}")

        try:
            provider = registry.get(provider_type)
            response = await provider.execute(prompt, self._build_llm_config(node, model))
        except Exception as e:
            return step.model_copy(update={
                "status": StepStatus.FAILED,
                "error": handle_llm_error(provider_type, model, e),
                "execution_time": elapsed_ms(start_time)
            })

        finished = step.model_copy(update={
            "output": response.content,
            "cost": response.cost,
            "status": StepStatus.COMPLETED,
            "execution_time": elapsed_ms(start_time)
        })
        logger.info(f"Node {node.id} completed in {finished.execution_time}ms (cost ${finished.cost:.6f})")
        return finished

    def _build_llm_config(self, node: LLMNode, model: str) -> LLMConfig:
        node_config = node.data.config
        return LLMConfig(
            model=model,
            temperature=(
                LLM_CONFIG["default_temperature"] if node_config.temperature is None else node_config.temperature
            ),
            max_tokens=node_config.max_tokens or LLM_CONFIG["default_max_tokens"],
            system_prompt=node_config.system_prompt,
            top_p=node_config.top_p,
            frequency_penalty=node_config.frequency_penalty,
            presence_penalty=node_config.presence_penalty
        )

    def _build_node_debug(self, workflow: Workflow, steps: List[ExecutionStep]) -> List[NodeDebugEntry]:
        """각 step의 디버그 항목 (태그 추출 결과 포함)"""
        node_debug = []
        for step in steps:
            node = workflow.get_node(step.node_id)
            extracted: Dict[str, Optional[str]] = {
                extraction.debug_field: extract_tag(step.output, extraction.tag)
                for extraction in TAG_EXTRACTIONS
            }
            node_debug.append(NodeDebugEntry(
                id=step.node_id,
                label=node.label if node is not None else step.node_id,
                prompt=step.prompt,
                output=step.output or "",
                **extracted
            ))
        return node_debug
