from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import time
from datetime import datetime, timezone

from ..config import API_CONFIG, LLM_CONFIG
from ..models import (
    ApiKeyValidationRequest,
    ApiKeyValidationResponse,
    ExecutionStatus,
    LLMConfig,
    LLMTestRequest,
    LLMTestResponse,
    ProviderConfig,
    ProviderInfo,
    ProvidersResponse,
    ValidationResult,
    Workflow,
    WorkflowExecutionRequest,
    WorkflowExecutionResponse
)
from ..services import PROVIDER_CLASSES, create_provider, get_supported_provider_info, validate_provider_key
from ..utils import ErrorResponse, elapsed_ms, handle_api_errors
from ..workflow import WorkflowExecutionEngine
from .. import __version__

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="ChainWeaver Workflow API",
    description="Linear multi-model LLM workflow execution",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=API_CONFIG["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global instances (stateless services only): every execution builds its own registry
provider_factory = create_provider
engine = WorkflowExecutionEngine(provider_factory=provider_factory)

EXAMPLE_WORKFLOW = {
    "id": "test-workflow",
    "name": "Simple Test Workflow",
    "description": "A simple workflow for testing",
    "nodes": [
        {"id": "input-1", "type": "input", "position": {"x": 0, "y": 0}, "data": {"label": "Input"}},
        {
            "id": "llm-1",
            "type": "llm",
            "position": {"x": 200, "y": 0},
            "data": {
                "label": "LLM Node",
                "provider": "openai",
                "model": "gpt-4o-mini",
                "prompt": "Summarize this in one sentence: {input}",
                "config": {"temperature": 0.7, "maxTokens": 100}
            }
        },
        {"id": "output-1", "type": "output", "position": {"x": 400, "y": 0}, "data": {"label": "Output"}}
    ],
    "edges": [
        {"id": "e1", "source": "input-1", "target": "llm-1"},
        {"id": "e2", "source": "llm-1", "target": "output-1"}
    ]
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@app.get("/")
async def health():
    return {"status": "ChainWeaver workflow API is running", "version": __version__}


@app.get("/providers", response_model=ProvidersResponse)
async def list_providers():
    """지원 Provider 및 모델 목록"""
    return ProvidersResponse(
        providers=[ProviderInfo(**info) for info in get_supported_provider_info()]
    )


@app.post("/validate-workflow", response_model=ValidationResult)
@handle_api_errors(default_status=500)
async def validate_workflow(workflow: Workflow):
    """워크플로우 유효성 검증"""
    return engine.validate_workflow(workflow)


@app.post("/validate-key", response_model=ApiKeyValidationResponse)
@handle_api_errors(default_status=500)
async def validate_key(request: ApiKeyValidationRequest):
    """Provider API 키 유효성 검증"""
    valid = await validate_provider_key(request.provider, request.api_key, provider_factory=provider_factory)
    return ApiKeyValidationResponse(provider=request.provider, valid=valid)


@app.post("/execute-workflow", response_model=WorkflowExecutionResponse)
@handle_api_errors(default_status=500)
async def execute_workflow(request: WorkflowExecutionRequest):
    """
    워크플로우 실행 (비스트리밍)

    Malformed requests and invalid workflows are rejected with 400 before the
    engine runs; once it runs, the execution record is always returned.
    """
    if not request.input_prompt:
        raise ErrorResponse.validation_error({
            "error": "Missing required fields: workflow, inputPrompt, providerConfigs"
        })

    validation = engine.validate_workflow(request.workflow)
    if not validation.is_valid:
        logger.info(f"Rejected invalid workflow '{request.workflow.id}': {validation.errors}")
        raise ErrorResponse.validation_error({
            "error": "Invalid workflow",
            "details": validation.errors
        })

    start_time = time.time()
    execution = await engine.execute_workflow(
        request.workflow,
        request.input_prompt,
        request.user_id or API_CONFIG["default_user_id"],
        request.provider_configs
    )

    return WorkflowExecutionResponse(
        success=execution.status == ExecutionStatus.COMPLETED,
        execution=execution,
        total_time=elapsed_ms(start_time),
        timestamp=_now()
    )


@app.get("/execute-workflow")
async def execute_workflow_usage():
    return {
        "message": "Workflow Execution API",
        "usage": "POST with { workflow, inputPrompt, providerConfigs, userId? }",
        "exampleWorkflow": EXAMPLE_WORKFLOW,
        "exampleProviderConfigs": {
            "openai": {"apiKey": "your-openai-api-key"},
            "anthropic": {"apiKey": "your-anthropic-api-key"}
        }
    }


@app.post("/llm/test", response_model=LLMTestResponse)
@handle_api_errors(default_status=500)
async def test_llm(request: LLMTestRequest):
    """단일 프롬프트로 Provider 연결 테스트"""
    if request.provider not in PROVIDER_CLASSES:
        raise ErrorResponse.validation_error({"error": f"Unsupported provider: {request.provider}"})

    provider = provider_factory(request.provider, ProviderConfig(api_key=request.api_key))

    if not await provider.validate_api_key(request.api_key):
        raise ErrorResponse.unauthorized({"error": "Invalid API key"})

    start_time = time.time()
    response = await provider.execute(request.prompt, LLMConfig(
        model=request.model,
        temperature=request.temperature if request.temperature is not None else LLM_CONFIG["default_temperature"],
        max_tokens=request.max_tokens or LLM_CONFIG["default_max_tokens"],
        system_prompt=request.system_prompt or None
    ))

    return LLMTestResponse(
        success=True,
        provider=response.provider,
        model=response.model,
        response=response.content,
        usage=response.usage,
        cost=response.cost,
        execution_time=elapsed_ms(start_time),
        timestamp=_now()
    )


@app.get("/llm/test")
async def test_llm_usage():
    return {
        "message": "LLM Test API",
        "usage": "POST with { provider, apiKey, model, prompt, temperature?, maxTokens?, systemPrompt? }",
        "supportedProviders": list(PROVIDER_CLASSES.keys()),
        "models": {info["id"]: info["models"] for info in get_supported_provider_info()}
    }
