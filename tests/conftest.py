"""
Pytest configuration and fixtures
"""
import pytest
import sys
import os
from typing import Dict, Generator, List, Optional

# Add server path for imports when the package is not installed
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'server'))

from fastapi.testclient import TestClient

from chainweaver.api import api_server
from chainweaver.models import LLMConfig, LLMResponse, ProviderConfig, TokenUsage, Workflow
from chainweaver.services import LLMProviderInterface
from chainweaver.utils import ProviderExecutionError
from chainweaver.workflow import WorkflowExecutionEngine


class StubProvider(LLMProviderInterface):
    """Deterministic provider: answers "ECHO:" + prompt, no network"""

    id = "openai"
    name = "Stub"

    def __init__(self, config: ProviderConfig, costs: Optional[List[float]] = None,
                 replies: Optional[Dict[str, str]] = None, fail_with: Optional[str] = None,
                 valid_keys: Optional[List[str]] = None):
        super().__init__(config)
        self.costs = list(costs or [])
        self.replies = replies or {}
        self.fail_with = fail_with
        self.valid_keys = valid_keys
        self.calls: List[Dict] = []

    async def execute(self, prompt: str, config: LLMConfig) -> LLMResponse:
        self.calls.append({"prompt": prompt, "config": config})
        if self.fail_with:
            raise ProviderExecutionError(f"Stub execution failed: {self.fail_with}", provider=self.id)
        content = self.replies.get(prompt, f"ECHO:{prompt}")
        cost = self.costs.pop(0) if self.costs else 0.0
        return LLMResponse(
            content=content,
            usage=TokenUsage(prompt_tokens=1, completion_tokens=1, total_tokens=2),
            cost=cost,
            execution_time=1,
            model=config.model,
            provider=self.id
        )

    async def validate_api_key(self, api_key: str) -> bool:
        if self.valid_keys is None:
            return True
        return api_key in self.valid_keys


class StubProviderFactory:
    """Provider factory recording every provider it builds"""

    def __init__(self, **provider_kwargs):
        self.provider_kwargs = provider_kwargs
        self.created: Dict[str, List[StubProvider]] = {}

    def __call__(self, provider_type: str, config: ProviderConfig) -> StubProvider:
        provider = StubProvider(config, **self.provider_kwargs)
        provider.id = provider_type
        self.created.setdefault(provider_type, []).append(provider)
        return provider


def make_workflow(nodes: List[Dict], edges: List[Dict], workflow_id: str = "wf-test") -> Workflow:
    return Workflow.model_validate({"id": workflow_id, "name": "Test", "nodes": nodes, "edges": edges})


def chain_workflow(prompts: List[str], provider: str = "openai") -> Workflow:
    """input-1 -> llm-1 -> ... -> llm-N -> output-1"""
    nodes = [{"id": "input-1", "type": "input", "data": {"label": "Input"}}]
    for index, prompt in enumerate(prompts, start=1):
        nodes.append({
            "id": f"llm-{index}",
            "type": "llm",
            "data": {"label": f"LLM {index}", "provider": provider, "model": "gpt-4o-mini", "prompt": prompt}
        })
    nodes.append({"id": "output-1", "type": "output", "data": {"label": "Output"}})

    edges = []
    for index in range(len(nodes) - 1):
        edges.append({"id": f"e{index + 1}", "source": nodes[index]["id"], "target": nodes[index + 1]["id"]})
    return make_workflow(nodes, edges)


@pytest.fixture
def stub_factory() -> StubProviderFactory:
    return StubProviderFactory()


@pytest.fixture
def engine(stub_factory: StubProviderFactory) -> WorkflowExecutionEngine:
    return WorkflowExecutionEngine(provider_factory=stub_factory)


@pytest.fixture
def sample_workflow() -> Workflow:
    """input -> llm-1 ({input}) -> llm-2 ({llm-1}) -> output"""
    return chain_workflow(["{input}", "{llm-1}"])


@pytest.fixture
def api_base_url() -> str:
    """In-process API base URL fixture"""
    return "http://testserver"


@pytest.fixture
def api_client(monkeypatch, stub_factory: StubProviderFactory) -> Generator[TestClient, None, None]:
    """HTTP client fixture wired to stub providers"""
    monkeypatch.setattr(api_server, "provider_factory", stub_factory)
    monkeypatch.setattr(api_server, "engine", WorkflowExecutionEngine(provider_factory=stub_factory))
    with TestClient(api_server.app) as client:
        yield client
