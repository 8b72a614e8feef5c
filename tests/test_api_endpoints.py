"""
API endpoint tests
"""
from fastapi.testclient import TestClient

from chainweaver.api import api_server

from conftest import StubProviderFactory, chain_workflow


def _workflow_payload(prompts=("{input}", "{llm-1}"), provider="openai"):
    return chain_workflow(list(prompts), provider=provider).model_dump(by_alias=True, mode="json")


class TestAPIEndpoints:
    """Test basic API endpoints"""

    def test_health_check(self, api_client: TestClient, api_base_url: str):
        """Test health check endpoint"""
        response = api_client.get(f"{api_base_url}/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ChainWeaver workflow API is running"
        assert "version" in data

    def test_providers_list(self, api_client: TestClient, api_base_url: str):
        """Test supported providers listing"""
        response = api_client.get(f"{api_base_url}/providers")

        assert response.status_code == 200
        providers = {entry["id"]: entry for entry in response.json()["providers"]}
        assert set(providers) == {"openai", "anthropic", "google", "deepseek"}
        assert "gpt-4o-mini" in providers["openai"]["models"]

    def test_invalid_endpoint(self, api_client: TestClient, api_base_url: str):
        """Test invalid endpoint returns 404"""
        response = api_client.get(f"{api_base_url}/nonexistent-endpoint")
        assert response.status_code == 404


class TestWorkflowValidationEndpoint:
    """Test workflow validation endpoint"""

    def test_valid_workflow(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/validate-workflow", json=_workflow_payload())

        assert response.status_code == 200
        assert response.json() == {"isValid": True, "errors": [], "warnings": []}

    def test_invalid_workflow(self, api_client: TestClient, api_base_url: str):
        payload = _workflow_payload()
        payload["nodes"] = [node for node in payload["nodes"] if node["type"] != "output"]
        payload["edges"] = payload["edges"][:-1]

        response = api_client.post(f"{api_base_url}/validate-workflow", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["isValid"] is False
        assert "Workflow must have at least one output node" in data["errors"]

    def test_unknown_node_type_rejected(self, api_client: TestClient, api_base_url: str):
        payload = _workflow_payload()
        payload["nodes"][1]["type"] = "webhook"

        response = api_client.post(f"{api_base_url}/validate-workflow", json=payload)
        assert response.status_code == 422


class TestExecuteWorkflowEndpoint:
    """Test workflow execution endpoint"""

    def test_execute_success(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": _workflow_payload(),
            "inputPrompt": "hello",
            "providerConfigs": {"openai": {"apiKey": "sk-test"}},
            "userId": "user-1"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["totalTime"] >= 0
        assert "timestamp" in data

        execution = data["execution"]
        assert execution["status"] == "completed"
        assert execution["outputResult"] == "ECHO:ECHO:hello"
        assert execution["userId"] == "user-1"
        assert [entry["prompt"] for entry in execution["nodeDebug"]] == ["hello", "ECHO:hello"]

    def test_default_user_id(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": _workflow_payload(),
            "inputPrompt": "hello",
            "providerConfigs": {"openai": {"apiKey": "sk-test"}}
        })
        assert response.json()["execution"]["userId"] == "anonymous"

    def test_failed_execution_still_returns_record(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": _workflow_payload(provider="anthropic"),
            "inputPrompt": "hello",
            "providerConfigs": {"openai": {"apiKey": "sk-test"}}
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["execution"]["status"] == "failed"
        assert "not registered" in data["execution"]["error"]
        assert data["execution"]["outputResult"] is None

    def test_empty_input_prompt(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": _workflow_payload(),
            "inputPrompt": "",
            "providerConfigs": {"openai": {"apiKey": "sk-test"}}
        })

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Missing required fields: workflow, inputPrompt, providerConfigs"

    def test_absent_provider_configs(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": _workflow_payload(),
            "inputPrompt": "hello"
        })
        assert response.status_code == 422

    def test_empty_provider_configs_without_llm_nodes(self, api_client: TestClient, api_base_url: str):
        """input -> output needs no API keys"""
        payload = _workflow_payload(prompts=())

        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": payload,
            "inputPrompt": "hi",
            "providerConfigs": {}
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["execution"]["status"] == "completed"
        assert data["execution"]["outputResult"] == "hi"
        assert data["execution"]["nodeDebug"] == []

    def test_empty_provider_configs_with_llm_node(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": _workflow_payload(),
            "inputPrompt": "hi",
            "providerConfigs": {}
        })

        assert response.status_code == 200
        execution = response.json()["execution"]
        assert execution["status"] == "failed"
        assert execution["error"] == "Provider openai not registered. Please configure API key first."

    def test_invalid_workflow_rejected(self, api_client: TestClient, api_base_url: str, stub_factory):
        payload = _workflow_payload()
        payload["nodes"] = [node for node in payload["nodes"] if node["type"] != "input"]

        response = api_client.post(f"{api_base_url}/execute-workflow", json={
            "workflow": payload,
            "inputPrompt": "hello",
            "providerConfigs": {"openai": {"apiKey": "sk-test"}}
        })

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "Invalid workflow"
        assert "Workflow must have at least one input node" in detail["details"]
        assert stub_factory.created == {}

    def test_usage(self, api_client: TestClient, api_base_url: str):
        response = api_client.get(f"{api_base_url}/execute-workflow")

        assert response.status_code == 200
        data = response.json()
        assert "usage" in data
        assert data["exampleWorkflow"]["id"] == "test-workflow"


class TestKeyAndLLMEndpoints:
    """Test API key validation and single-prompt test endpoints"""

    def test_validate_key(self, api_client: TestClient, api_base_url: str, monkeypatch):
        monkeypatch.setattr(api_server, "provider_factory", StubProviderFactory(valid_keys=["good"]))

        good = api_client.post(f"{api_base_url}/validate-key", json={"provider": "openai", "apiKey": "good"})
        bad = api_client.post(f"{api_base_url}/validate-key", json={"provider": "openai", "apiKey": "bad"})

        assert good.json() == {"provider": "openai", "valid": True}
        assert bad.json() == {"provider": "openai", "valid": False}

    def test_llm_test_success(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/llm/test", json={
            "provider": "anthropic",
            "apiKey": "k",
            "model": "claude-3-haiku-20240307",
            "prompt": "ping"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["provider"] == "anthropic"
        assert data["model"] == "claude-3-haiku-20240307"
        assert data["response"] == "ECHO:ping"
        assert data["usage"]["totalTokens"] == 2

    def test_llm_test_unsupported_provider(self, api_client: TestClient, api_base_url: str):
        response = api_client.post(f"{api_base_url}/llm/test", json={
            "provider": "mystery", "apiKey": "k", "model": "m", "prompt": "ping"
        })
        assert response.status_code == 400

    def test_llm_test_invalid_key(self, api_client: TestClient, api_base_url: str, monkeypatch):
        monkeypatch.setattr(api_server, "provider_factory", StubProviderFactory(valid_keys=["good"]))

        response = api_client.post(f"{api_base_url}/llm/test", json={
            "provider": "openai", "apiKey": "bad", "model": "gpt-4o-mini", "prompt": "ping"
        })

        assert response.status_code == 401
        assert response.json()["detail"] == {"error": "Invalid API key"}

    def test_llm_test_provider_failure(self, api_client: TestClient, api_base_url: str, monkeypatch):
        monkeypatch.setattr(api_server, "provider_factory", StubProviderFactory(fail_with="upstream down"))

        response = api_client.post(f"{api_base_url}/llm/test", json={
            "provider": "openai", "apiKey": "k", "model": "gpt-4o-mini", "prompt": "ping"
        })

        assert response.status_code == 500
        assert response.json()["detail"]["details"] == "Stub execution failed: upstream down"

    def test_llm_test_usage(self, api_client: TestClient, api_base_url: str):
        response = api_client.get(f"{api_base_url}/llm/test")

        assert response.status_code == 200
        assert set(response.json()["supportedProviders"]) == {"openai", "anthropic", "google", "deepseek"}
