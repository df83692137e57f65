"""
Tests for the HTTP service.
"""
import pytest
from fastapi.testclient import TestClient

from chat_gateway.adapters import OpenAIAdapter
from chat_gateway.core.config import GatewayConfig
from chat_gateway.core.dispatcher import Dispatcher
from chat_gateway.core.errors import UpstreamError
from chat_gateway.main import create_app
from chat_gateway.models.response import ChatResponse


class StubAdapter:
    """Adapter stand-in returning a fixed reply or error."""

    def __init__(self, reply=None, error=None):
        self.params = None
        self._reply = reply or ChatResponse(role="assistant", content="Hi there")
        self._error = error

    async def call(self, api_key, messages, model, params):
        self.params = params
        if self._error:
            raise self._error
        return self._reply


def _client(registry, adapters, **kwargs) -> TestClient:
    dispatcher = Dispatcher(registry, adapters)
    return TestClient(create_app(dispatcher=dispatcher, config=GatewayConfig()), **kwargs)


def _body(**overrides):
    body = {
        "messages": [{"role": "user", "content": "Hello"}],
        "apiKey": "sk-test",
        "model": "gpt-4o",
        "provider": "openai",
    }
    body.update(overrides)
    return body


class TestChatEndpoint:
    """Test POST /api/chat."""

    def test_success(self, registry):
        """Test a successful call returns role and content."""
        client = _client(registry, {"openai": StubAdapter()})
        response = client.post("/api/chat", json=_body())
        assert response.status_code == 200
        assert response.json() == {"role": "assistant", "content": "Hi there"}

    def test_parameters_normalized(self, registry):
        """Test inbound parameters are clamped before reaching the adapter."""
        adapter = StubAdapter()
        client = _client(registry, {"openai": adapter})
        client.post("/api/chat", json=_body(parameters={"maxTokens": 999999}))
        assert adapter.params["maxTokens"] == 4096

    def test_parameters_optional(self, registry):
        """Test absent parameters fall back to profile defaults."""
        adapter = StubAdapter()
        client = _client(registry, {"openai": adapter})
        client.post("/api/chat", json=_body())
        assert adapter.params == {"temperature": 0.7, "maxTokens": 1024}

    def test_empty_api_key(self, registry):
        """Test an empty API key yields 400 with an error body."""
        client = _client(registry, {"openai": StubAdapter()})
        response = client.post("/api/chat", json=_body(apiKey=""))
        assert response.status_code == 400
        assert "error" in response.json()

    def test_unknown_provider(self, registry):
        """Test an unknown provider yields 400."""
        client = _client(registry, {"openai": StubAdapter()})
        response = client.post("/api/chat", json=_body(provider="grok"))
        assert response.status_code == 400
        assert response.json() == {"error": "unknown provider"}

    def test_upstream_error_status(self, registry):
        """Test upstream failures keep the upstream status and message."""
        error = UpstreamError("Rate limit exceeded", status_code=429)
        client = _client(registry, {"openai": StubAdapter(error=error)})
        response = client.post("/api/chat", json=_body())
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded"}

    def test_invalid_body(self, registry):
        """Test a malformed body yields 400 with an error body."""
        client = _client(registry, {"openai": StubAdapter()})
        response = client.post("/api/chat", json=_body(messages=[{"role": "robot", "content": "x"}]))
        assert response.status_code == 400
        assert "error" in response.json()

    def test_end_to_end_with_mock_upstream(self, registry, make_transport):
        """Test a request flows through a real adapter to a mocked upstream."""
        transport = make_transport(body={"choices": [{"message": {"role": "assistant", "content": "Pong"}}]})
        client = _client(registry, {"openai": OpenAIAdapter(transport=transport)})
        response = client.post("/api/chat", json=_body(model="gpt-5-mini", parameters={"temperature": 0.2}))

        assert response.json() == {"role": "assistant", "content": "Pong"}
        sent = transport.last_json
        assert sent["temperature"] == 1
        assert sent["max_completion_tokens"] == 4096
        assert sent["reasoning_effort"] == "medium"

    def test_unexpected_error_is_json(self, registry):
        """Test an unexpected exception still yields a JSON error body."""
        adapter = StubAdapter(error=RuntimeError("boom"))
        client = _client(registry, {"openai": adapter}, raise_server_exceptions=False)
        response = client.post("/api/chat", json=_body())
        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Model service call failed"}

    def test_malformed_upstream_body(self, registry, make_transport):
        """Test an upstream reply of the wrong shape yields a JSON 500."""
        transport = make_transport(body={"choices": [{"message": "oops"}]})
        client = _client(registry, {"openai": OpenAIAdapter(transport=transport)})
        response = client.post("/api/chat", json=_body())
        assert response.status_code == 500
        assert response.json() == {"error": "Malformed response from OpenAI"}


class TestProfileEndpoints:
    """Test profile listing endpoints."""

    def test_list_profiles(self, registry):
        """Test every profile is listed with its defaults."""
        client = _client(registry, {})
        response = client.get("/api/profiles")
        assert response.status_code == 200
        profiles = {p["key"]: p for p in response.json()}
        assert set(profiles) == set(registry.keys())
        assert profiles["deepseek"]["defaults"] == {"temperature": 0.7, "maxTokens": 2048}

    @pytest.mark.parametrize(
        "path,key",
        [
            ("/api/profiles/openai?model=gpt-5-mini", "openai-gpt5"),
            ("/api/profiles/openai?model=gpt-4o", "openai"),
            ("/api/profiles/gemini", "gemini"),
            ("/api/profiles/unknown", "openai"),
        ],
    )
    def test_resolve_profile(self, registry, path, key):
        """Test the profile endpoint follows registry resolution."""
        client = _client(registry, {})
        assert client.get(path).json()["key"] == key

    def test_health(self, registry):
        """Test the health endpoint lists providers."""
        client = _client(registry, {"openai": StubAdapter()})
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["providers"] == ["openai"]
