"""
Shared fixtures for chat gateway tests.
"""
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from chat_gateway.core.registry import load_profiles
from chat_gateway.models.request import Message


@pytest.fixture(scope="session")
def registry():
    """Registry built from the packaged profiles."""
    return load_profiles()


@pytest.fixture
def conversation() -> List[Message]:
    """Three-turn conversation ending with a user message."""
    return [
        Message(role="system", content="You are helpful"),
        Message(role="assistant", content="Hi, how can I help?"),
        Message(role="user", content="Hello"),
    ]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it served."""

    def __init__(self, status_code: int = 200, body: Any = None, raw: bytes = None):
        self.requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if raw is not None:
                return httpx.Response(status_code, content=raw)
            return httpx.Response(status_code, json=body)

        super().__init__(handler)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for recording mock transports."""
    return RecordingTransport


@pytest.fixture
def failing_transport() -> Callable[[type], httpx.MockTransport]:
    """Factory for transports whose every request raises the given httpx error."""

    def factory(exc_type: type) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_type("simulated failure", request=request)

        return httpx.MockTransport(handler)

    return factory
