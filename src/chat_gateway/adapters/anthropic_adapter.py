"""
Direct Anthropic API adapter.

Provides access to Anthropic's Messages API.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from ..core.interface import AbstractAdapter, select_text
from ..models.request import Message
from ..models.response import ChatResponse


class AnthropicAdapter(AbstractAdapter):
    """
    Direct Anthropic API adapter.

    The Messages API only accepts user and assistant turns, so system
    messages are sent as assistant turns in place.
    """

    DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
    ANTHROPIC_VERSION = "2023-06-01"
    DEFAULT_MAX_TOKENS = 4096
    LABEL = "Anthropic"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        anthropic_version: Optional[str] = None,
    ):
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)
        self._anthropic_version = anthropic_version or self.ANTHROPIC_VERSION

    @property
    def provider(self) -> str:
        return "anthropic"

    def endpoint(self, model: str) -> str:
        return "/messages"

    def auth_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": self._anthropic_version,
        }

    def format_messages(self, messages: Sequence[Message]) -> List[Dict[str, Any]]:
        return [
            {
                "role": "assistant" if m.role == "system" else m.role,
                "content": m.content,
            }
            for m in messages
        ]

    def build_payload(
        self,
        messages: Sequence[Message],
        model: str,
        params: Mapping[str, Any],
    ) -> Dict[str, Any]:
        max_tokens = params.get("maxTokens")
        data: Dict[str, Any] = {
            "model": model,
            "messages": self.format_messages(messages),
            "max_tokens": max_tokens if max_tokens is not None else self.DEFAULT_MAX_TOKENS,
        }

        if params.get("temperature") is not None:
            data["temperature"] = params["temperature"]

        return data

    def parse_response(self, data: Dict[str, Any]) -> ChatResponse:
        content = data.get("content")
        if not isinstance(content, list):
            raise self._error("No content in Anthropic response")

        return ChatResponse(
            role=data.get("role") or "assistant",
            content=select_text(content),
        )
