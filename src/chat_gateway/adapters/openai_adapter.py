"""
OpenAI chat completions adapter.

Also provides the OpenAI-compatible base used by upstreams that expose the
same wire format under their own base URL.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence

from ..core.interface import AbstractAdapter, select_text
from ..models.request import Message
from ..models.response import ChatResponse

logger = logging.getLogger(__name__)

GPT5_FAMILY_TOKEN = "gpt-5"
GPT5_MODELS = frozenset({"gpt-5-preview", "gpt-5-mini", "gpt-5-chat-latest"})

# Family-exclusive parameters and the variants that reject them
GPT5_EXCLUSIVE_PARAMS = ("reasoning_effort", "verbosity")
GPT5_EXCLUSIVE_REJECTED_BY = frozenset({"gpt-5-chat-latest"})


def is_gpt5_model(model: str) -> bool:
    return model in GPT5_MODELS or GPT5_FAMILY_TOKEN in model


class OpenAICompatibleAdapter(AbstractAdapter):
    """
    Adapter for the OpenAI chat completions wire format.

    Roles pass through unchanged.
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    LABEL = "OpenAI"

    @property
    def provider(self) -> str:
        return "openai"

    def endpoint(self, model: str) -> str:
        return "/chat/completions"

    def auth_headers(self, api_key: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {api_key}"}

    def format_messages(self, messages: Sequence[Message]) -> List[Dict[str, Any]]:
        return [{"role": m.role, "content": m.content} for m in messages]

    def token_field(self, model: str) -> str:
        """Name of the completion length field for this model."""
        return "max_tokens"

    def build_payload(
        self,
        messages: Sequence[Message],
        model: str,
        params: Mapping[str, Any],
    ) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "model": model,
            "messages": self.format_messages(messages),
        }

        if params.get("temperature") is not None:
            data["temperature"] = params["temperature"]

        if params.get("maxTokens") is not None:
            data[self.token_field(model)] = params["maxTokens"]

        return data

    def parse_response(self, data: Dict[str, Any]) -> ChatResponse:
        choices = data.get("choices")
        if not choices or not isinstance(choices, list):
            raise self._error(f"No choices in {self.LABEL} response")

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            raise self._error(f"Malformed response from {self.LABEL}")
        return ChatResponse(
            role=message.get("role") or "assistant",
            content=select_text(message.get("content")),
        )


class OpenAIAdapter(OpenAICompatibleAdapter):
    """
    Direct OpenAI API adapter.

    GPT-5 models take `max_completion_tokens` and accept the
    `reasoning_effort` and `verbosity` controls.
    """

    def token_field(self, model: str) -> str:
        if is_gpt5_model(model):
            return "max_completion_tokens"
        return "max_tokens"

    def build_payload(
        self,
        messages: Sequence[Message],
        model: str,
        params: Mapping[str, Any],
    ) -> Dict[str, Any]:
        data = super().build_payload(messages, model, params)

        for name in GPT5_EXCLUSIVE_PARAMS:
            if params.get(name) is None:
                continue
            if model in GPT5_EXCLUSIVE_REJECTED_BY:
                logger.debug(f"Dropping {name} for {model}")
                continue
            data[name] = params[name]

        return data
