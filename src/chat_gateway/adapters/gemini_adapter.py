"""
Google Gemini adapter.

Gemini models a conversation as prior history plus one new user turn.
"""

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ..core.interface import AbstractAdapter
from ..models.request import Message
from ..models.response import ChatResponse

# Canonical role -> Gemini content role
ROLE_MAP = {
    "user": "user",
    "assistant": "model",
    "system": "user",
}


def split_conversation(messages: Sequence[Message]) -> Tuple[List[Message], str]:
    """
    Split a conversation into history and the new turn's text.

    The last message becomes the new turn only when it is a user message;
    otherwise every message is history and the new turn is empty.
    """
    if messages and messages[-1].role == "user":
        return list(messages[:-1]), messages[-1].content
    return list(messages), ""


class GeminiAdapter(AbstractAdapter):
    """Google Gemini (Generative Language API) adapter."""

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    LABEL = "Gemini"

    @property
    def provider(self) -> str:
        return "gemini"

    def endpoint(self, model: str) -> str:
        return f"/models/{model}:generateContent"

    def auth_headers(self, api_key: str) -> Dict[str, str]:
        return {"x-goog-api-key": api_key}

    def format_messages(self, messages: Sequence[Message]) -> List[Dict[str, Any]]:
        """History entries followed by the new user turn."""
        history, turn = split_conversation(messages)
        contents = [
            {"role": ROLE_MAP.get(m.role, "user"), "parts": [{"text": m.content}]}
            for m in history
        ]
        contents.append({"role": "user", "parts": [{"text": turn}]})
        return contents

    def build_payload(
        self,
        messages: Sequence[Message],
        model: str,
        params: Mapping[str, Any],
    ) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {}

        if params.get("temperature") is not None:
            generation_config["temperature"] = params["temperature"]
        if params.get("maxTokens") is not None:
            generation_config["maxOutputTokens"] = params["maxTokens"]

        return {
            "contents": self.format_messages(messages),
            "generationConfig": generation_config,
        }

    def parse_response(self, data: Dict[str, Any]) -> ChatResponse:
        candidates = data.get("candidates")
        if not candidates or not isinstance(candidates, list):
            raise self._error("No candidates in Gemini response")

        candidate = candidates[0]
        content = candidate.get("content") if isinstance(candidate, dict) else None
        if not isinstance(content, dict):
            raise self._error("Malformed response from Gemini")
        text = "".join(
            part["text"]
            for part in content.get("parts") or []
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )

        role = content.get("role") or "model"
        return ChatResponse(
            role="assistant" if role == "model" else role,
            content=text,
        )
