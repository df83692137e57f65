"""
Inbound request models.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """Canonical chat message. Conversation order is significant."""
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """
    Provider-agnostic chat completion request.

    Missing `apiKey` or `model` are accepted here and rejected by the
    dispatcher, so they surface as gateway validation errors.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    messages: List[Message] = Field(default_factory=list)
    api_key: str = Field(default="", alias="apiKey")
    model: str = ""
    provider: str = ""
    parameters: Optional[Dict[str, Any]] = None
