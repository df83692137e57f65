"""
Canonical response models.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ChatResponse(BaseModel):
    """Normalized completion returned to the caller."""
    role: str = "assistant"
    content: str = ""


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""
    error: str


class ProfileSummary(BaseModel):
    """Profile as exposed to settings clients."""
    key: str
    provider: str
    display_name: str = ""
    api_key_label: Optional[str] = None
    models: List[str] = []
    default_model: Optional[str] = None
    parameters: Dict[str, Dict[str, Any]] = {}
    defaults: Dict[str, Any] = {}
