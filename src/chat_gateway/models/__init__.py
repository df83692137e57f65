"""
Data models for profiles, requests and responses.
"""

from .profile import ModelProfile, ParamKind, ParamOption, ParamSpec
from .request import ChatRequest, Message
from .response import ChatResponse, ErrorResponse, ProfileSummary

__all__ = [
    "ModelProfile",
    "ParamKind",
    "ParamOption",
    "ParamSpec",
    "ChatRequest",
    "Message",
    "ChatResponse",
    "ErrorResponse",
    "ProfileSummary",
]
