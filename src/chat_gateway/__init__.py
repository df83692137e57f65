"""
Chat Gateway

A single-endpoint gateway for chat completions across providers:
- Declarative per-model parameter profiles
- Fail-open parameter validation and clamping
- One adapter per upstream wire format
- Unified response and error shapes
"""

from .core.dispatcher import Dispatcher, build_dispatcher
from .core.registry import ProfileRegistry, load_profiles
from .core.normalizer import normalize
from .core.config import GatewayConfig, load_config
from .models.profile import ModelProfile, ParamKind, ParamSpec
from .models.request import ChatRequest, Message
from .models.response import ChatResponse

__all__ = [
    "Dispatcher",
    "build_dispatcher",
    "ProfileRegistry",
    "load_profiles",
    "normalize",
    "GatewayConfig",
    "load_config",
    "ModelProfile",
    "ParamKind",
    "ParamSpec",
    "ChatRequest",
    "Message",
    "ChatResponse",
]
