"""
Core chat gateway components.
"""

from .interface import AbstractAdapter
from .registry import FamilyRule, ProfileRegistry, build_registry, load_profiles
from .normalizer import normalize
from .dispatcher import Dispatcher, build_adapters, build_dispatcher
from .config import GatewayConfig, ProviderConfig, load_config
from .errors import (
    ChatGatewayError,
    ValidationError,
    UpstreamError,
    UpstreamTimeoutError,
    ProfileNotFoundError,
    ConfigurationError,
)

__all__ = [
    "AbstractAdapter",
    "FamilyRule",
    "ProfileRegistry",
    "build_registry",
    "load_profiles",
    "normalize",
    "Dispatcher",
    "build_adapters",
    "build_dispatcher",
    "GatewayConfig",
    "ProviderConfig",
    "load_config",
    "ChatGatewayError",
    "ValidationError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "ProfileNotFoundError",
    "ConfigurationError",
]
