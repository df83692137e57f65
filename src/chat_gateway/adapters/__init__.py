"""
Upstream provider adapters.
"""

from .openai_adapter import OpenAIAdapter, OpenAICompatibleAdapter
from .anthropic_adapter import AnthropicAdapter
from .deepseek_adapter import DeepSeekAdapter
from .gemini_adapter import GeminiAdapter
from .novita_adapter import NovitaAdapter

__all__ = [
    "OpenAIAdapter",
    "OpenAICompatibleAdapter",
    "AnthropicAdapter",
    "DeepSeekAdapter",
    "GeminiAdapter",
    "NovitaAdapter",
]
