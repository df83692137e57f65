"""
DeepSeek adapter.

DeepSeek serves the OpenAI chat completions format.
"""

from .openai_adapter import OpenAICompatibleAdapter


class DeepSeekAdapter(OpenAICompatibleAdapter):
    """DeepSeek API adapter."""

    DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
    LABEL = "DeepSeek"

    @property
    def provider(self) -> str:
        return "deepseek"
