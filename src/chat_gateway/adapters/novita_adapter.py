"""
Novita AI adapter.

Novita exposes hosted open models behind an OpenAI-compatible endpoint.
"""

from .openai_adapter import OpenAICompatibleAdapter


class NovitaAdapter(OpenAICompatibleAdapter):
    """Novita AI API adapter."""

    DEFAULT_BASE_URL = "https://api.novita.ai/v3/openai"
    LABEL = "Novita AI"

    @property
    def provider(self) -> str:
        return "novita"
