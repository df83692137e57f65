"""
Request dispatcher.

Resolves the parameter profile, normalizes the caller's parameters and
hands the request to the adapter registered for the provider.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from ..models.request import Message
from ..models.response import ChatResponse
from .config import GatewayConfig
from .errors import UpstreamTimeoutError, ValidationError
from .interface import AbstractAdapter
from .normalizer import normalize
from .registry import ProfileRegistry

logger = logging.getLogger(__name__)

MessageLike = Union[Message, Mapping[str, Any]]


class Dispatcher:
    """
    Routes canonical chat requests to provider adapters.

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        registry: ProfileRegistry,
        adapters: Mapping[str, AbstractAdapter],
        timeout: Optional[float] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            registry: Profile registry used to resolve parameter profiles
            adapters: Provider key -> adapter
            timeout: Budget in seconds for the whole upstream call (None for no limit)
        """
        self._registry = registry
        self._adapters: Dict[str, AbstractAdapter] = dict(adapters)
        self._timeout = timeout

    @property
    def registry(self) -> ProfileRegistry:
        return self._registry

    @property
    def providers(self):
        return list(self._adapters)

    def get_adapter(self, provider: str) -> AbstractAdapter:
        """
        Get the adapter for a provider.

        Raises:
            ValidationError: If no adapter serves the provider
        """
        adapter = self._adapters.get(provider)
        if adapter is None:
            raise ValidationError("unknown provider")
        return adapter

    async def handle(
        self,
        provider: str,
        model: str,
        api_key: str,
        messages: Sequence[MessageLike],
        raw_params: Optional[Mapping[str, Any]] = None,
    ) -> ChatResponse:
        """
        Run one chat completion.

        Raises:
            ValidationError: Missing API key or model, unknown provider or
                malformed messages
            UpstreamError: The upstream call failed or timed out
        """
        if not api_key:
            raise ValidationError("Please provide a valid API key")
        if not model:
            raise ValidationError("Please provide a model")

        canonical = self._canonical_messages(messages)

        profile = self._registry.resolve(provider, model)
        params = normalize(profile, raw_params, model)
        adapter = self.get_adapter(provider)

        logger.info(f"Dispatching {provider}/{model} with profile {profile.key}")

        try:
            return await asyncio.wait_for(
                adapter.call(api_key, canonical, model, params),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Request to {provider}/{model} exceeded {self._timeout}s budget")
            raise UpstreamTimeoutError(provider=provider)

    @staticmethod
    def _canonical_messages(messages: Sequence[MessageLike]) -> list:
        try:
            return [
                m if isinstance(m, Message) else Message.model_validate(m)
                for m in messages or []
            ]
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid messages: {e.error_count()} error(s)")


def build_adapters(config: GatewayConfig) -> Dict[str, AbstractAdapter]:
    """Create the default adapter for every supported provider."""
    from ..adapters import (
        AnthropicAdapter,
        DeepSeekAdapter,
        GeminiAdapter,
        NovitaAdapter,
        OpenAIAdapter,
    )

    openai = config.provider("openai")
    anthropic = config.provider("anthropic")
    deepseek = config.provider("deepseek")
    gemini = config.provider("gemini")
    novita = config.provider("novita")

    return {
        "openai": OpenAIAdapter(base_url=openai.base_url, timeout=openai.timeout),
        "anthropic": AnthropicAdapter(
            base_url=anthropic.base_url,
            timeout=anthropic.timeout,
            anthropic_version=config.anthropic_version,
        ),
        "deepseek": DeepSeekAdapter(base_url=deepseek.base_url, timeout=deepseek.timeout),
        "gemini": GeminiAdapter(base_url=gemini.base_url, timeout=gemini.timeout),
        "novita": NovitaAdapter(base_url=novita.base_url, timeout=novita.timeout),
    }


def build_dispatcher(config: GatewayConfig, registry: ProfileRegistry) -> Dispatcher:
    """Wire a dispatcher with the default adapters."""
    return Dispatcher(
        registry=registry,
        adapters=build_adapters(config),
        timeout=config.request_timeout,
    )
