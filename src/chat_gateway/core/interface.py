"""
Abstract provider adapter definition.

Defines the contract that every upstream adapter implements: translate
canonical messages and parameters into the provider's wire request, make
the call, and translate the reply or failure back to canonical form.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..models.request import Message
from ..models.response import ChatResponse
from .errors import UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


def extract_error_message(body: Any) -> Optional[str]:
    """Pull the human-readable message out of a provider error body."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return body.get("message")


def select_text(blocks: Any) -> str:
    """
    Text of the first text-typed content block.

    Returns an empty string when no text block exists.
    """
    if isinstance(blocks, str):
        return blocks
    for block in blocks or []:
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text") or ""
    return ""


class AbstractAdapter(ABC):
    """
    Abstract base class for upstream provider adapters.

    Adapters hold no per-request state; the caller's API key is supplied
    on every call and a fresh HTTP client is opened for it.
    """

    DEFAULT_BASE_URL: str = ""
    LABEL: str = "Upstream"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize adapter.

        Args:
            base_url: API root URL (defaults to the provider's public API)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport, used in place of the network
        """
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    @abstractmethod
    def provider(self) -> str:
        """
        Provider key this adapter serves (e.g. "openai", "gemini").

        Returns:
            Provider identifier
        """
        pass

    @property
    def base_url(self) -> str:
        return self._base_url

    @abstractmethod
    def format_messages(self, messages: Sequence[Message]) -> List[Dict[str, Any]]:
        """
        Translate canonical messages into the provider's message list.

        Args:
            messages: Canonical conversation, in order

        Returns:
            Wire-format messages
        """
        pass

    @abstractmethod
    def build_payload(
        self,
        messages: Sequence[Message],
        model: str,
        params: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Build the JSON request body.

        Args:
            messages: Canonical conversation
            model: Upstream model name
            params: Normalized parameters

        Returns:
            Request body
        """
        pass

    @abstractmethod
    def endpoint(self, model: str) -> str:
        """Path of the completion endpoint, relative to the base URL."""
        pass

    @abstractmethod
    def auth_headers(self, api_key: str) -> Dict[str, str]:
        """Headers carrying the caller's API key."""
        pass

    @abstractmethod
    def parse_response(self, data: Dict[str, Any]) -> ChatResponse:
        """
        Translate a successful response body.

        Raises:
            UpstreamError: If the body holds no completion
        """
        pass

    async def call(
        self,
        api_key: str,
        messages: Sequence[Message],
        model: str,
        params: Mapping[str, Any],
    ) -> ChatResponse:
        """
        Send one completion request upstream.

        Raises:
            UpstreamTimeoutError: If the HTTP call times out
            UpstreamError: On transport failure, non-2xx status or an
                unusable body
        """
        payload = self.build_payload(messages, model, params)
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth_headers(api_key))

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(self.endpoint(model), json=payload)

        except httpx.TimeoutException:
            raise UpstreamTimeoutError(f"{self.LABEL} request timed out", provider=self.provider)
        except httpx.RequestError as e:
            logger.error(f"{self.LABEL} transport error: {e}")
            raise UpstreamError(
                str(e) or f"{self.LABEL} request failed",
                provider=self.provider,
            )

        self._check_response_errors(response)

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(f"Malformed response from {self.LABEL}", provider=self.provider)

        if not isinstance(data, dict):
            raise UpstreamError(f"Malformed response from {self.LABEL}", provider=self.provider)

        try:
            return self.parse_response(data)
        except (AttributeError, TypeError, KeyError, PydanticValidationError) as e:
            logger.warning(f"Unexpected {self.LABEL} response shape: {e}")
            raise UpstreamError(f"Malformed response from {self.LABEL}", provider=self.provider)

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Check response for errors and raise UpstreamError."""
        if response.is_success:
            return

        body = None
        try:
            body = response.json()
        except ValueError:
            pass

        message = extract_error_message(body) or f"{self.LABEL} request failed"
        logger.warning(f"{self.LABEL} request failed: {response.status_code}")
        raise UpstreamError(message, status_code=response.status_code, provider=self.provider)

    def _error(self, message: str) -> UpstreamError:
        return UpstreamError(message, provider=self.provider)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider!r}, base_url={self._base_url!r})"
