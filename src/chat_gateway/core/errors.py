"""
Chat gateway error types.
"""

from typing import Optional


class ChatGatewayError(Exception):
    """Base exception for chat gateway errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ChatGatewayError):
    """Raised when the inbound request is incomplete or names an unknown provider."""

    status_code = 400


class UpstreamError(ChatGatewayError):
    """Raised when the upstream provider call fails."""

    def __init__(
        self,
        message: str = "Model service call failed",
        status_code: Optional[int] = None,
        provider: Optional[str] = None,
    ):
        super().__init__(message or "Model service call failed", status_code or 500)
        self.provider = provider


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream call does not finish within the request budget."""

    def __init__(self, message: str = "Upstream request timed out", provider: Optional[str] = None):
        super().__init__(message, status_code=504, provider=provider)


class ProfileNotFoundError(ChatGatewayError):
    """Raised when a profile is looked up by an unknown registry key."""

    status_code = 404


class ConfigurationError(ChatGatewayError):
    """Raised when profile or gateway configuration cannot be loaded."""
    pass
