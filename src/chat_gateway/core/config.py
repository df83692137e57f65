"""
Configuration loading for the chat gateway.
"""

import os
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHAT_GATEWAY_CONFIG"
DEFAULT_REQUEST_TIMEOUT = 300.0


@dataclass
class ProviderConfig:
    """Per-upstream connection settings."""
    base_url: Optional[str] = None
    timeout: float = 60.0


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    profiles_path: Optional[str] = None
    anthropic_version: str = "2023-06-01"
    otel_endpoint: Optional[str] = None
    providers: Dict[str, ProviderConfig] = field(default_factory=dict)

    def provider(self, name: str) -> ProviderConfig:
        """Settings for one upstream, defaults when not configured."""
        return self.providers.get(name) or ProviderConfig()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GatewayConfig":
        return _parse_config(data or {})


def _expand_env(value: Any) -> Any:
    """Expand a ${VAR} placeholder from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value


def load_config(config_path: Optional[str] = None) -> GatewayConfig:
    """
    Load gateway configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses $CHAT_GATEWAY_CONFIG
            or a default location.

    Returns:
        Loaded configuration
    """
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)

    if config_path is None:
        # Try common locations
        paths = [
            Path("config/chat-gateway/gateway.yaml"),
            Path("/etc/chat-gateway/gateway.yaml"),
            Path.home() / ".config/chat-gateway/gateway.yaml",
        ]
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None or not Path(config_path).exists():
        logger.warning("No gateway config file found, using defaults")
        return _apply_env_overrides(_default_config())

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        config = _parse_config(data)

    except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        config = _default_config()

    return _apply_env_overrides(config)


def _parse_config(data: Dict[str, Any]) -> GatewayConfig:
    """Parse configuration dictionary."""
    if not isinstance(data, dict):
        raise ValueError("gateway config must be a mapping")

    providers = {}

    for name, provider_data in (data.get("providers") or {}).items():
        provider_data = provider_data or {}
        if not isinstance(provider_data, dict):
            raise ValueError(f"settings for provider {name!r} must be a mapping")
        providers[name] = ProviderConfig(
            base_url=_expand_env(provider_data.get("base_url")) or None,
            timeout=float(provider_data.get("timeout", 60.0)),
        )

    return GatewayConfig(
        request_timeout=float(data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)),
        profiles_path=_expand_env(data.get("profiles_path")) or None,
        anthropic_version=data.get("anthropic_version", "2023-06-01"),
        otel_endpoint=_expand_env(data.get("otel_endpoint")) or None,
        providers=providers,
    )


def _apply_env_overrides(config: GatewayConfig) -> GatewayConfig:
    """Apply environment variable overrides."""
    timeout = os.environ.get("CHAT_GATEWAY_TIMEOUT")
    if timeout:
        try:
            config.request_timeout = float(timeout)
        except ValueError:
            logger.warning(f"Ignoring invalid CHAT_GATEWAY_TIMEOUT: {timeout}")

    otel_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otel_endpoint:
        config.otel_endpoint = otel_endpoint

    return config


def _default_config() -> GatewayConfig:
    """Return default configuration."""
    return GatewayConfig()
