"""
Profile registry for resolving parameter profiles by provider and model.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..models.profile import ModelProfile
from .errors import ConfigurationError, ProfileNotFoundError

logger = logging.getLogger(__name__)

BUILTIN_PROFILES_PATH = Path(__file__).resolve().parent.parent / "profiles.yaml"
PROFILES_ENV_VAR = "CHAT_GATEWAY_PROFILES"


@dataclass(frozen=True)
class FamilyRule:
    """
    Routes a model family under one provider to a dedicated profile.

    A model matches when its name is one of `models` or contains `token`.
    Matching is case-sensitive.
    """
    provider: str
    profile: str
    models: Tuple[str, ...] = ()
    token: Optional[str] = None

    def matches(self, provider: str, model_name: str) -> bool:
        if provider != self.provider:
            return False
        if model_name in self.models:
            return True
        return bool(self.token) and self.token in model_name


@dataclass(frozen=True)
class ProfileRegistry:
    """
    Read-only lookup table of model profiles.

    Built once at startup and shared by all requests.
    """
    profiles: Mapping[str, ModelProfile]
    default_key: str = "openai"
    families: Tuple[FamilyRule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.default_key not in self.profiles:
            raise ConfigurationError(f"Default profile not defined: {self.default_key}")
        for rule in self.families:
            if rule.profile not in self.profiles:
                raise ConfigurationError(f"Family rule references unknown profile: {rule.profile}")

    def resolve(self, provider: str, model_name: str) -> ModelProfile:
        """
        Resolve the profile for a provider/model pair.

        Never fails: an unknown provider resolves to the default profile.
        """
        model_name = model_name or ""
        for rule in self.families:
            if rule.matches(provider, model_name):
                return self.profiles[rule.profile]

        profile = self.profiles.get(provider)
        if profile is None:
            return self.profiles[self.default_key]
        return profile

    def get(self, key: str) -> ModelProfile:
        """
        Get a profile by registry key.

        Raises:
            ProfileNotFoundError: If no profile has that key
        """
        if key not in self.profiles:
            raise ProfileNotFoundError(f"Profile not found: {key}")
        return self.profiles[key]

    def keys(self) -> List[str]:
        return list(self.profiles)

    def list_profiles(self) -> List[ModelProfile]:
        return list(self.profiles.values())

    def __contains__(self, key: str) -> bool:
        return key in self.profiles


def build_registry(data: Dict[str, Any]) -> ProfileRegistry:
    """
    Build a registry from a parsed profile document.

    Raises:
        ConfigurationError: If the document is malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("profiles"), dict):
        raise ConfigurationError("Profile document must contain a 'profiles' mapping")

    profiles: Dict[str, ModelProfile] = {}
    for key, profile_data in data["profiles"].items():
        try:
            profiles[key] = ModelProfile(key=key, **(profile_data or {}))
        except (PydanticValidationError, TypeError) as e:
            raise ConfigurationError(f"Invalid profile {key!r}: {e}")

    try:
        families = tuple(
            FamilyRule(
                provider=rule["provider"],
                profile=rule["profile"],
                models=tuple(rule.get("models", [])),
                token=rule.get("token"),
            )
            for rule in data.get("families") or []
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigurationError(f"Invalid family rule: {e}")

    return ProfileRegistry(
        profiles=profiles,
        default_key=data.get("default_profile", "openai"),
        families=families,
    )


def load_profiles(path: Optional[str] = None) -> ProfileRegistry:
    """
    Load the profile registry from YAML.

    Args:
        path: Profile file. Falls back to $CHAT_GATEWAY_PROFILES, then to
            the built-in profiles shipped with the package.

    Returns:
        Loaded registry
    """
    path = path or os.environ.get(PROFILES_ENV_VAR) or str(BUILTIN_PROFILES_PATH)

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load profiles from {path}: {e}")

    registry = build_registry(data)
    logger.info(f"Loaded {len(registry.profiles)} model profiles from {path}")
    return registry

