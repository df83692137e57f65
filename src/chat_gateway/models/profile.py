"""
Declarative parameter profiles.

A profile describes which tunable parameters one provider/model family
accepts, with bounds, options and defaults. Profiles are plain immutable
data; the normalizer interprets them.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ParamKind(str, Enum):
    """How a parameter value is validated."""
    BOUNDED_NUMERIC = "bounded_numeric"
    INTEGER_RANGE = "integer_range"
    ENUMERATED = "enumerated"
    BOOLEAN = "boolean"


class ParamOption(BaseModel):
    """One allowed value of an enumerated parameter."""
    model_config = ConfigDict(frozen=True)

    value: str
    label: str = ""


class ParamSpec(BaseModel):
    """
    Description of one tunable parameter.

    `min`/`max`/`step` apply to bounded numerics, `min_value`/`max_value`
    to integer ranges and `options` to enumerations. `step` is only a UI
    hint and is never enforced. When `fixed_value` is set it replaces any
    caller input.
    """
    model_config = ConfigDict(frozen=True)

    kind: ParamKind
    label: str = ""
    description: str = ""
    default: Any = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    options: List[ParamOption] = Field(default_factory=list)
    disabled: bool = False
    fixed_value: Any = None

    @model_validator(mode="after")
    def _check_kind(self) -> "ParamSpec":
        if self.kind == ParamKind.ENUMERATED and not self.options:
            raise ValueError("enumerated parameter requires options")
        return self

    @property
    def has_fixed_value(self) -> bool:
        """True when `fixed_value` was given, even if given as null."""
        return "fixed_value" in self.model_fields_set

    @property
    def option_values(self) -> List[str]:
        return [o.value for o in self.options]

    @property
    def effective_default(self) -> Any:
        return self.fixed_value if self.has_fixed_value else self.default


class ModelProfile(BaseModel):
    """
    Parameter profile for one provider/model family.

    `key` is the registry key and may differ from `provider`, the upstream
    that actually serves the request (e.g. "openai-gpt5" is served by
    "openai").
    """
    model_config = ConfigDict(frozen=True)

    key: str
    provider: str
    models: List[str] = Field(default_factory=list)
    display_name: str = ""
    api_key_label: Optional[str] = None
    parameters: Dict[str, ParamSpec] = Field(default_factory=dict)
    # model name -> parameters that model rejects
    excluded_parameters: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def default_model(self) -> Optional[str]:
        return self.models[0] if self.models else None

    @property
    def has_transform(self) -> bool:
        return bool(self.excluded_parameters)

    def transform(self, params: Dict[str, Any], model: Optional[str] = None) -> Dict[str, Any]:
        """Drop parameters the given model variant does not accept."""
        excluded = self.excluded_parameters.get(model or "")
        if not excluded:
            return params
        return {name: value for name, value in params.items() if name not in excluded}

    def default_params(self) -> Dict[str, Any]:
        """Default value of every parameter, fixed values taking precedence."""
        return {name: spec.effective_default for name, spec in self.parameters.items()}

    def to_summary(self) -> Dict[str, Any]:
        """Profile description for clients rendering settings."""
        return {
            "key": self.key,
            "provider": self.provider,
            "display_name": self.display_name,
            "api_key_label": self.api_key_label,
            "models": list(self.models),
            "default_model": self.default_model,
            "parameters": {
                name: spec.model_dump(mode="json", exclude_none=True)
                for name, spec in self.parameters.items()
            },
            "defaults": self.default_params(),
        }
