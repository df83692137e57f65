"""
Parameter normalization against a model profile.

Normalization is fail-open: malformed caller values degrade to defaults or
to the nearest bound, they never abort a request.
"""

import math
from typing import Any, Dict, Mapping, Optional

from ..models.profile import ModelProfile, ParamKind, ParamSpec


def _to_number(value: Any) -> Optional[float]:
    """Coerce to float; None when not numeric or NaN.

    Integers too large for a float become a signed infinity.
    """
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except OverflowError:
        if isinstance(value, int):
            return math.copysign(math.inf, value)
        return None
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _clamp(value: float, low: Optional[float], high: Optional[float]) -> float:
    if low is not None and value < low:
        return low
    if high is not None and value > high:
        return high
    return value


def normalize_value(spec: ParamSpec, value: Any) -> Any:
    """
    Validate one caller-supplied value against its spec.

    Fixed values and missing input are handled by `normalize`.
    """
    if spec.kind == ParamKind.BOUNDED_NUMERIC:
        number = _to_number(value)
        if number is None:
            return spec.default
        return _clamp(number, spec.min, spec.max)

    if spec.kind == ParamKind.INTEGER_RANGE:
        number = _to_number(value)
        if number is None:
            return spec.default
        number = _clamp(number, spec.min_value, spec.max_value)
        if math.isinf(number):
            return spec.default
        return int(number)

    if spec.kind == ParamKind.ENUMERATED:
        candidate = str(value)
        return candidate if candidate in spec.option_values else spec.default

    if spec.kind == ParamKind.BOOLEAN:
        return bool(value)

    return value


def normalize(
    profile: ModelProfile,
    raw_params: Optional[Mapping[str, Any]],
    model: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the canonical parameter set for a request.

    Args:
        profile: Resolved model profile
        raw_params: Caller-supplied parameters (may be None)
        model: Model name, passed to the profile transform

    Returns:
        Mapping of every profile parameter to a validated value, after the
        profile transform
    """
    raw_params = raw_params or {}
    normalized: Dict[str, Any] = {}

    for name, spec in profile.parameters.items():
        if spec.has_fixed_value:
            normalized[name] = spec.fixed_value
            continue

        value = raw_params.get(name)
        if value is None:
            normalized[name] = spec.default
            continue

        normalized[name] = normalize_value(spec, value)

    if profile.has_transform:
        return profile.transform(normalized, model)
    return normalized
