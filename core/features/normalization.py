"""
Feature Normalizer.

Coerces loosely-typed raw student attributes (form values, JSON numbers,
CSV cells) into the Canonical Feature Map: feature name -> float.

Numeric features accept anything that parses to a finite float; binary
features accept "Yes"/"No", 1/0, "1"/"0" and True/False. Anything else,
including absence, falls back to the Defaults Table.

Normalization never fails. A feature missing from the Defaults Table is
simply left out of the map, which surfaces later as a MissingFeatureError
when a model schema asks for it.

Time Complexity: O(F) where F = number of canonical features
Memory: O(F)
"""

import math
import numbers
from typing import Any, Dict, Mapping, Optional

import numpy as np

from core.features.feature_registry import BINARY, FEATURE_SPECS, FeatureSpec

_YES = {"Yes", "1"}
_NO = {"No", "0"}


def _lookup(raw: Mapping[str, Any], spec: FeatureSpec) -> Any:
    """First non-null value among the feature's accepted keys."""
    for key in spec.input_keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def yes_no_to_01(value: Any) -> Optional[float]:
    """Map a surrogate boolean to 1.0/0.0, or None when unrecognised."""
    if isinstance(value, (bool, np.bool_)):
        return 1.0 if value else 0.0
    if isinstance(value, str):
        if value in _YES:
            return 1.0
        if value in _NO:
            return 0.0
        return None
    if isinstance(value, numbers.Real):
        if value == 1:
            return 1.0
        if value == 0:
            return 0.0
    return None


def num_or_default(value: Any, default: Optional[float]) -> Optional[float]:
    """
    Parse a finite float, falling back to ``default``.

    Strings follow form-field coercion: "" is missing, whitespace alone is 0,
    and digit separators ("1_000") or non-ASCII digits do not parse.
    """
    if value is None:
        return default
    if isinstance(value, str):
        if value == "":
            return default
        value = value.strip()
        if value == "":
            return 0.0
        if "_" in value or not value.isascii():
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def normalize_student(
    raw: Optional[Mapping[str, Any]],
    defaults: Mapping[str, float],
) -> Dict[str, float]:
    """Build the Canonical Feature Map for one student."""
    src = raw or {}
    features: Dict[str, float] = {}

    for spec in FEATURE_SPECS:
        default = defaults.get(spec.name)
        value = _lookup(src, spec)

        if spec.kind == BINARY:
            coerced = yes_no_to_01(value)
            if coerced is None:
                coerced = default
        else:
            coerced = num_or_default(value, default)

        if coerced is not None:
            features[spec.name] = float(coerced)

    return features
