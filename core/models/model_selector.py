"""
Model Selector — resolves user-facing aliases to a ModelKind.

Aliases are lower-cased and runs of whitespace become underscores before
lookup, so "Gender Blind" and "gender_blind" resolve identically.
"""

import re
from enum import Enum
from typing import Any, Dict, Optional

from core.errors import UnknownModelError


class ModelKind(str, Enum):
    BASELINE = "baseline"
    DROP_GENDER = "drop_gender"
    REWEIGHTED = "reweighted"
    CALIBRATED = "calibrated"


MODEL_TYPE_MAP: Dict[str, ModelKind] = {
    "baseline": ModelKind.BASELINE,
    "baseline_model": ModelKind.BASELINE,
    "drop_gender": ModelKind.DROP_GENDER,
    "drop-gender": ModelKind.DROP_GENDER,
    "gender_blind": ModelKind.DROP_GENDER,
    "gender-blind": ModelKind.DROP_GENDER,
    "reweighted": ModelKind.REWEIGHTED,
    "calibrated": ModelKind.CALIBRATED,
}

_WHITESPACE = re.compile(r"\s+")


def resolve_model(alias: Any) -> Optional[ModelKind]:
    """Return the canonical ModelKind for ``alias``, or None."""
    if isinstance(alias, ModelKind):
        return alias
    if not alias:
        return None
    key = _WHITESPACE.sub("_", str(alias).lower())
    return MODEL_TYPE_MAP.get(key)


def require_model(alias: Any) -> ModelKind:
    """Like resolve_model, but raises UnknownModelError on no match."""
    kind = resolve_model(alias)
    if kind is None:
        raise UnknownModelError(alias)
    return kind
