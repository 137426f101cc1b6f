"""
Attribution Engine — linear explanations for logistic regression.

Local (one prediction), in log-odds space:

    output_value    = coef · x    + intercept
    base_value      = coef · x_ref + intercept
    contribution[i] = coef[i] * (x[i] - x_ref[i])

so that sum(contribution) + base_value == output_value. The reference
x_ref is either the SHAP Reference Table bucket for the model ("mean"
mode) or all zeros ("zero" mode).

Global (one model): importance[i] = |coef[i]|, ranked descending.

Explanations always use the linear score. For the calibrated variant they
describe the base model, since the isotonic step has no per-feature split.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

import numpy as np

from core.errors import MissingReferenceError
from core.features.vector_builder import build_vector
from core.models.model_store import ModelDescriptor
from core.scoring.linear_scorer import linear_output

REFERENCE_MEAN = "mean"
REFERENCE_ZERO = "zero"
REFERENCE_MODES = (REFERENCE_MEAN, REFERENCE_ZERO)


@dataclass(frozen=True)
class AttributionRecord:
    feature: str
    value: float
    weight: float
    contribution: float

    @property
    def impact(self) -> str:
        return "increases" if self.contribution > 0 else "decreases"


@dataclass(frozen=True)
class LocalExplanation:
    base_value: float
    output_value: float
    attributions: Tuple[AttributionRecord, ...]


@dataclass(frozen=True)
class FeatureImportance:
    feature: str
    weight: float
    importance: float


def reference_vector(
    descriptor: ModelDescriptor,
    reference_table: Optional[Mapping[str, Mapping[str, float]]],
    mode: str = REFERENCE_MEAN,
) -> np.ndarray:
    """Background point the local explanation is measured against."""
    if mode == REFERENCE_ZERO:
        return np.zeros(len(descriptor.feature_order), dtype=np.float64)
    if mode != REFERENCE_MEAN:
        raise ValueError(f"Unknown reference mode {mode!r}, expected one of {REFERENCE_MODES}")

    bucket_name = descriptor.reference_bucket
    bucket = reference_table.get(bucket_name) if reference_table is not None else None
    if bucket is None:
        raise MissingReferenceError(bucket_name)

    ref = np.zeros(len(descriptor.feature_order), dtype=np.float64)
    for i, name in enumerate(descriptor.feature_order):
        if name not in bucket:
            raise MissingReferenceError(bucket_name, name)
        ref[i] = float(bucket[name])
    return ref


def explain_local(
    descriptor: ModelDescriptor,
    features: Mapping[str, float],
    reference_table: Optional[Mapping[str, Mapping[str, float]]] = None,
    mode: str = REFERENCE_MEAN,
) -> LocalExplanation:
    """Per-feature log-odds contributions, largest magnitude first."""
    x = build_vector(descriptor.feature_order, features)
    x_ref = reference_vector(descriptor, reference_table, mode)
    coef = np.asarray(descriptor.coefficients, dtype=np.float64)

    output_value = linear_output(coef, descriptor.intercept, x)
    base_value = linear_output(coef, descriptor.intercept, x_ref)
    contributions = coef * (x - x_ref)

    records = [
        AttributionRecord(
            feature=name,
            value=float(x[i]),
            weight=float(coef[i]),
            contribution=float(contributions[i]),
        )
        for i, name in enumerate(descriptor.feature_order)
    ]
    records.sort(key=lambda r: abs(r.contribution), reverse=True)

    return LocalExplanation(
        base_value=base_value,
        output_value=output_value,
        attributions=tuple(records),
    )


def explain_global(descriptor: ModelDescriptor) -> Tuple[FeatureImportance, ...]:
    """Coefficient-magnitude ranking, independent of any input."""
    entries = [
        FeatureImportance(feature=name, weight=float(w), importance=abs(float(w)))
        for name, w in zip(descriptor.feature_order, descriptor.coefficients)
    ]
    entries.sort(key=lambda e: e.importance, reverse=True)
    return tuple(entries)
