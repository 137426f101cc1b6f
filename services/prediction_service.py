"""
Prediction Service — end-to-end inference orchestrator.

   1. Resolve the model alias to a ModelKind
   2. Normalize raw student attributes against the Defaults Table
   3. Build the feature vector for that model's schema
   4. Score with the logistic model (+ isotonic calibration for "calibrated")
   5. Threshold into Graduate / Dropout and derive confidence
   6. Attach the local explanation of the linear score

Every call either returns a complete result or raises an EngineError.
The service holds no per-request state, only the shared read-only store
and the global-explanation cache.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

import pandas as pd

from app.config import DECISION_THRESHOLD, EXPLANATION_REFERENCE
from core.errors import ModelConfigError
from core.explain.attribution import (
    REFERENCE_MODES,
    FeatureImportance,
    LocalExplanation,
    explain_local,
)
from core.explain.explanation_cache import ExplanationCache
from core.features.normalization import normalize_student
from core.features.vector_builder import build_vector
from core.models.model_selector import ModelKind, require_model
from core.models.model_store import ModelDescriptor, ModelStore
from core.scoring.isotonic import calibrate
from core.scoring.linear_scorer import score

GRADUATE = "Graduate"
DROPOUT = "Dropout"


@dataclass(frozen=True)
class PredictionResult:
    prediction: str
    confidence: float
    prob_graduate: float
    model: ModelKind
    explanation: Optional[LocalExplanation] = None


@dataclass(frozen=True)
class GlobalExplanation:
    model: ModelKind
    features: Tuple[FeatureImportance, ...]


def label_prediction(prob_graduate: float, threshold: float = DECISION_THRESHOLD) -> Tuple[str, float]:
    """Return (label, confidence in the predicted class)."""
    prediction = GRADUATE if prob_graduate >= threshold else DROPOUT
    confidence = prob_graduate if prediction == GRADUATE else 1.0 - prob_graduate
    return prediction, min(1.0, max(0.0, float(confidence)))


class PredictionService:
    """Runs predictions and explanations against a loaded ModelStore."""

    def __init__(
        self,
        store: ModelStore,
        cache: Optional[ExplanationCache] = None,
        reference_mode: str = EXPLANATION_REFERENCE,
        threshold: float = DECISION_THRESHOLD,
    ):
        if reference_mode not in REFERENCE_MODES:
            raise ModelConfigError(
                f"Unknown explanation reference {reference_mode!r}, expected one of {REFERENCE_MODES}"
            )
        self.store = store
        self.cache = cache if cache is not None else ExplanationCache()
        self.reference_mode = reference_mode
        self.threshold = threshold

    def descriptor(self, model_alias: Any) -> ModelDescriptor:
        return self.store.get(require_model(model_alias))

    def defaults(self) -> Mapping[str, float]:
        return self.store.defaults

    def probability(self, descriptor: ModelDescriptor, features: Mapping[str, float]) -> float:
        """Graduation probability, calibrated when the model carries a curve."""
        x = build_vector(descriptor.feature_order, features)
        p_raw = score(descriptor.coefficients, descriptor.intercept, x)
        if descriptor.calibration is not None:
            return calibrate(descriptor.calibration, p_raw)
        return p_raw

    def explain_local(self, model_alias: Any, raw_student: Optional[Mapping[str, Any]]) -> LocalExplanation:
        descriptor = self.descriptor(model_alias)
        features = normalize_student(raw_student, self.store.defaults)
        return explain_local(descriptor, features, self.store.reference_table, self.reference_mode)

    def predict(self, model_alias: Any, raw_student: Optional[Mapping[str, Any]]) -> PredictionResult:
        descriptor = self.descriptor(model_alias)
        features = normalize_student(raw_student, self.store.defaults)

        prob_graduate = self.probability(descriptor, features)
        prediction, confidence = label_prediction(prob_graduate, self.threshold)
        explanation = explain_local(
            descriptor, features, self.store.reference_table, self.reference_mode
        )

        return PredictionResult(
            prediction=prediction,
            confidence=confidence,
            prob_graduate=prob_graduate,
            model=descriptor.kind,
            explanation=explanation,
        )

    def predict_batch(self, model_alias: Any, df: pd.DataFrame) -> List[PredictionResult]:
        """Score every row of ``df``; blank cells fall back to defaults."""
        descriptor = self.descriptor(model_alias)
        rows = df.astype(object).where(pd.notna(df), None).to_dict(orient="records")

        results: List[PredictionResult] = []
        for row in rows:
            features = normalize_student(row, self.store.defaults)
            prob_graduate = self.probability(descriptor, features)
            prediction, confidence = label_prediction(prob_graduate, self.threshold)
            results.append(
                PredictionResult(
                    prediction=prediction,
                    confidence=confidence,
                    prob_graduate=prob_graduate,
                    model=descriptor.kind,
                )
            )
        return results

    def global_explanation(self, model_alias: Any) -> GlobalExplanation:
        descriptor = self.descriptor(model_alias)
        return GlobalExplanation(model=descriptor.kind, features=self.cache.get_or_build(descriptor))
