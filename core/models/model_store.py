"""
Model Store — loads and holds the trained logistic regression variants.

Artifacts (JSON) expected in the model directory:
  - model_baseline.json     {"schema": {"features": [...]}, "logreg": {"coef": [...], "intercept": f}}
  - model_drop_gender.json  same shape, schema excludes Gender
  - model_reweighted.json   same shape
  - model_calibrated.json   {"base": {"features", "coef", "intercept"}, "isotonic": {"x", "y"}}
  - defaults.json           training medians/modes, optionally wrapped as {"defaults": {...}}
  - shap_feature_mean.json  optional, mean feature values per reference bucket
  - metrics.json            optional, per-model performance/fairness rows

Everything is validated once at load and never mutated afterwards, so a
single store can be shared by any number of concurrent requests.
"""

import json
import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.errors import ModelConfigError, SchemaMismatchError
from core.features.feature_registry import FEATURE_NAMES, GENDER_FEATURE
from core.models.model_selector import ModelKind
from core.scoring.isotonic import CalibrationCurve

logger = logging.getLogger(__name__)

MODEL_FILES: Dict[ModelKind, str] = {
    ModelKind.BASELINE: "model_baseline.json",
    ModelKind.DROP_GENDER: "model_drop_gender.json",
    ModelKind.REWEIGHTED: "model_reweighted.json",
    ModelKind.CALIBRATED: "model_calibrated.json",
}

REFERENCE_BUCKETS: Dict[ModelKind, str] = {
    ModelKind.BASELINE: "with_gender",
    ModelKind.DROP_GENDER: "no_gender",
    ModelKind.REWEIGHTED: "with_gender",
    ModelKind.CALIBRATED: "no_gender",
}

DEFAULTS_FILE = "defaults.json"
REFERENCE_FILE = "shap_feature_mean.json"
METRICS_FILE = "metrics.json"


@dataclass(frozen=True)
class ModelDescriptor:
    """One trained classifier. For CALIBRATED the linear part is the base model."""
    kind: ModelKind
    feature_order: Tuple[str, ...]
    coefficients: Tuple[float, ...]
    intercept: float
    reference_bucket: str
    calibration: Optional[CalibrationCurve] = None

    @property
    def is_calibrated(self) -> bool:
        return self.calibration is not None


def _read_json(path: str) -> Any:
    if not os.path.exists(path):
        raise ModelConfigError(f"Missing model artifact {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _parse_curve(kind: ModelKind, raw: Mapping[str, Any]) -> CalibrationCurve:
    xs = tuple(float(v) for v in raw.get("x", []))
    ys = tuple(float(v) for v in raw.get("y", []))
    if not xs or len(xs) != len(ys):
        raise ModelConfigError(
            f"Calibration curve for {kind.value} needs equal, non-empty x/y "
            f"(x={len(xs)}, y={len(ys)})"
        )
    if any(b < a for a, b in zip(xs, xs[1:])):
        raise ModelConfigError(f"Calibration x values for {kind.value} are not ascending")
    return CalibrationCurve(x=xs, y=ys)


def parse_descriptor(kind: ModelKind, payload: Mapping[str, Any]) -> ModelDescriptor:
    """Build a validated descriptor from one model artifact."""
    try:
        if kind is ModelKind.CALIBRATED:
            base = payload["base"]
            features = base["features"]
            coef = base["coef"]
            intercept = base["intercept"]
            curve = _parse_curve(kind, payload["isotonic"])
        else:
            features = payload["schema"]["features"]
            coef = payload["logreg"]["coef"]
            intercept = payload["logreg"]["intercept"]
            curve = None
    except (KeyError, TypeError) as e:
        raise ModelConfigError(f"Malformed artifact for {kind.value}: missing {e}") from e

    if len(set(features)) != len(features):
        raise ModelConfigError(f"Duplicate feature names in {kind.value} schema")
    if len(coef) != len(features):
        raise SchemaMismatchError(len(coef), len(features), model=kind.value)
    if kind is ModelKind.CALIBRATED and GENDER_FEATURE in features:
        raise ModelConfigError("Calibrated base schema must exclude Gender")

    return ModelDescriptor(
        kind=kind,
        feature_order=tuple(str(f) for f in features),
        coefficients=tuple(float(c) for c in coef),
        intercept=float(intercept),
        reference_bucket=REFERENCE_BUCKETS[kind],
        calibration=curve,
    )


class ModelStore:
    """Read-only registry of model descriptors and shared lookup tables."""

    def __init__(
        self,
        models: Mapping[ModelKind, ModelDescriptor],
        defaults: Mapping[str, float],
        reference_table: Optional[Mapping[str, Mapping[str, float]]] = None,
        metrics: Optional[List[Dict[str, Any]]] = None,
    ):
        missing = [k.value for k in ModelKind if k not in models]
        if missing:
            raise ModelConfigError(f"Model store is missing variants: {missing}")

        self._models = MappingProxyType(dict(models))
        self._defaults = MappingProxyType({k: float(v) for k, v in defaults.items()})
        self._reference_table = None
        if reference_table is not None:
            self._reference_table = MappingProxyType(
                {
                    bucket: MappingProxyType({k: float(v) for k, v in values.items()})
                    for bucket, values in reference_table.items()
                }
            )
        self._metrics = list(metrics or [])

    @classmethod
    def load(cls, model_dir: str) -> "ModelStore":
        """Load every artifact from ``model_dir``."""
        models = {
            kind: parse_descriptor(kind, _read_json(os.path.join(model_dir, filename)))
            for kind, filename in MODEL_FILES.items()
        }
        for descriptor in models.values():
            logger.info(
                "Loaded %s model (%d features, calibrated=%s)",
                descriptor.kind.value,
                len(descriptor.feature_order),
                descriptor.is_calibrated,
            )

        defaults_raw = _read_json(os.path.join(model_dir, DEFAULTS_FILE))
        defaults = defaults_raw.get("defaults", defaults_raw)
        missing_defaults = [name for name in FEATURE_NAMES if name not in defaults]
        if missing_defaults:
            raise ModelConfigError(f"Defaults table is missing features: {missing_defaults}")

        reference_table = None
        reference_path = os.path.join(model_dir, REFERENCE_FILE)
        if os.path.exists(reference_path):
            reference_table = _read_json(reference_path)
        else:
            logger.warning("No SHAP reference table at %s", reference_path)

        metrics: List[Dict[str, Any]] = []
        metrics_path = os.path.join(model_dir, METRICS_FILE)
        if os.path.exists(metrics_path):
            metrics = _read_json(metrics_path)

        logger.info("Model store ready from %s", model_dir)
        return cls(models, defaults, reference_table, metrics)

    def get(self, kind: ModelKind) -> ModelDescriptor:
        return self._models[kind]

    @property
    def models(self) -> Mapping[ModelKind, ModelDescriptor]:
        return self._models

    @property
    def defaults(self) -> Mapping[str, float]:
        return self._defaults

    @property
    def reference_table(self) -> Optional[Mapping[str, Mapping[str, float]]]:
        return self._reference_table

    @property
    def metrics(self) -> List[Dict[str, Any]]:
        return list(self._metrics)
