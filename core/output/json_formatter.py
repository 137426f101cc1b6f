"""
JSON Output Formatter.

Shapes engine results into the payloads the dashboard consumes:

    prediction  {prediction, confidence, probGraduate, model_type, explanation}
    global      {model_type, explanation_type, description, features}
    local       {model_type, base_value, output_value, contribs, summary}
    batch       {model_type, predictions, summary}
"""

from typing import Any, Dict, List

from core.explain.attribution import LocalExplanation
from core.explain.summary_builder import summarize_local
from core.models.model_selector import ModelKind

GLOBAL_DESCRIPTION = (
    "Feature coefficients from logistic regression. "
    "Larger absolute values indicate stronger influence."
)


def format_explanation(explanation: LocalExplanation) -> Dict[str, Any]:
    return {
        "type": "shap_linear",
        "domain": "logit",
        "base_value": explanation.base_value,
        "output_value": explanation.output_value,
        "features": [
            {
                "name": r.feature,
                "value": r.value,
                "weight": r.weight,
                "contribution": r.contribution,
                "impact": r.impact,
            }
            for r in explanation.attributions
        ],
    }


def format_prediction(result) -> Dict[str, Any]:
    """Payload for a single PredictionResult."""
    payload: Dict[str, Any] = {
        "prediction": result.prediction,
        "confidence": result.confidence,
        "probGraduate": result.prob_graduate,
        "model_type": result.model.value,
    }
    if result.explanation is not None:
        payload["explanation"] = format_explanation(result.explanation)
    return payload


def format_global(explanation) -> Dict[str, Any]:
    return {
        "model_type": explanation.model.value,
        "explanation_type": "global_feature_importance",
        "description": GLOBAL_DESCRIPTION,
        "features": [
            {"feature": e.feature, "weight": e.weight, "importance": e.importance}
            for e in explanation.features
        ],
    }


def format_local(kind: ModelKind, explanation: LocalExplanation) -> Dict[str, Any]:
    return {
        "model_type": kind.value,
        "base_value": explanation.base_value,
        "output_value": explanation.output_value,
        "contribs": [
            {"feature": r.feature, "value": r.value, "effect": r.contribution}
            for r in explanation.attributions
        ],
        "summary": summarize_local(explanation),
    }


def format_batch(kind: ModelKind, results: List, processing_time: float = 0.0) -> Dict[str, Any]:
    predictions = [
        {
            "row": i,
            "prediction": r.prediction,
            "confidence": r.confidence,
            "probGraduate": r.prob_graduate,
        }
        for i, r in enumerate(results)
    ]
    graduates = sum(1 for r in results if r.prediction == "Graduate")
    return {
        "model_type": kind.value,
        "predictions": predictions,
        "summary": {
            "total_students": len(results),
            "predicted_graduate": graduates,
            "predicted_dropout": len(results) - graduates,
            "processing_time_seconds": round(processing_time, 2),
        },
    }
