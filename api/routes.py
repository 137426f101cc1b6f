"""
API Routes — prediction, explanation, defaults, and metrics endpoints.

Engine errors (unknown model, mismatched artifacts) propagate to the
EngineError handler registered in app/main.py and become 400 responses.
"""

import contextlib
import io
import logging
import threading
import time
from typing import Any, Dict, Optional

import pandas as pd
from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.config import APP_VERSION, DEFAULT_MODEL_TYPE, MODEL_DIR
from core.models.model_selector import require_model
from core.models.model_store import ModelStore
from core.output.json_formatter import (
    format_batch,
    format_global,
    format_local,
    format_prediction,
)
from services.prediction_service import PredictionService
from utils.metrics import MetricsTracker
from utils.validators import validate_csv, validate_student

logger = logging.getLogger(__name__)

router = APIRouter()
metrics_tracker = MetricsTracker()

_SERVICE_LOCK = threading.Lock()
_SERVICE: PredictionService | None = None


def get_service() -> PredictionService:
    """Load the model store once and share the service across requests."""
    global _SERVICE
    with _SERVICE_LOCK:
        if _SERVICE is None:
            _SERVICE = PredictionService(ModelStore.load(MODEL_DIR))
        return _SERVICE


@contextlib.contextmanager
def log_timer(label: str):
    start = time.time()
    yield
    elapsed = time.time() - start
    logger.info("Request [%s] took %.4f seconds", label, elapsed)


class PredictRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_type: Optional[Any] = DEFAULT_MODEL_TYPE
    student_data: Optional[Dict[str, Any]] = Field(default_factory=dict)


class LocalExplanationRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_type: Optional[Any] = None
    input: Optional[Dict[str, Any]] = Field(default_factory=dict)


def _check_student(raw: Optional[Dict[str, Any]]) -> None:
    error = validate_student(raw)
    if error:
        raise HTTPException(status_code=400, detail=error)


@router.get("/health")
async def health():
    """Return system health status."""
    return {"status": "healthy", "version": APP_VERSION}


@router.get("/defaults")
async def defaults():
    """Training medians/modes used to prefill and backfill student fields."""
    return dict(get_service().defaults())


@router.get("/metrics")
@router.get("/rest/v1/model_metrics")
async def model_metrics():
    """Per-model performance and fairness metrics."""
    return get_service().store.metrics


@router.get("/stats")
async def stats():
    """Return prediction statistics since startup."""
    return metrics_tracker.get_metrics()


@router.post("/functions/v1/predict-dropout")
async def predict_dropout(body: PredictRequest):
    """Predict Graduate vs Dropout and explain the decision."""
    _check_student(body.student_data)
    result = get_service().predict(body.model_type, body.student_data)
    metrics_tracker.record_prediction(result.model.value)
    return format_prediction(result)


@router.get("/functions/v1/global-explanations/{model_type}")
async def global_explanation(model_type: str):
    """Coefficient-based feature importance for one model."""
    return format_global(get_service().global_explanation(model_type))


@router.get("/explanations/global")
async def global_explanation_features(model_type: Optional[str] = Query(default=None)):
    return format_global(get_service().global_explanation(model_type))["features"]


@router.post("/explanations/local")
async def local_explanation(body: LocalExplanationRequest):
    """Local log-odds contributions with a one-line summary."""
    kind = require_model(body.model_type)
    _check_student(body.input)
    explanation = get_service().explain_local(kind, body.input)
    return format_local(kind, explanation)


@router.post("/predict/batch")
async def predict_batch(
    file: UploadFile = File(...),
    model_type: str = Query(default=DEFAULT_MODEL_TYPE),
):
    """Score a CSV with one student per row."""
    if not file.filename or not file.filename.endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are accepted.")

    kind = require_model(model_type)

    try:
        contents = await file.read()
        df = pd.read_csv(io.StringIO(contents.decode("utf-8")))
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to parse CSV: {str(e)}")

    validation_error = validate_csv(df)
    if validation_error:
        raise HTTPException(status_code=400, detail=validation_error)

    start_time = time.time()
    with log_timer("predict_batch"):
        results = get_service().predict_batch(kind, df)
    result = format_batch(kind, results, time.time() - start_time)

    metrics_tracker.record_batch(kind.value, result["summary"])
    return JSONResponse(content=result)
