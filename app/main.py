"""
FastAPI application for the Student Outcome Prediction Engine.

Endpoints:
    POST /functions/v1/predict-dropout              — Predict + local explanation
    GET  /functions/v1/global-explanations/{model}  — Coefficient importance
    GET  /explanations/global                       — Importance list only
    POST /explanations/local                        — Contributions + summary
    POST /predict/batch                             — Score a CSV of students
    GET  /defaults                                  — Training defaults
    GET  /metrics                                   — Model performance table
    GET  /stats                                     — Prediction statistics
    GET  /health                                    — System health check
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import get_service, router
from app.config import ALLOWED_ORIGINS, APP_ENV, APP_VERSION, LOG_LEVEL
from core.errors import EngineError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Student Outcome Prediction Engine",
    description="Predicts graduation vs dropout with fairness-aware logistic regression and explains each prediction.",
    version=APP_VERSION,
)

# Restrict origins only in production when a list is configured
if APP_ENV == "production" and ALLOWED_ORIGINS:
    origins = ALLOWED_ORIGINS
else:
    origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(EngineError)
async def _engine_error_handler(request: Request, exc: EngineError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.on_event("startup")
async def _startup_load_models():
    logger.info("App starting up. Loading model store...")
    get_service()
