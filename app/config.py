"""
Application configuration.

Every value can be overridden through an environment variable of the same name.
"""

import os

_PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# ── Artifacts ─────────────────────────────────────────────────────────
MODEL_DIR = os.getenv("MODEL_DIR", os.path.join(_PACKAGE_ROOT, "data"))

# ── Prediction ────────────────────────────────────────────────────────
DEFAULT_MODEL_TYPE = os.getenv("DEFAULT_MODEL_TYPE", "reweighted")
DECISION_THRESHOLD = float(os.getenv("DECISION_THRESHOLD", "0.5"))

# "mean" = SHAP reference table as background, "zero" = all-zero background
EXPLANATION_REFERENCE = os.getenv("EXPLANATION_REFERENCE", "mean").lower()

# ── HTTP ──────────────────────────────────────────────────────────────
APP_ENV = os.getenv("APP_ENV", "development")
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
APP_VERSION = "1.0.0"

# ── Input bounds (boundary validation only) ───────────────────────────
ADMISSION_GRADE_MIN = 0.0
ADMISSION_GRADE_MAX = 200.0
AGE_MIN = 15.0
AGE_MAX = 70.0
UNEMPLOYMENT_MIN = 0.0
UNEMPLOYMENT_MAX = 50.0
INFLATION_MIN = 0.0
INFLATION_MAX = 50.0
GDP_MIN = -10.0
GDP_MAX = 10.0
