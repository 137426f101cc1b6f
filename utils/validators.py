"""
Request validation at the HTTP boundary.

The engine itself accepts anything and defaults what it cannot parse; these
checks reject values that parse fine but fall outside plausible ranges.
Each check returns an error message if invalid, None if valid.

Time Complexity: O(n) where n = number of checked fields (× rows for CSV)
Memory: O(1)
"""

from typing import Any, Mapping

import pandas as pd

from app.config import (
    ADMISSION_GRADE_MAX,
    ADMISSION_GRADE_MIN,
    AGE_MAX,
    AGE_MIN,
    GDP_MAX,
    GDP_MIN,
    INFLATION_MAX,
    INFLATION_MIN,
    UNEMPLOYMENT_MAX,
    UNEMPLOYMENT_MIN,
)
from core.features.feature_registry import FEATURE_REGISTRY
from core.features.normalization import num_or_default

BOUNDS = {
    "Admission grade": (ADMISSION_GRADE_MIN, ADMISSION_GRADE_MAX),
    "Age at enrollment": (AGE_MIN, AGE_MAX),
    "Unemployment rate": (UNEMPLOYMENT_MIN, UNEMPLOYMENT_MAX),
    "Inflation rate": (INFLATION_MIN, INFLATION_MAX),
    "GDP": (GDP_MIN, GDP_MAX),
}

KNOWN_COLUMNS = {key for spec in FEATURE_REGISTRY.values() for key in spec.input_keys}


def _as_finite(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    return num_or_default(value, None)


def validate_student(raw: Mapping[str, Any] | None) -> str | None:
    """Check supplied numeric fields against BOUNDS."""
    if not raw:
        return None
    for name, (low, high) in BOUNDS.items():
        for key in FEATURE_REGISTRY[name].input_keys:
            number = _as_finite(raw.get(key))
            if number is not None and not (low <= number <= high):
                return f"Field '{key}' must be between {low:g} and {high:g} (got {number:g})."
    return None


def validate_csv(df: pd.DataFrame) -> str | None:
    """
    Validate a batch upload. Checks:
        1. At least one row
        2. At least one recognised feature column
        3. Every row passes validate_student
    """
    if df.empty:
        return "CSV file is empty."

    recognised = [col for col in df.columns if col in KNOWN_COLUMNS]
    if not recognised:
        return "CSV has no recognised student feature columns."

    rows = df[recognised].astype(object).where(pd.notna(df[recognised]), None)
    for i, row in enumerate(rows.to_dict(orient="records")):
        error = validate_student(row)
        if error:
            return f"Row {i}: {error}"
    return None
