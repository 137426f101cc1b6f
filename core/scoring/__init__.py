"""
Scoring Layer.

Logistic regression inference and isotonic probability calibration.
"""

from core.scoring.isotonic import CalibrationCurve, calibrate
from core.scoring.linear_scorer import linear_output, score, sigmoid

__all__ = ["CalibrationCurve", "calibrate", "linear_output", "score", "sigmoid"]
