"""
Linear Scorer — logistic regression inference.

    z = coef · x + intercept
    p = 1 / (1 + e^-z)

The dot product is accumulated left to right in float64, starting from 0.0,
with the intercept added last, so results are bit-identical to a plain
sequential loop. For very negative z, e^-z overflows and the probability
collapses to 0.0, as it does under IEEE-754 infinity arithmetic.
"""

import math
from typing import Sequence

from core.errors import SchemaMismatchError


def sigmoid(z: float) -> float:
    try:
        return 1.0 / (1.0 + math.exp(-float(z)))
    except OverflowError:
        # e^-z == inf
        return 0.0


def dot(coefficients: Sequence[float], x: Sequence[float]) -> float:
    """Sequential float64 dot product."""
    if len(coefficients) != len(x):
        raise SchemaMismatchError(len(coefficients), len(x))
    total = 0.0
    for c, v in zip(coefficients, x):
        total += float(c) * float(v)
    return total


def linear_output(
    coefficients: Sequence[float],
    intercept: float,
    x: Sequence[float],
) -> float:
    """Log-odds of graduation: coef · x + intercept."""
    return dot(coefficients, x) + float(intercept)


def score(
    coefficients: Sequence[float],
    intercept: float,
    x: Sequence[float],
) -> float:
    """Probability of graduation in (0, 1)."""
    return sigmoid(linear_output(coefficients, intercept, x))
