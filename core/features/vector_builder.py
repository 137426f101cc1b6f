"""
Vector Builder — projects a Canonical Feature Map onto a model schema.

The output vector is positionally aligned with the model's feature order.
A feature the schema names but the map lacks is a configuration defect
and raises instead of being defaulted.

Time Complexity: O(F)
Memory: O(F)
"""

from typing import Mapping, Sequence

import numpy as np

from core.errors import MissingFeatureError


def build_vector(
    feature_order: Sequence[str],
    features: Mapping[str, float],
) -> np.ndarray:
    """Return a float64 vector in ``feature_order`` order."""
    vec = np.zeros(len(feature_order), dtype=np.float64)
    for i, name in enumerate(feature_order):
        if name not in features:
            raise MissingFeatureError(name)
        vec[i] = float(features[name])
    return vec
