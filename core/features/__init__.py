"""
Feature Layer.

Turns loosely-typed student input into model-ordered numeric vectors.
"""

from core.features.normalization import normalize_student
from core.features.vector_builder import build_vector

__all__ = ["normalize_student", "build_vector"]
