"""
Explanation Layer.

Local log-odds attributions, global coefficient importance, and the
per-model cache of global explanations.
"""

from core.explain.attribution import explain_global, explain_local
from core.explain.explanation_cache import ExplanationCache

__all__ = ["explain_local", "explain_global", "ExplanationCache"]
