"""
Summary Builder — one-line, human-readable local explanation.
"""

from core.explain.attribution import LocalExplanation
from core.features.feature_registry import display_name

DEFAULT_SUMMARY = "SHAP explanation derived from logistic regression coefficients."


def summarize_local(explanation: LocalExplanation) -> str:
    """Name the strongest positive and strongest negative contributor."""
    top_positive = next((r for r in explanation.attributions if r.contribution > 0), None)
    top_negative = next((r for r in explanation.attributions if r.contribution < 0), None)

    pieces = []
    if top_positive is not None:
        pieces.append(
            f"{display_name(top_positive.feature)} supports graduation "
            f"(+{top_positive.contribution:.2f} log-odds)."
        )
    if top_negative is not None:
        pieces.append(
            f"{display_name(top_negative.feature)} raises dropout risk "
            f"({top_negative.contribution:.2f} log-odds)."
        )
    return " ".join(pieces) if pieces else DEFAULT_SUMMARY
