"""
Feature Registry — the canonical student features and their input aliases.

Every model schema references a subset of these names. Each feature accepts
its canonical (space-separated) name plus one or more underscore aliases used
by the web form and CSV uploads.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

NUMERIC = "numeric"
BINARY = "binary"


@dataclass(frozen=True)
class FeatureSpec:
    name: str
    kind: str
    aliases: Tuple[str, ...]

    @property
    def input_keys(self) -> Tuple[str, ...]:
        """Keys looked up in raw input, aliases first."""
        return self.aliases + (self.name,)


FEATURE_SPECS: List[FeatureSpec] = [
    FeatureSpec("Admission grade", NUMERIC, ("Admission_grade",)),
    FeatureSpec("Age at enrollment", NUMERIC, ("Age_at_enrollment",)),
    FeatureSpec("Scholarship holder", BINARY, ("Scholarship_holder",)),
    FeatureSpec(
        "Tuition fees up to date",
        BINARY,
        ("Tuition_up_to_date", "Tuition_fees_up_to_date"),
    ),
    FeatureSpec("Displaced", BINARY, ()),
    FeatureSpec("Educational special needs", BINARY, ("Educational_special_needs",)),
    FeatureSpec("Debtor", BINARY, ()),
    FeatureSpec("International", BINARY, ()),
    FeatureSpec("Unemployment rate", NUMERIC, ("Unemployment_rate",)),
    FeatureSpec("Inflation rate", NUMERIC, ("Inflation_rate",)),
    FeatureSpec("GDP", NUMERIC, ()),
    FeatureSpec("Gender", BINARY, ()),
]

FEATURE_REGISTRY: Dict[str, FeatureSpec] = {spec.name: spec for spec in FEATURE_SPECS}

FEATURE_NAMES: List[str] = [spec.name for spec in FEATURE_SPECS]
GENDER_FEATURE = "Gender"


def display_name(name: str) -> str:
    """Title-case a feature name for human-readable text."""
    return " ".join(word[:1].upper() + word[1:] for word in name.replace("_", " ").split(" "))
