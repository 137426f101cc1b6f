"""
Engine Errors.

Every failure raised by the engine is a configuration-level defect
(mismatched model artifact, missing reference bucket, unknown model alias).
Raw student input alone never triggers one of these.
"""


class EngineError(Exception):
    """Base class for all engine failures."""


class UnknownModelError(EngineError):
    def __init__(self, alias):
        self.alias = alias
        super().__init__(f'Unknown model_type "{alias}"')


class MissingFeatureError(EngineError):
    def __init__(self, feature: str):
        self.feature = feature
        super().__init__(f'Missing feature "{feature}" after normalization')


class SchemaMismatchError(EngineError):
    def __init__(self, n_coef: int, n_features: int, model: str | None = None):
        self.n_coef = n_coef
        self.n_features = n_features
        where = f" for {model}" if model else ""
        super().__init__(
            f"Model weights/feature length mismatch{where} "
            f"(coef={n_coef}, features={n_features})"
        )


class MissingReferenceError(EngineError):
    def __init__(self, bucket: str, feature: str | None = None):
        self.bucket = bucket
        self.feature = feature
        if feature is None:
            msg = f'Missing SHAP mean bucket "{bucket}"'
        else:
            msg = f'Missing SHAP mean value for feature "{feature}" in bucket "{bucket}"'
        super().__init__(msg)


class ModelConfigError(EngineError):
    """Raised at load time when a model artifact or engine setting is malformed."""
