"""
Request statistics tracker.

Counts predictions per model and keeps the most recent batch summary for
the /stats endpoint.

Time Complexity: O(1) per operation
Memory: O(M) for M model types
"""

import threading
from typing import Any, Dict


class MetricsTracker:
    """Tracks prediction statistics across API calls."""

    def __init__(self):
        self._lock = threading.Lock()
        self._total_predictions: int = 0
        self._by_model: Dict[str, int] = {}
        self._last_batch: Dict[str, Any] | None = None

    def record_prediction(self, model_type: str, count: int = 1) -> None:
        with self._lock:
            self._total_predictions += count
            self._by_model[model_type] = self._by_model.get(model_type, 0) + count

    def record_batch(self, model_type: str, summary: Dict[str, Any]) -> None:
        """Record a batch run and count its rows."""
        self.record_prediction(model_type, summary.get("total_students", 0))
        with self._lock:
            self._last_batch = {"model_type": model_type, **summary}

    def get_metrics(self) -> Dict[str, Any]:
        with self._lock:
            if self._total_predictions == 0:
                return {"status": "no_predictions_yet", "total_predictions": 0}
            metrics: Dict[str, Any] = {
                "status": "ready",
                "total_predictions": self._total_predictions,
                "by_model": dict(self._by_model),
            }
            if self._last_batch is not None:
                metrics["last_batch"] = dict(self._last_batch)
            return metrics
