"""
Explanation Cache — memoized global explanations per model.

Global explanations are a pure function of the (immutable) model
descriptor, so entries never need invalidating while the store is loaded.
``clear`` exists for swapping in a freshly loaded store.

Time Complexity: O(1) for cache hit, O(F log F) for miss
Memory: O(M × F)
"""

import threading
from typing import Dict, Tuple

from core.explain.attribution import FeatureImportance, explain_global
from core.models.model_selector import ModelKind
from core.models.model_store import ModelDescriptor


class ExplanationCache:
    """Per-model cache of global feature importance rankings."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[ModelKind, Tuple[FeatureImportance, ...]] = {}
        self.hits = 0
        self.misses = 0

    def get_or_build(self, descriptor: ModelDescriptor) -> Tuple[FeatureImportance, ...]:
        """Return the cached ranking for ``descriptor``, computing it on a miss."""
        with self._lock:
            cached = self._entries.get(descriptor.kind)
            if cached is not None:
                self.hits += 1
                return cached

        entries = explain_global(descriptor)
        with self._lock:
            self.misses += 1
            return self._entries.setdefault(descriptor.kind, entries)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
