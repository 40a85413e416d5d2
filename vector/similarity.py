from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

from processing.errors import IncomparableVectors, NumericInvariantError
from vector.features import FeatureVector

logger = logging.getLogger(__name__)

# tolerance for floating point noise around the [0, 1] bounds
EPSILON = 1e-9


class VectorComparison(Protocol):
    def similarity(self, v1: FeatureVector, v2: FeatureVector) -> float: ...


def dot_product(v1: FeatureVector, v2: FeatureVector) -> float:
    return float(np.dot(v1.values, v2.values))


def euclidean_length(v: FeatureVector) -> float:
    return float(np.linalg.norm(v.values))


def _active(v: FeatureVector) -> dict[int, float]:
    # position -> value of every nonzero entry
    return {int(i): float(v.values[i]) for i in np.flatnonzero(v.values)}


class CosineSimilarity:
    """dot(v1, v2) / (|v1| * |v2|), 0.0 when either vector is all zeros.

    TF-IDF values are non-negative, so anything outside [0, 1] (beyond float
    noise) means the vectors were not built over the same vocabulary.
    """

    def similarity(self, v1: FeatureVector, v2: FeatureVector) -> float:
        if len(v1) != len(v2):
            raise IncomparableVectors(len(v1), len(v2))
        lengths = euclidean_length(v1) * euclidean_length(v2)
        if lengths == 0.0:
            return 0.0
        sim = dot_product(v1, v2) / lengths
        if not np.isfinite(sim) or sim < -EPSILON or sim > 1.0 + EPSILON:
            logger.error(
                "Cosine similarity out of range: %r between %s and %s",
                sim,
                _active(v1),
                _active(v2),
            )
            raise NumericInvariantError(f"Cosine similarity must be between 0 and 1, but is: {sim}")
        return min(1.0, max(0.0, sim))
