# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-13
# Description: SimilaritySearch
# -----------------------------------------------------------------------------
"""
Exact (brute force) top-K cosine similarity over a VectorIndex.

Ordering is fully deterministic: score descending, then row id ascending.
"""
import heapq
import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np

from errors.DenseSearchErrors import DimensionMismatchError
from utility.logging_utils import get_class_logger
from vectorstore.VectorIndex import VectorIndex


@dataclass(frozen=True)
class SimilarityResult:
    row_id: int
    score: float


class SimilaritySearch:

    def __init__(self, index: VectorIndex, *, logger: Optional[logging.Logger] = None) -> None:
        self.index = index
        self.logger = logger or get_class_logger(self.__class__)

    def scores(self, query: Union[np.ndarray, Sequence[float]]) -> np.ndarray:
        """
        Cosine similarity of `query` against every row, as float64 (N,).
        Zero-norm rows (or a zero-norm query) score 0.0.
        """
        q = np.asarray(query, dtype=np.float64)
        if q.ndim != 1 or q.shape[0] != self.index.dimension:
            actual = q.shape[0] if q.ndim == 1 else q.shape
            raise DimensionMismatchError(self.index.dimension, actual)

        if self.index.size() == 0:
            return np.zeros(0, dtype=np.float64)

        dots = self.index.matrix.astype(np.float64) @ q
        denom = self.index.norms * np.linalg.norm(q)
        out = np.zeros_like(dots)
        np.divide(dots, denom, out=out, where=denom > 0)
        return out

    def search(self, query: Union[np.ndarray, Sequence[float]], k: int) -> List[SimilarityResult]:
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")

        start = time.time()
        # Validate the query even when k == 0 or the index is empty
        sims = self.scores(query)
        n = sims.shape[0]
        if k == 0 or n == 0:
            return []

        # Bounded heap of size k: O(N log k)
        top = heapq.nlargest(min(k, n), range(n), key=lambda i: (sims[i], -i))
        results = [SimilarityResult(row_id=i, score=float(sims[i])) for i in top]

        self.logger.debug(
            "Top-%d search over %d rows in %.1f ms", k, n, (time.time() - start) * 1000.0
        )
        return results
