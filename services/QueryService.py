# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: QueryService
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from embedding.EmbeddingModel import EmbeddingModel
from errors.DenseSearchErrors import DenseSearchError, IndexInconsistentError, InferenceBusyError, InferenceError
from search.SimilaritySearch import SimilarityResult, SimilaritySearch
from settings import DEFAULT_INFERENCE_QUEUE_TIMEOUT, DEFAULT_INFERENCE_SLOTS
from utility.logging_utils import get_class_logger
from vectorstore.VectorIndex import VectorIndex


@dataclass(frozen=True)
class SearchContext:
    """
    Everything a request needs, built once at startup and never mutated.
    """
    model: EmbeddingModel
    index: VectorIndex
    engine: SimilaritySearch

    @classmethod
    def build(cls, model: EmbeddingModel, index: VectorIndex) -> "SearchContext":
        if index.dimension != model.dimension:
            raise IndexInconsistentError(
                f"Index dimension {index.dimension} does not match model "
                f"'{model.model_name}' dimension {model.dimension}"
            )
        return cls(model=model, index=index, engine=SimilaritySearch(index))


@dataclass(frozen=True)
class SimilarHit:
    row_id: int
    text: str
    score: float


class QueryService:
    """
    Query text -> embedding -> top-K rows -> texts.

    Embedding calls go through a bounded pool of inference slots; a request
    that cannot get a slot within `queue_timeout` seconds is rejected with
    InferenceBusyError instead of piling more work onto the model.
    """

    def __init__(
            self,
            context: SearchContext,
            *,
            inference_slots: int = DEFAULT_INFERENCE_SLOTS,
            queue_timeout: float = DEFAULT_INFERENCE_QUEUE_TIMEOUT,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        if inference_slots < 1:
            raise ValueError(f"inference_slots must be >= 1, got {inference_slots}")
        self.context = context
        self.inference_slots = inference_slots
        self.queue_timeout = queue_timeout
        self._slots = threading.BoundedSemaphore(inference_slots)
        self.logger = logger or get_class_logger(self.__class__)

    def embed_query(self, text: str) -> np.ndarray:
        if not self._slots.acquire(timeout=self.queue_timeout):
            raise InferenceBusyError(
                f"All {self.inference_slots} inference slots busy for {self.queue_timeout:.1f}s"
            )
        try:
            return self.context.model.embed(text)
        except DenseSearchError:
            raise
        except Exception as e:
            raise InferenceError(f"Embedding query failed: {e}") from e
        finally:
            self._slots.release()

    def _to_hits(self, results: List[SimilarityResult]) -> List[SimilarHit]:
        index = self.context.index
        return [SimilarHit(row_id=r.row_id, text=index.text(r.row_id), score=r.score) for r in results]

    def find_similar(self, text: str, num_results: int) -> List[SimilarHit]:
        start = time.time()
        query_vector = self.embed_query(text)
        results = self.context.engine.search(query_vector, num_results)
        hits = self._to_hits(results)
        self.logger.info(
            "Similar search returned %d/%d hits in %.1f ms (query: %s...)",
            len(hits),
            num_results,
            (time.time() - start) * 1000.0,
            text[:50],
        )
        return hits

    def similar_to_row(self, row_id: int, num_results: int) -> List[SimilarHit]:
        """Use a stored row as the query vector (no inference needed)."""
        query_vector = self.context.index.row(row_id)
        return self._to_hits(self.context.engine.search(query_vector, num_results))

    def get_text(self, row_id: int) -> str:
        return self.context.index.text(row_id)

    @staticmethod
    def format_score(score: float) -> str:
        # Shortest repr that round-trips as float32, e.g. 0.9938837
        return str(np.float32(score))

    @classmethod
    def format_hit(cls, hit: SimilarHit) -> str:
        return f"{hit.text} (index: {hit.row_id} score: {cls.format_score(hit.score)})"
