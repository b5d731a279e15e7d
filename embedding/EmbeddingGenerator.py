# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-15
# Description: EmbeddingGenerator
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from embedding.EmbeddingModel import EmbeddingModel
from errors.DenseSearchErrors import ArtifactIOError, DenseSearchError, InferenceError
from settings import DEFAULT_BATCH_SIZE, DEFAULT_PARALLELISM
from utility.logging_utils import get_class_logger
from vectorstore.MatrixStore import MatrixStore
from vectorstore.TextMapStore import TextMapStore


@dataclass(frozen=True)
class GenerationResult:
    rows: int
    dimension: int
    batches: int
    text_map_path: Path
    matrix_path: Path
    elapsed_ms: float


class EmbeddingGenerator:
    """
    Owns the offline embedding pipeline:
      - split the text map into contiguous batches
      - embed batches on a thread pool
      - join batch outputs in batch order (never completion order)
      - persist text map + matrix together, or nothing at all
    """

    def __init__(
            self,
            model: EmbeddingModel,
            *,
            batch_size: int = DEFAULT_BATCH_SIZE,
            parallelism: int = DEFAULT_PARALLELISM,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if parallelism < 1:
            raise ValueError(f"parallelism must be >= 1, got {parallelism}")
        self.model = model
        self.batch_size = batch_size
        self.parallelism = parallelism
        self.logger = logger or get_class_logger(self.__class__)

    def partition(self, texts: Sequence[str]) -> List[List[str]]:
        """Batch k holds texts[k*B : k*B + B]; only the last batch may be short."""
        return [list(texts[i:i + self.batch_size]) for i in range(0, len(texts), self.batch_size)]

    def _embed_one(self, batch_index: int, batch: List[str]) -> np.ndarray:
        try:
            arr = np.asarray(self.model.embed_batch(batch), dtype=np.float32)
        except DenseSearchError:
            raise
        except Exception as e:
            raise InferenceError(f"Batch {batch_index} failed: {e}") from e

        if arr.ndim != 2 or arr.shape[0] != len(batch):
            raise InferenceError(
                f"Batch {batch_index} returned shape {arr.shape} for {len(batch)} texts"
            )
        return arr

    def generate(self, texts: Sequence[str]) -> np.ndarray:
        """
        Embed every text and return the (N, D) matrix with row i = embedding
        of texts[i]. Any batch failure aborts the whole run.
        """
        batches = self.partition(texts)
        total = len(batches)
        self.logger.info(
            "Embedding %d texts in %d batches (batch=%d, parallelism=%d)",
            len(texts),
            total,
            self.batch_size,
            self.parallelism,
        )
        if total == 0:
            return np.empty((0, self.model.dimension), dtype=np.float32)

        # Slot k receives batch k's rows regardless of when it finishes
        slots: List[Optional[np.ndarray]] = [None] * total

        with ThreadPoolExecutor(max_workers=self.parallelism, thread_name_prefix="embed-batch") as pool:
            futures: Dict[Future, int] = {
                pool.submit(self._embed_one, k, batch): k for k, batch in enumerate(batches)
            }
            try:
                done = 0
                for fut in as_completed(futures):
                    k = futures[fut]
                    slots[k] = fut.result()
                    done += 1
                    self.logger.debug("Batch %d complete (%d/%d)", k, done, total)
            except BaseException:
                for f in futures:
                    f.cancel()
                raise

        dims = {s.shape[1] for s in slots}
        if len(dims) != 1:
            raise InferenceError(f"Batches returned inconsistent dimensions: {sorted(dims)}")

        matrix = np.concatenate(slots, axis=0)
        if matrix.shape[0] != len(texts):
            raise InferenceError(f"Embedded {matrix.shape[0]} rows for {len(texts)} texts")
        return matrix

    def _commit(self, staged_text_map: Path, text_map_path: Path, staged_matrix: Path, matrix_path: Path) -> None:
        """
        Move both staged files into place. The text map goes first; if the
        matrix cannot follow, the previous text map is restored (or the new
        one removed) so the pair on disk is never mixed.
        """
        backup = text_map_path.with_name(text_map_path.name + ".previous")
        had_previous = text_map_path.exists()
        if had_previous:
            os.replace(text_map_path, backup)
        try:
            os.replace(staged_text_map, text_map_path)
            os.replace(staged_matrix, matrix_path)
        except OSError:
            self.logger.error("Rolling back text map at '%s'", text_map_path)
            if had_previous:
                os.replace(backup, text_map_path)
            else:
                text_map_path.unlink(missing_ok=True)
            raise
        if had_previous:
            backup.unlink(missing_ok=True)

    def run(
            self,
            texts: Sequence[str],
            *,
            text_map_path: Union[str, Path],
            matrix_path: Union[str, Path],
            key: str,
    ) -> GenerationResult:
        """
        Generate and persist. Artifacts are staged next to their targets and
        only moved into place once both are written.
        """
        start = time.time()
        text_map_path = Path(text_map_path)
        matrix_path = Path(matrix_path)

        matrix = self.generate(texts)
        self.logger.info("Embeddings generated: shape=%s", matrix.shape)

        staged_text_map = text_map_path.with_name(text_map_path.name + ".staged")
        staged_matrix = matrix_path.with_name(matrix_path.name + ".staged")
        try:
            TextMapStore.save(staged_text_map, list(texts))
            MatrixStore.save(
                staged_matrix,
                matrix,
                key,
                metadata={"model": str(getattr(self.model, "model_name", "unknown"))},
            )
            self._commit(staged_text_map, text_map_path, staged_matrix, matrix_path)
        except OSError as e:
            raise ArtifactIOError(f"Cannot move artifacts into place: {e}", path=str(matrix_path)) from e
        finally:
            staged_text_map.unlink(missing_ok=True)
            staged_matrix.unlink(missing_ok=True)

        elapsed_ms = (time.time() - start) * 1000.0
        self.logger.info(
            "text map saved to '%s', embeddings saved to '%s' (key=%s) in %.1f ms",
            text_map_path,
            matrix_path,
            key,
            elapsed_ms,
        )
        return GenerationResult(
            rows=int(matrix.shape[0]),
            dimension=int(matrix.shape[1]),
            batches=len(self.partition(texts)),
            text_map_path=text_map_path,
            matrix_path=matrix_path,
            elapsed_ms=elapsed_ms,
        )
