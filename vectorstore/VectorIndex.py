# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-13
# Description: VectorIndex
# -----------------------------------------------------------------------------
import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from errors.DenseSearchErrors import IndexInconsistentError, OutOfRangeError
from utility.logging_utils import get_class_logger
from vectorstore.MatrixStore import MatrixStore
from vectorstore.TextMapStore import TextMapStore


class VectorIndex:
    """
    Read-only pairing of the embedding matrix with its text map.

    The row-count invariant (rows(matrix) == len(text_map)) is checked once
    here; after construction nothing is mutable, so a single instance is
    shared by every request thread without locking.
    """

    def __init__(
            self,
            matrix: np.ndarray,
            text_map: Sequence[str],
            *,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or get_class_logger(self.__class__)

        matrix = np.asarray(matrix)
        if matrix.ndim != 2:
            raise IndexInconsistentError(f"Embedding matrix must be 2-D, got shape {matrix.shape}")
        if matrix.shape[0] != len(text_map):
            raise IndexInconsistentError(
                f"Embedding matrix has {matrix.shape[0]} rows but text map has {len(text_map)} entries"
            )

        # Own a private float32 copy so callers cannot mutate it from outside
        self._matrix = np.array(matrix, dtype=np.float32, copy=True)
        self._matrix.flags.writeable = False

        self._norms = np.linalg.norm(self._matrix.astype(np.float64), axis=1)
        self._norms.flags.writeable = False

        self._texts: Tuple[str, ...] = tuple(text_map)

        self.logger.info("Vector index ready: %d rows x %d dims", self.size(), self.dimension)

    @classmethod
    def from_files(
            cls,
            matrix_path: Union[str, Path],
            text_map_path: Union[str, Path],
            key: str,
            *,
            logger: Optional[logging.Logger] = None,
    ) -> "VectorIndex":
        """Load both artifacts and validate them together."""
        matrix = MatrixStore.load(matrix_path, key)
        text_map = TextMapStore.load(text_map_path)
        return cls(matrix, text_map, logger=logger)

    # -------------------------------------------------------------------------
    def size(self) -> int:
        return len(self._texts)

    def __len__(self) -> int:
        return self.size()

    @property
    def dimension(self) -> int:
        return int(self._matrix.shape[1])

    @property
    def matrix(self) -> np.ndarray:
        """The full (N, D) matrix, read-only."""
        return self._matrix

    @property
    def norms(self) -> np.ndarray:
        """Precomputed L2 norm of each row (float64, read-only)."""
        return self._norms

    def _check(self, row_id: int) -> int:
        # Reject negatives explicitly; Python indexing would wrap them
        if isinstance(row_id, bool) or not isinstance(row_id, (int, np.integer)):
            raise TypeError(f"Row id must be an int, got {type(row_id).__name__}")
        if row_id < 0 or row_id >= self.size():
            raise OutOfRangeError(int(row_id), self.size())
        return int(row_id)

    def row(self, row_id: int) -> np.ndarray:
        return self._matrix[self._check(row_id)]

    def text(self, row_id: int) -> str:
        return self._texts[self._check(row_id)]
