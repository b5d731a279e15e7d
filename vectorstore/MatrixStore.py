# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-11
# Description: MatrixStore
# -----------------------------------------------------------------------------
import os
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
from safetensors import SafetensorError
from safetensors.numpy import load_file, save_file

from errors.DenseSearchErrors import ArtifactIOError, DecodeError


class MatrixStore:
    """
    Persists the (N, D) float32 embedding matrix as a safetensors blob.

    The tensor is stored under a caller-chosen key; shape and dtype travel in
    the safetensors header so a reader never has to guess them.
    """

    @staticmethod
    def save(
            path: Union[str, Path],
            matrix: np.ndarray,
            key: str,
            metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        if not key:
            raise ValueError("Tensor key must not be empty")
        if matrix.ndim != 2:
            raise ValueError(f"Embedding matrix must be 2-D, got shape {matrix.shape}")

        path = Path(path)
        tensor = np.ascontiguousarray(matrix, dtype=np.float32)
        meta = {"rows": str(tensor.shape[0]), "dim": str(tensor.shape[1])}
        meta.update(metadata or {})

        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            save_file({key: tensor}, str(tmp), metadata=meta)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise ArtifactIOError(f"Cannot write embeddings {path}: {e}", path=str(path)) from e

    @staticmethod
    def load(path: Union[str, Path], key: str) -> np.ndarray:
        path = Path(path)
        if not path.is_file():
            raise ArtifactIOError(f"Embeddings file not found: {path}", path=str(path))

        try:
            tensors = load_file(str(path))
        except OSError as e:
            raise ArtifactIOError(f"Cannot read embeddings {path}: {e}", path=str(path)) from e
        except (SafetensorError, ValueError) as e:
            raise DecodeError(f"Embeddings file {path} is not a valid tensor blob: {e}", path=str(path)) from e

        if key not in tensors:
            raise DecodeError(
                f"Embeddings file {path} has no tensor '{key}' (found {sorted(tensors)})",
                path=str(path),
            )

        matrix = tensors[key]
        if matrix.ndim != 2:
            raise DecodeError(f"Tensor '{key}' in {path} has shape {matrix.shape}, expected 2-D", path=str(path))
        return matrix.astype(np.float32, copy=False)
