# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-19
# Description: test_matrix_store.py
# -----------------------------------------------------------------------------
import numpy as np
import pytest
from safetensors import safe_open

from errors.DenseSearchErrors import ArtifactIOError, DecodeError
from vectorstore.MatrixStore import MatrixStore


def test_save_and_load_preserves_rows_and_dtype(tmp_path):
    matrix = np.arange(12, dtype=np.float64).reshape(4, 3)
    path = tmp_path / "embeddings.bin"

    MatrixStore.save(path, matrix, "my_embedding")
    loaded = MatrixStore.load(path, "my_embedding")

    assert loaded.dtype == np.float32
    assert loaded.shape == (4, 3)
    np.testing.assert_array_equal(loaded, matrix.astype(np.float32))


def test_shape_metadata_is_written(tmp_path):
    path = tmp_path / "embeddings.bin"
    MatrixStore.save(path, np.ones((2, 5), dtype=np.float32), "k", metadata={"model": "fake"})

    with safe_open(str(path), framework="numpy") as f:
        meta = f.metadata()
    assert meta["rows"] == "2"
    assert meta["dim"] == "5"
    assert meta["model"] == "fake"


def test_wrong_key_is_decode_error(tmp_path):
    path = tmp_path / "embeddings.bin"
    MatrixStore.save(path, np.ones((2, 2), dtype=np.float32), "right")
    with pytest.raises(DecodeError):
        MatrixStore.load(path, "wrong")


def test_missing_file_is_io_error(tmp_path):
    with pytest.raises(ArtifactIOError):
        MatrixStore.load(tmp_path / "missing.bin", "k")


def test_garbage_file_is_decode_error(tmp_path):
    path = tmp_path / "embeddings.bin"
    path.write_bytes(b"definitely not a tensor blob")
    with pytest.raises(DecodeError):
        MatrixStore.load(path, "k")


def test_non_2d_matrix_rejected(tmp_path):
    with pytest.raises(ValueError):
        MatrixStore.save(tmp_path / "e.bin", np.ones(3, dtype=np.float32), "k")
