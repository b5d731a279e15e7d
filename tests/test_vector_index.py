# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-19
# Description: test_vector_index.py
# -----------------------------------------------------------------------------
import numpy as np
import pytest

from errors.DenseSearchErrors import ArtifactIOError, IndexInconsistentError, OutOfRangeError
from vectorstore.MatrixStore import MatrixStore
from vectorstore.TextMapStore import TextMapStore
from vectorstore.VectorIndex import VectorIndex


def test_lookup_by_row_id(animal_index):
    assert animal_index.size() == 3
    assert len(animal_index) == 3
    assert animal_index.dimension == 2
    assert animal_index.text(2) == "car"
    np.testing.assert_allclose(animal_index.row(1), [0.0, 1.0])


@pytest.mark.parametrize("row_id", [-1, 3, 100])
def test_out_of_range_ids_rejected(animal_index, row_id):
    with pytest.raises(OutOfRangeError):
        animal_index.row(row_id)
    with pytest.raises(OutOfRangeError):
        animal_index.text(row_id)


def test_out_of_range_is_also_an_index_error(animal_index):
    with pytest.raises(IndexError):
        animal_index.text(3)


def test_row_count_mismatch_fails_fast():
    with pytest.raises(IndexInconsistentError):
        VectorIndex(np.zeros((2, 4), dtype=np.float32), ["a", "b", "c"])


def test_non_matrix_rejected():
    with pytest.raises(IndexInconsistentError):
        VectorIndex(np.zeros(4, dtype=np.float32), ["a", "b", "c", "d"])


def test_index_is_read_only_and_detached_from_caller(animal_matrix, animal_texts):
    index = VectorIndex(animal_matrix, animal_texts)
    animal_matrix[0, 0] = 42.0
    animal_texts.append("extra")

    assert index.row(0)[0] == 1.0
    assert index.size() == 3
    with pytest.raises(ValueError):
        index.row(0)[0] = 5.0


def test_empty_index():
    index = VectorIndex(np.zeros((0, 3), dtype=np.float32), [])
    assert index.size() == 0
    assert index.dimension == 3
    with pytest.raises(OutOfRangeError):
        index.text(0)


def test_from_files_round_trip(tmp_path, animal_matrix, animal_texts):
    MatrixStore.save(tmp_path / "embeddings.bin", animal_matrix, "my_embedding")
    TextMapStore.save(tmp_path / "text_map.bin", animal_texts)

    index = VectorIndex.from_files(tmp_path / "embeddings.bin", tmp_path / "text_map.bin", "my_embedding")
    assert index.size() == 3
    assert [index.text(i) for i in range(3)] == animal_texts


def test_from_files_detects_inconsistent_pair(tmp_path, animal_matrix):
    MatrixStore.save(tmp_path / "embeddings.bin", animal_matrix, "my_embedding")
    TextMapStore.save(tmp_path / "text_map.bin", ["only", "two"])

    with pytest.raises(IndexInconsistentError):
        VectorIndex.from_files(tmp_path / "embeddings.bin", tmp_path / "text_map.bin", "my_embedding")


def test_from_files_missing_text_map(tmp_path, animal_matrix):
    MatrixStore.save(tmp_path / "embeddings.bin", animal_matrix, "my_embedding")
    with pytest.raises(ArtifactIOError):
        VectorIndex.from_files(tmp_path / "embeddings.bin", tmp_path / "text_map.bin", "my_embedding")
