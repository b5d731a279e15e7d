# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-19
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path

import numpy as np
import pytest

# add project root (and this directory, for fakes.py) to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fakes import FakeEmbeddingModel  # noqa: E402
from vectorstore.VectorIndex import VectorIndex  # noqa: E402


@pytest.fixture
def animal_texts():
    return ["cat", "dog", "car"]


@pytest.fixture
def animal_matrix():
    return np.array([[1.0, 0.0], [0.0, 1.0], [0.9, 0.1]], dtype=np.float32)


@pytest.fixture
def animal_index(animal_matrix, animal_texts) -> VectorIndex:
    return VectorIndex(animal_matrix, animal_texts)


@pytest.fixture
def animal_model(animal_matrix, animal_texts) -> FakeEmbeddingModel:
    vectors = {t: animal_matrix[i] for i, t in enumerate(animal_texts)}
    vectors["feline"] = np.array([1.0, 0.0], dtype=np.float32)
    return FakeEmbeddingModel(dimension=2, vectors=vectors)
