# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-12
# Description: EmbeddingModel
# -----------------------------------------------------------------------------

from typing import Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class EmbeddingModel(Protocol):
    """
    Opaque embedding capability.

    Implementations must be safe to call from several threads at once;
    the query server bounds how many calls are in flight.
    """

    model_name: str

    @property
    def dimension(self) -> int:
        ...

    def embed(self, text: str) -> np.ndarray:
        """Return a (D,) float32 vector."""
        ...

    def embed_batch(self, texts: Sequence[str]) -> np.ndarray:
        """Return an (len(texts), D) float32 matrix, rows in input order."""
        ...
