# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-12
# Description: SentenceEmbedder
# -----------------------------------------------------------------------------
import logging
import time
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
from sentence_transformers import SentenceTransformer

from errors.DenseSearchErrors import DenseSearchError, InferenceError, ModelLoadError
from settings import DEFAULT_MODEL_ID, DEFAULT_MODEL_REVISION
from utility.logging_utils import get_class_logger
from vectorstore.MatrixStore import MatrixStore


class SentenceEmbedder:
    """
    Local sentence-transformers model (default all-MiniLM-L6-v2).

    Vectors are returned as raw float32 (not normalised); the search engine
    applies cosine similarity itself.
    """

    def __init__(
            self,
            model: SentenceTransformer,
            *,
            model_name: str,
            revision: Optional[str] = None,
            preloaded_embeddings: Optional[np.ndarray] = None,
            logger: Optional[logging.Logger] = None,
    ):
        self.model = model
        self.model_name = model_name
        self.revision = revision
        self.preloaded_embeddings = preloaded_embeddings
        self.logger = logger or get_class_logger(self.__class__)

        dim = self.model.get_sentence_embedding_dimension()
        if not dim:
            raise ModelLoadError(f"Model '{model_name}' does not report an embedding dimension", model=model_name)
        self._dimension = int(dim)

    @classmethod
    def load(
            cls,
            model_identifier: str = DEFAULT_MODEL_ID,
            revision: Optional[str] = DEFAULT_MODEL_REVISION,
            embeddings_path: Optional[Union[str, Path]] = None,
            embeddings_key: Optional[str] = None,
            *,
            device: Optional[str] = None,
            logger: Optional[logging.Logger] = None,
    ) -> "SentenceEmbedder":
        """
        Load the model from the Hugging Face hub (or local cache).

        If `embeddings_path` is given the stored matrix is loaded too and its
        width must match the model's output dimension.
        """
        log = logger or get_class_logger(cls)
        start = time.time()
        log.info("Loading sentence-transformers model '%s' (revision=%s)", model_identifier, revision or "default")

        try:
            model = SentenceTransformer(model_identifier, revision=revision or None, device=device)
        except Exception as e:
            raise ModelLoadError(f"Cannot load model '{model_identifier}': {e}", model=model_identifier) from e

        embedder = cls(model, model_name=model_identifier, revision=revision, logger=log)

        if embeddings_path:
            if not embeddings_key:
                raise ModelLoadError("embeddings_key is required with embeddings_path", model=model_identifier)
            try:
                matrix = MatrixStore.load(embeddings_path, embeddings_key)
            except DenseSearchError as e:
                raise ModelLoadError(f"Cannot load stored embeddings: {e}", model=model_identifier) from e
            if matrix.shape[1] != embedder.dimension:
                raise ModelLoadError(
                    f"Stored embeddings have dimension {matrix.shape[1]}, "
                    f"model '{model_identifier}' produces {embedder.dimension}",
                    model=model_identifier,
                )
            embedder.preloaded_embeddings = matrix
            log.info("Stored embeddings loaded alongside model: shape=%s", matrix.shape)

        log.info(
            "Model '%s' loaded in %.1f ms (dimension=%d)",
            model_identifier,
            (time.time() - start) * 1000.0,
            embedder.dimension,
        )
        return embedder

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed_batch(self, texts: Sequence[str]) -> np.ndarray:
        texts = list(texts)
        if not texts:
            return np.empty((0, self.dimension), dtype=np.float32)
        try:
            arr = self.model.encode(
                texts,
                batch_size=len(texts),
                convert_to_numpy=True,
                normalize_embeddings=False,
                show_progress_bar=False,
            )
        except Exception as e:
            raise InferenceError(f"Embedding {len(texts)} texts with '{self.model_name}' failed: {e}") from e
        return np.asarray(arr, dtype=np.float32)

    def embed(self, text: str) -> np.ndarray:
        return self.embed_batch([text])[0]
