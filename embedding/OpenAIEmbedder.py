# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-14
# Description: OpenAIEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Optional, List, Sequence

import numpy as np
from openai import AzureOpenAI, OpenAI

from config.Config import Config
from errors.DenseSearchErrors import InferenceError, ModelLoadError
from utility.logging_utils import get_class_logger


class OpenAIEmbedder:
    """
    Azure OpenAI embeddings behind the EmbeddingModel interface.

    Vectors are returned raw (cosine is applied at search time). The
    dimension is discovered with a single probe call at load time unless
    given explicitly.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            dimension: Optional[int] = None,
            max_retries: int = 5,
            client=None,
            logger=None,
    ):
        self.cfg = cfg
        self.max_retries = max_retries
        self.logger = logger or get_class_logger(self.__class__)
        self.model = cfg.openai_azure_embed_deployment or "text-embedding-3-large"
        self.model_name = f"azure-openai:{self.model}"

        if client is not None:
            self.client = client
            self._use_deployment_param = True
        else:
            self._init_client()

        self._dimension = dimension
        if self._dimension is None:
            try:
                self._dimension = int(self._embed_batch(["dimension probe"]).shape[1])
            except InferenceError as e:
                raise ModelLoadError(f"Azure OpenAI probe failed: {e}", model=self.model_name) from e

        self.logger.info("OpenAI Azure Embedder initialized '%s', dimension=%d", self.model, self._dimension)

    def _init_client(self) -> None:
        """
        Tries classic AzureOpenAI(...) first; if the installed SDK signature
        is incompatible, falls back to OpenAI(base_url=.../deployments/<model>).
        Sets self._use_deployment_param accordingly.
        """
        endpoint = self.cfg.openai_azure_endpoint.rstrip("/")
        key = self.cfg.openai_azure_api_key
        api_version = getattr(self.cfg, "openai_api_version", "2024-10-21")

        try:
            self.client = AzureOpenAI(
                api_key=key,
                azure_endpoint=endpoint,
                api_version=api_version,
            )
            self._use_deployment_param = True
            return
        except TypeError as e:
            # Newer SDKs may alter signature. Fall through.
            self.logger.debug(f"AzureOpenAI init fell through to base_url mode: {e}")

        # Fallback: deployment encoded in base_url; do not pass model= on each call
        self.client = OpenAI(
            api_key=key,
            base_url=f"{endpoint}/openai/deployments/{self.model}",
        )
        self._use_deployment_param = False

    @property
    def dimension(self) -> int:
        return self._dimension

    def _embed_batch(self, texts: List[str]) -> np.ndarray:
        delay = 0.8
        for attempt in range(1, self.max_retries + 1):
            try:
                if self._use_deployment_param:
                    resp = self.client.embeddings.create(model=self.model, input=texts)
                else:
                    resp = self.client.embeddings.create(input=texts)

                # Response items carry their input position; never trust arrival order
                data = sorted(resp.data, key=lambda d: d.index)
                return np.asarray([d.embedding for d in data], dtype=np.float32)

            except Exception as e:
                self.logger.warning(f"Embedding batch failed (attempt {attempt}/{self.max_retries}): {e}")
                if attempt == self.max_retries:
                    raise InferenceError(f"Azure OpenAI embedding failed after {attempt} attempts: {e}") from e
                time.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and include for type checkers
        return np.empty((0, 0), dtype=np.float32)

    def embed_batch(self, texts: Sequence[str]) -> np.ndarray:
        texts = list(texts)
        if not texts:
            return np.empty((0, self.dimension), dtype=np.float32)
        return self._embed_batch(texts)

    def embed(self, text: str) -> np.ndarray:
        return self.embed_batch([text])[0]
