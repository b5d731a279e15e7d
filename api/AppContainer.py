# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from typing import Optional

from config.Config import Config
from embedding.EmbeddingModel import EmbeddingModel
from embedding.ModelFactory import load_embedding_model
from services.HealthService import HealthService
from services.QueryService import QueryService, SearchContext
from utility.logging_utils import get_class_logger
from vectorstore.VectorIndex import VectorIndex


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Built exactly once at startup; any failure here is fatal, so the
    server never answers requests without a verified index.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        *,
        model: Optional[EmbeddingModel] = None,
        index: Optional[VectorIndex] = None,
    ) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger = get_class_logger(self.__class__)
        self.logger.info("Building app container: %r", self.cfg.summary())

        # Embedding capability
        self.model = model if model is not None else load_embedding_model(self.cfg)

        # Artifacts -> validated index (row-count invariant checked here, once)
        if index is None:
            index = VectorIndex.from_files(
                self.cfg.embeddings_path,
                self.cfg.text_map_path,
                self.cfg.embeddings_key,
            )
        self.index = index

        # Single immutable context shared by every request
        self.context = SearchContext.build(self.model, self.index)

        # Return a singleton QueryService instance
        self.query_service = QueryService(
            self.context,
            inference_slots=self.cfg.inference_slots,
            queue_timeout=self.cfg.inference_queue_timeout,
        )

        # Return a singleton HealthService instance
        self.health_service = HealthService(context=self.context)

        self.logger.info(
            "App container ready: %d rows, dimension %d, model '%s'",
            self.index.size(),
            self.index.dimension,
            self.model.model_name,
        )
