# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-14
# Description: ModelFactory
# -----------------------------------------------------------------------------
import settings
from config.Config import Config
from embedding.EmbeddingModel import EmbeddingModel
from errors.DenseSearchErrors import ModelLoadError


def load_embedding_model(cfg: Config) -> EmbeddingModel:
    """Build the embedding backend selected by DENSE_EMBED_BACKEND."""
    if cfg.embed_backend == settings.EMBED_BACKEND_SENTENCE_TRANSFORMERS:
        from embedding.SentenceEmbedder import SentenceEmbedder
        return SentenceEmbedder.load(cfg.model_id, cfg.model_revision)

    if cfg.embed_backend == settings.EMBED_BACKEND_AZURE_OPENAI:
        from embedding.OpenAIEmbedder import OpenAIEmbedder
        return OpenAIEmbedder(cfg)

    raise ModelLoadError(f"Unknown embed backend {cfg.embed_backend!r}")
