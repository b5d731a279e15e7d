# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-12
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, find_dotenv

import settings
from settings import _env, _env_float, _env_int

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=True)


@dataclass(frozen=True)
class Config:
    # Embedding capability
    embed_backend: str = settings.EMBED_BACKEND_SENTENCE_TRANSFORMERS
    model_id: str = settings.DEFAULT_MODEL_ID
    model_revision: str = settings.DEFAULT_MODEL_REVISION

    # Artifacts
    artifacts_dir: str = settings.DEFAULT_ARTIFACTS_DIR
    text_map_name: str = settings.DEFAULT_TEXT_MAP_NAME
    embeddings_name: str = settings.DEFAULT_EMBEDDINGS_NAME
    embeddings_key: str = settings.DEFAULT_EMBEDDINGS_KEY

    # Offline job
    max_rows: int = settings.DEFAULT_MAX_ROWS
    batch_size: int = settings.DEFAULT_BATCH_SIZE
    parallelism: int = settings.DEFAULT_PARALLELISM

    # Query server
    host: str = settings.DEFAULT_HOST
    port: int = settings.DEFAULT_PORT
    inference_slots: int = settings.DEFAULT_INFERENCE_SLOTS
    inference_queue_timeout: float = settings.DEFAULT_INFERENCE_QUEUE_TIMEOUT

    # Azure OpenAI (only needed when embed_backend == "azure-openai")
    openai_azure_api_key: str = ""
    openai_azure_endpoint: str = ""
    openai_azure_embed_deployment: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "embed_backend": "DENSE_EMBED_BACKEND",
        "model_id": "DENSE_MODEL_ID",
        "model_revision": "DENSE_MODEL_REVISION",

        "artifacts_dir": "DENSE_ARTIFACTS_DIR",
        "text_map_name": "DENSE_TEXT_MAP_NAME",
        "embeddings_name": "DENSE_EMBEDDINGS_NAME",
        "embeddings_key": "DENSE_EMBEDDINGS_KEY",

        "max_rows": "DENSE_MAX_ROWS",
        "batch_size": "DENSE_BATCH_SIZE",
        "parallelism": "DENSE_PARALLELISM",

        "host": "DENSE_HOST",
        "port": "DENSE_PORT",
        "inference_slots": "DENSE_INFERENCE_SLOTS",
        "inference_queue_timeout": "DENSE_INFERENCE_QUEUE_TIMEOUT",

        "openai_azure_api_key": "AZURE_OPENAI_API_KEY",
        "openai_azure_endpoint": "AZURE_OPENAI_ENDPOINT",
        "openai_azure_embed_deployment": "AZURE_OPENAI_EMBED_DEPLOYMENT",
    }

    # Convenient *groups* for use in tests / health checks
    AZURE_OPENAI_ENV_VARS = (
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_ENDPOINT",
        "AZURE_OPENAI_EMBED_DEPLOYMENT",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables, falling back to defaults."""
        env = Config.ENV_VARS
        return Config(
            embed_backend=_env(env["embed_backend"], settings.EMBED_BACKEND_SENTENCE_TRANSFORMERS),
            model_id=_env(env["model_id"], settings.DEFAULT_MODEL_ID),
            model_revision=_env(env["model_revision"], settings.DEFAULT_MODEL_REVISION),
            artifacts_dir=_env(env["artifacts_dir"], settings.DEFAULT_ARTIFACTS_DIR),
            text_map_name=_env(env["text_map_name"], settings.DEFAULT_TEXT_MAP_NAME),
            embeddings_name=_env(env["embeddings_name"], settings.DEFAULT_EMBEDDINGS_NAME),
            embeddings_key=_env(env["embeddings_key"], settings.DEFAULT_EMBEDDINGS_KEY),
            max_rows=_env_int(env["max_rows"], settings.DEFAULT_MAX_ROWS),
            batch_size=_env_int(env["batch_size"], settings.DEFAULT_BATCH_SIZE),
            parallelism=_env_int(env["parallelism"], settings.DEFAULT_PARALLELISM),
            host=_env(env["host"], settings.DEFAULT_HOST),
            port=_env_int(env["port"], settings.DEFAULT_PORT),
            inference_slots=_env_int(env["inference_slots"], settings.DEFAULT_INFERENCE_SLOTS),
            inference_queue_timeout=_env_float(
                env["inference_queue_timeout"], settings.DEFAULT_INFERENCE_QUEUE_TIMEOUT
            ),
            openai_azure_api_key=os.getenv(env["openai_azure_api_key"], ""),
            openai_azure_endpoint=os.getenv(env["openai_azure_endpoint"], ""),
            openai_azure_embed_deployment=os.getenv(env["openai_azure_embed_deployment"], ""),
        )

    def __post_init__(self):
        """
        Fail fast on invalid or missing config.

        Azure OpenAI settings are only required when that backend is selected.
        """
        if self.embed_backend not in settings.EMBED_BACKENDS:
            raise ValueError(
                f"Unsupported embed backend {self.embed_backend!r}; "
                f"expected one of {list(settings.EMBED_BACKENDS)}"
            )

        required = ["model_id", "artifacts_dir", "text_map_name", "embeddings_name", "embeddings_key", "host"]
        if self.embed_backend == settings.EMBED_BACKEND_AZURE_OPENAI:
            required += ["openai_azure_api_key", "openai_azure_endpoint", "openai_azure_embed_deployment"]

        missing_fields = [k for k in required if not getattr(self, k)]
        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

        for name in ("max_rows", "batch_size", "parallelism", "inference_slots"):
            if getattr(self, name) < 1:
                raise ValueError(f"{self.ENV_VARS[name]} must be >= 1, got {getattr(self, name)}")

        if not (0 < self.port < 65536):
            raise ValueError(f"{self.ENV_VARS['port']} must be a valid TCP port, got {self.port}")

        if self.inference_queue_timeout < 0:
            raise ValueError(f"{self.ENV_VARS['inference_queue_timeout']} must be >= 0")

    @property
    def text_map_path(self) -> Path:
        return Path(self.artifacts_dir) / self.text_map_name

    @property
    def embeddings_path(self) -> Path:
        return Path(self.artifacts_dir) / self.embeddings_name

    def with_overrides(self, **overrides: Optional[object]) -> "Config":
        """Return a copy with the given non-None fields replaced (used by the CLI)."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        return replace(self, **values)

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "embed_backend": self.embed_backend,
            "model_id": self.model_id,
            "model_revision": self.model_revision,
            "text_map_path": str(self.text_map_path),
            "embeddings_path": str(self.embeddings_path),
            "embeddings_key": self.embeddings_key,
            "max_rows": self.max_rows,
            "batch_size": self.batch_size,
            "parallelism": self.parallelism,
            "bind": f"{self.host}:{self.port}",
            "inference_slots": self.inference_slots,
            "openai_azure_endpoint": self.openai_azure_endpoint,
            "openai_azure_embed_deployment": self.openai_azure_embed_deployment,
        }
