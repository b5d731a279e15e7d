# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-02-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Embedding model
# -----------------------------------------------------------------------------
EMBED_BACKEND_SENTENCE_TRANSFORMERS = "sentence-transformers"
EMBED_BACKEND_AZURE_OPENAI = "azure-openai"
EMBED_BACKENDS = (EMBED_BACKEND_SENTENCE_TRANSFORMERS, EMBED_BACKEND_AZURE_OPENAI)

DEFAULT_MODEL_ID = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_MODEL_REVISION = "refs/pr/21"


# -----------------------------------------------------------------------------
# Artifacts (text map + embedding matrix, always written as a pair)
# -----------------------------------------------------------------------------
DEFAULT_ARTIFACTS_DIR = "./data"
DEFAULT_TEXT_MAP_NAME = "text_map.bin"
DEFAULT_EMBEDDINGS_NAME = "embeddings.bin"
DEFAULT_EMBEDDINGS_KEY = "my_embedding"


# -----------------------------------------------------------------------------
# Offline job defaults
# -----------------------------------------------------------------------------
# Only the first MAX_ROWS source rows are embedded
DEFAULT_MAX_ROWS = 3000
DEFAULT_BATCH_SIZE = 8
DEFAULT_PARALLELISM = 4


# -----------------------------------------------------------------------------
# Query server defaults
# -----------------------------------------------------------------------------
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_INFERENCE_SLOTS = 4
DEFAULT_INFERENCE_QUEUE_TIMEOUT = 5.0

SIMILAR_DEFAULTS: Dict[str, Any] = {
    "num_results": _env_int("DENSE_DEFAULT_NUM_RESULTS", 5),
    # Upper bound accepted by the HTTP layer; the engine itself clamps to N
    "max_num_results": _env_int("DENSE_MAX_NUM_RESULTS", 1000),
}

if SIMILAR_DEFAULTS["max_num_results"] < 1:
    raise RuntimeError("DENSE_MAX_NUM_RESULTS must be >= 1")
