# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

import colorlog

BASE_LOGGER_NAME = "densesearch"

_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s:%(lineno)d: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=(
                "%(log_color)s%(asctime)s [%(levelname)s] "
                "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
            ),
            datefmt=_DATE_FORMAT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
            secondary_log_colors={
                "message": {
                    "INFO": "white",
                    "WARNING": "yellow",
                    "ERROR": "light_red",
                    "CRITICAL": "red",
                }
            },
            style="%",
        )
    )
    return handler


def _base_logger() -> logging.Logger:
    """
    All project loggers are children of one base logger that owns the
    handlers, so a file handler attached later sees every record.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    if not base.handlers:
        base.addHandler(_console_handler())
        level_name = os.getenv("DENSE_LOG_LEVEL", "INFO").upper()
        base.setLevel(getattr(logging, level_name, logging.INFO))
        base.propagate = False
    return base


def attach_file_log(
        path: Union[str, Path],
        *,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
) -> logging.Handler:
    """
    Mirror all project logging into a rotating file, e.g. to keep a record
    of an offline embedding run. Attaching the same path twice is a no-op.
    """
    base = _base_logger()
    log_path = Path(path).resolve()
    for handler in base.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_path:
            return handler

    log_path.parent.mkdir(parents=True, exist_ok=True)
    if max_bytes is None:
        max_bytes = int(os.getenv("DENSE_LOG_MAX_BYTES", str(5 * 1024 * 1024)))
    if backup_count is None:
        backup_count = int(os.getenv("DENSE_LOG_BACKUP_COUNT", "5"))

    file_handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATE_FORMAT))
    base.addHandler(file_handler)
    return file_handler


def detach_file_log(handler: logging.Handler) -> None:
    _base_logger().removeHandler(handler)
    handler.close()


def get_logger(name: str | None = None) -> logging.Logger:
    """Module-level logger under the project base, e.g. densesearch.cli.generate_embeddings"""
    base = _base_logger()
    return base.getChild(name) if name else base


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      densesearch.vectorstore.VectorIndex.VectorIndex
      densesearch.embedding.EmbeddingGenerator.EmbeddingGenerator
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return get_logger(f"{module}.{classname}")
