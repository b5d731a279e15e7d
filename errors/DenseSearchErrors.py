# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-10
# Description: DenseSearchErrors
# -----------------------------------------------------------------------------
"""
Exception hierarchy for the corpus -> embeddings -> index -> query pipeline.

Startup errors (artifacts, index, model load) are fatal; request errors
(inference, search) are mapped to HTTP responses by the API layer.
"""
from typing import Optional


class DenseSearchError(Exception):
    """Base exception for all dense search errors."""
    pass


class SourceUnreadableError(DenseSearchError):
    """The corpus source could not be opened or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ColumnMissingError(DenseSearchError):
    """
    The selected column does not exist in the header, or a row has no
    value for it.
    """

    def __init__(self, message: str, column=None, row_number: Optional[int] = None):
        super().__init__(message)
        self.column = column
        self.row_number = row_number


class ArtifactIOError(DenseSearchError):
    """Reading or writing a persisted artifact failed at the filesystem level."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DecodeError(DenseSearchError):
    """A persisted artifact exists but its contents are malformed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class IndexInconsistentError(DenseSearchError):
    """
    The embedding matrix and text map disagree.

    Raised when:
    - matrix row count != text map length
    - matrix is not 2-D
    - matrix dimension differs from the embedding model's dimension
    """
    pass


class DimensionMismatchError(DenseSearchError):
    """A query vector does not have the index's dimension."""

    def __init__(self, expected: int, actual):
        super().__init__(f"Query dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class OutOfRangeError(DenseSearchError, IndexError):
    """A row id is outside [0, N)."""

    def __init__(self, row_id: int, size: int):
        super().__init__(f"Row id {row_id} out of range for index of size {size}")
        self.row_id = row_id
        self.size = size


class ModelLoadError(DenseSearchError):
    """The embedding model could not be loaded."""

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.model = model


class InferenceError(DenseSearchError):
    """The embedding model failed to embed one or more texts."""
    pass


class InferenceBusyError(DenseSearchError):
    """No inference slot became free within the queue timeout."""
    pass
