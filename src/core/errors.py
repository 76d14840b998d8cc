"""
Similarity search errors.
Ordinary recoverable conditions raised to the immediate caller.
"""

from typing import Any, Optional


class SimilaritySearchError(Exception):
    """Base class for all similarity search errors."""


class DimensionMismatch(SimilaritySearchError, ValueError):
    """Raised when two vectors that must share a length do not."""

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Vector dimension {actual} does not match expected dimension {expected}")


class CollectionNotFound(SimilaritySearchError, KeyError):
    """Raised when a collection name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Collection '{name}' not found")

    def __str__(self):
        return self.args[0]


class DocumentNotFound(SimilaritySearchError, KeyError):
    """Raised by strict lookups and removals on an absent document id."""

    def __init__(self, document_id: Any):
        self.document_id = document_id
        super().__init__(f"Document '{document_id}' not found")

    def __str__(self):
        return self.args[0]
