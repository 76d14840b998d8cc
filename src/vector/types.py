"""
Document and search result types for the similarity search core.
"""

from typing import Any, Dict, Hashable
from dataclasses import dataclass, field
import numpy as np

from .vector_math import as_vector

DocumentId = Hashable


@dataclass
class Document:
    """A document held by a collection."""

    id: DocumentId
    """Externally supplied unique identifier, immutable for the document's life"""

    vector: np.ndarray
    """Feature embedding of the document"""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Additional metadata returned alongside search hits"""

    def __post_init__(self):
        # The collection owns a private, read-only copy of the vector
        vector = np.array(as_vector(self.vector), copy=True)
        vector.setflags(write=False)
        self.vector = vector
        self.metadata = dict(self.metadata or {})

    @property
    def dimension(self) -> int:
        return len(self.vector)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self.id == other.id
            and np.array_equal(self.vector, other.vector)
            and self.metadata == other.metadata
        )


@dataclass(frozen=True)
class SearchResult:
    """Represents one ranked hit from a collection search."""

    id: DocumentId
    """Identifier of the matching document"""

    score: float
    """Cosine similarity of the match, in [-1.0, 1.0]"""

    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)
    """Metadata of the matched document"""
