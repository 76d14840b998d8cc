"""
Collections of documents searchable by cosine similarity.
Brute-force exact search: every stored document is scored against the query.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
import threading
import time

from util.logging import logger
from ..core import config
from ..core.errors import DimensionMismatch, DocumentNotFound
from .parallel import ISimilarityEngine
from .types import Document, DocumentId, SearchResult
from .vector_math import VectorLike, as_vector


class IVectorStore(ABC):
    """Abstract interface for document storage and similarity search."""

    @abstractmethod
    def add_or_update(self, doc: Document) -> None:
        """Insert a document, or replace the stored one with the same id."""
        pass

    @abstractmethod
    def batch_add_or_update(self, docs: Iterable[Document]) -> None:
        """Add or update multiple documents in order."""
        pass

    @abstractmethod
    def search(self, query: VectorLike, k: int) -> List[SearchResult]:
        """Search for similar documents and return ranked results."""
        pass

    @abstractmethod
    def remove(self, document_id: DocumentId) -> bool:
        """Remove a document by id. Returns whether a document was removed."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all documents from the store."""
        pass


class Collection(IVectorStore):
    """
    In-memory keyed set of documents ranked by cosine similarity.

    Documents keep their insertion position, also across updates, and that
    position breaks score ties so identical searches return identical
    orderings. Membership changes are serialized by a per-collection lock;
    searches score a snapshot taken under that lock.
    """

    def __init__(self, name: str = "default", similarity: Optional[ISimilarityEngine] = None,
                 dimension: Optional[int] = None, mismatch_policy: Optional[str] = None):
        """
        Initialize an empty collection.

        Args:
            name: Collection name, used for logging
            similarity: Engine computing one similarity (defaults to the configured engine)
            dimension: Optional fixed vector length enforced on insertion
            mismatch_policy: 'skip' or 'abort' (defaults to MISMATCH_POLICY)
        """
        if dimension is not None and dimension < 0:
            raise ValueError(f"dimension must be >= 0: {dimension}")

        policy = (mismatch_policy or config.get_mismatch_policy()).lower()
        if policy not in config.VALID_MISMATCH_POLICIES:
            raise ValueError(f"mismatch_policy must be one of: {config.VALID_MISMATCH_POLICIES}")

        self.name = name
        self.dimension = dimension
        self.mismatch_policy = policy
        self._owns_similarity = similarity is None
        self._similarity = similarity if similarity is not None else config.get_similarity_engine()
        self._documents: Dict[DocumentId, Document] = {}
        self._lock = threading.Lock()

    def add_or_update(self, doc: Document) -> None:
        """Insert a document, or replace the stored one with the same id."""
        if self.dimension is not None and doc.dimension != self.dimension:
            raise DimensionMismatch(expected=self.dimension, actual=doc.dimension)

        with self._lock:
            updated = doc.id in self._documents
            # Assigning an existing key keeps its insertion position
            self._documents[doc.id] = doc

        logger.log_document_operation(
            "update" if updated else "add", self.name, doc.id, {"dimension": doc.dimension}
        )

    def batch_add_or_update(self, docs: Iterable[Document]) -> None:
        """Add or update multiple documents in order."""
        for doc in docs:
            self.add_or_update(doc)

    def get(self, document_id: DocumentId) -> Optional[Document]:
        """Return the stored document, or None if absent."""
        with self._lock:
            return self._documents.get(document_id)

    def get_strict(self, document_id: DocumentId) -> Document:
        """Return the stored document, raising DocumentNotFound if absent."""
        doc = self.get(document_id)
        if doc is None:
            raise DocumentNotFound(document_id)
        return doc

    def remove(self, document_id: DocumentId) -> bool:
        """Remove a document by id. Returns whether a document was removed."""
        with self._lock:
            removed = self._documents.pop(document_id, None) is not None

        if removed:
            logger.log_document_operation("remove", self.name, document_id)
        return removed

    def remove_strict(self, document_id: DocumentId) -> None:
        """Remove a document by id, raising DocumentNotFound if absent."""
        if not self.remove(document_id):
            raise DocumentNotFound(document_id)

    def clear(self) -> None:
        """Remove all documents from the collection."""
        with self._lock:
            count = len(self._documents)
            self._documents.clear()

        logger.log_collection_operation("clear", self.name, {"removed": count})

    def ids(self) -> List[DocumentId]:
        """Document ids in insertion order."""
        with self._lock:
            return list(self._documents.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def __contains__(self, document_id) -> bool:
        with self._lock:
            return document_id in self._documents

    def search(self, query: VectorLike, k: int) -> List[SearchResult]:
        """
        Rank every document against the query and return the top k.

        Results are ordered by descending score; ties keep insertion order.
        A document whose length differs from the query's is dropped under the
        'skip' policy and fails the whole search under 'abort'.

        Args:
            query: Query vector
            k: Maximum number of results; 0 returns an empty list

        Returns:
            At most k SearchResult objects
        """
        if k < 0:
            raise ValueError(f"k must be >= 0: {k}")

        query = as_vector(query)
        start_time = time.monotonic()

        with self._lock:
            snapshot = list(self._documents.values())

        if k == 0 or not snapshot:
            logger.log_search(self.name, k, len(snapshot), 0, start_time, time.monotonic())
            return []

        scored = []
        skipped = 0
        for doc in snapshot:
            try:
                score = self._similarity.compute(query, doc.vector)
            except DimensionMismatch as e:
                if self.mismatch_policy == "abort":
                    logger.log_search(self.name, k, len(snapshot), 0, start_time, time.monotonic(),
                                      status="aborted")
                    raise DimensionMismatch(
                        expected=len(query),
                        actual=doc.dimension,
                        message=f"Document '{doc.id}' has dimension {doc.dimension}, query has {len(query)}"
                    ) from e
                skipped += 1
                logger.warning(
                    f"Skipping document '{doc.id}' in collection '{self.name}': "
                    f"dimension {doc.dimension} != query dimension {len(query)}"
                )
                continue
            scored.append((doc, score))

        # sorted() is stable, so equal scores keep insertion order
        scored = sorted(scored, key=lambda pair: pair[1], reverse=True)

        results = [
            SearchResult(id=doc.id, score=score, metadata=dict(doc.metadata))
            for doc, score in scored[:k]
        ]

        logger.log_search(self.name, k, len(snapshot), len(results), start_time, time.monotonic(),
                          skipped=skipped)
        return results

    def close(self) -> None:
        """Release the similarity engine if this collection created it."""
        if self._owns_similarity:
            self._similarity.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
