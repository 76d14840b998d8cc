"""
Collection registry.
Maps collection names to collections and forwards searches to them.
"""

from typing import Dict, List, Optional
import threading

from util.logging import logger
from . import config
from .errors import CollectionNotFound
from .schemas import SearchRequest
from ..vector.index import Collection
from ..vector.parallel import ISimilarityEngine
from ..vector.types import SearchResult
from ..vector.vector_math import VectorLike, as_vector


class CollectionRegistry:
    """
    Registry of named collections.

    All collections created here share one similarity engine, owned by the
    registry and released by close(). The name map is guarded by a lock.
    """

    def __init__(self, similarity: Optional[ISimilarityEngine] = None, mismatch_policy: Optional[str] = None):
        self._owns_similarity = similarity is None
        self.similarity = similarity if similarity is not None else config.get_similarity_engine()
        self.mismatch_policy = mismatch_policy
        self.collections: Dict[str, Collection] = {}
        self._lock = threading.Lock()

    def add_collection(self, name: str, dimension: Optional[int] = None) -> Collection:
        """
        Create and register an empty collection.

        Registering an existing name replaces that collection with an empty one.

        Args:
            name: Collection name
            dimension: Optional fixed vector length for the collection

        Returns:
            The new Collection
        """
        if not name or not name.strip():
            raise ValueError("Collection name cannot be empty")

        collection = Collection(
            name=name,
            similarity=self.similarity,
            dimension=dimension,
            mismatch_policy=self.mismatch_policy
        )

        with self._lock:
            replaced = name in self.collections
            self.collections[name] = collection

        logger.log_collection_operation(
            "replaced" if replaced else "created", name, {"dimension": dimension}
        )
        return collection

    def get_collection(self, name: str) -> Optional[Collection]:
        """Return the named collection, or None if not registered."""
        with self._lock:
            return self.collections.get(name)

    def collection(self, name: str) -> Collection:
        """Return the named collection, raising CollectionNotFound if not registered."""
        collection = self.get_collection(name)
        if collection is None:
            raise CollectionNotFound(name)
        return collection

    def remove_collection(self, name: str) -> bool:
        """Drop a collection and its documents. Returns whether it existed."""
        with self._lock:
            collection = self.collections.pop(name, None)

        if collection is None:
            return False

        collection.clear()
        logger.log_collection_operation("removed", name)
        return True

    def list_collections(self) -> List[str]:
        """Registered collection names in creation order."""
        with self._lock:
            return list(self.collections.keys())

    def __contains__(self, name) -> bool:
        with self._lock:
            return name in self.collections

    def search_in_collection(self, name: str, query: VectorLike, k: int) -> List[SearchResult]:
        """
        Search a named collection.

        Args:
            name: Collection to search
            query: Query vector
            k: Maximum number of results

        Returns:
            Same ranked results as Collection.search

        Raises:
            CollectionNotFound: if no collection is registered under name
            pydantic.ValidationError: if the query or k is invalid
        """
        request = SearchRequest(collection=name, query=as_vector(query).tolist(), k=k)
        return self.collection(request.collection).search(request.query, request.k)

    def close(self) -> None:
        """Release the shared similarity engine if the registry created it."""
        if self._owns_similarity:
            self.similarity.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
