"""
Similarity search core: vector math, concurrent similarity and document collections.
"""

# Package initialization for vector module
from .index import IVectorStore, Collection
from .parallel import ISimilarityEngine, ParallelSimilarity, SequentialSimilarity
from .types import Document, DocumentId, SearchResult
from .vector_math import dot, magnitude, cosine_similarity

__all__ = [
    'IVectorStore',
    'Collection',
    'ISimilarityEngine',
    'ParallelSimilarity',
    'SequentialSimilarity',
    'Document',
    'DocumentId',
    'SearchResult',
    'dot',
    'magnitude',
    'cosine_similarity'
]
