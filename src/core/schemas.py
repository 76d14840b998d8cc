"""
Validated request and response models at the registry boundary.
"""

import math
from pydantic import BaseModel, field_validator
from typing import Any, List


class SearchRequest(BaseModel):
    collection: str
    query: List[float]
    k: int

    @field_validator('collection')
    @classmethod
    def collection_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('collection cannot be empty')
        return v

    @field_validator('query')
    @classmethod
    def query_must_be_finite(cls, v):
        if not all(math.isfinite(x) for x in v):
            raise ValueError('query must contain only finite numbers')
        return v

    @field_validator('k')
    @classmethod
    def k_must_not_be_negative(cls, v):
        if v < 0:
            raise ValueError('k must be >= 0')
        return v


class SearchHit(BaseModel):
    id: str
    score: float


class SearchResponse(BaseModel):
    collection: str
    hits: List[SearchHit]

    @classmethod
    def from_results(cls, collection: str, results: List[Any]) -> 'SearchResponse':
        """Build a response from SearchResult objects; ids are rendered as strings."""
        return cls(
            collection=collection,
            hits=[SearchHit(id=str(r.id), score=float(r.score)) for r in results]
        )
