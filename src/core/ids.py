"""
Document identifier suppliers.
The search core never generates ids itself; callers pass one in per document.
"""

from typing import Callable, Hashable
import itertools
import uuid

IdSupplier = Callable[[], Hashable]


def new_document_id() -> uuid.UUID:
    """Default supplier: a random UUID4."""
    return uuid.uuid4()


def sequential_ids(prefix: str = "doc_") -> IdSupplier:
    """Supplier of predictable ids (doc_1, doc_2, ...) for fixtures and demos."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"
