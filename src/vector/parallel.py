"""
Concurrent evaluation of cosine similarity.
The dot product and both magnitudes run as independent pool tasks, joined before combining.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, wait, ALL_COMPLETED
from typing import Optional
import threading

import numpy as np

from . import vector_math
from .vector_math import VectorLike


def _frozen_copy(values: VectorLike) -> np.ndarray:
    """Scale a vector into a read-only copy so each task owns overflow-safe input."""
    vector = np.array(vector_math.scaled(values), copy=True)
    vector.setflags(write=False)
    return vector


class ISimilarityEngine(ABC):
    """Abstract interface for computing one cosine similarity."""

    @abstractmethod
    def compute(self, a: VectorLike, b: VectorLike) -> float:
        """Return the cosine similarity of a and b."""
        pass

    def close(self) -> None:
        """Release any resources held by the engine."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class SequentialSimilarity(ISimilarityEngine):
    """Evaluates the three reductions one after another on the calling thread."""

    def compute(self, a: VectorLike, b: VectorLike) -> float:
        a = vector_math.scaled(a)
        b = vector_math.scaled(b)
        dot_product = vector_math.dot(a, b)
        magnitude_a = vector_math.magnitude(a)
        magnitude_b = vector_math.magnitude(b)
        return vector_math.combine(dot_product, magnitude_a, magnitude_b)


class ParallelSimilarity(ISimilarityEngine):
    """
    Computes cosine similarity with concurrent sub-computations.

    Each call submits dot(a, b), magnitude(a) and magnitude(b) to a thread
    pool and blocks until all three have completed. If any task raised, the
    first failure (in dot, magnitude(a), magnitude(b) order) is re-raised and
    the remaining results are discarded.
    """

    def __init__(self, max_workers: int = 3, executor: Optional[ThreadPoolExecutor] = None):
        """
        Initialize the parallel engine.

        Args:
            max_workers: Pool size when the engine creates its own executor
            executor: Optional externally owned executor; it is not shut down by close()
        """
        if executor is None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {max_workers}")

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="similarity"
        )
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def compute(self, a: VectorLike, b: VectorLike) -> float:
        if self._closed:
            raise RuntimeError("ParallelSimilarity engine is closed")

        a = _frozen_copy(a)
        b = _frozen_copy(b)

        futures = [
            self._executor.submit(vector_math.dot, a, b),
            self._executor.submit(vector_math.magnitude, a),
            self._executor.submit(vector_math.magnitude, b),
        ]

        # Single join point: nothing is combined until every task is done
        wait(futures, return_when=ALL_COMPLETED)

        for future in futures:
            error = future.exception()
            if error is not None:
                raise error

        dot_product, magnitude_a, magnitude_b = (future.result() for future in futures)
        return vector_math.combine(dot_product, magnitude_a, magnitude_b)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=True)
