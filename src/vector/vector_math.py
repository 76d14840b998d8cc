"""
Vector math primitives for similarity search.
Pure functions over equal-length numeric vectors.
"""

from typing import Sequence, Union
import numpy as np

from ..core.errors import DimensionMismatch

VectorLike = Union[Sequence[float], np.ndarray]


def as_vector(values: VectorLike) -> np.ndarray:
    """Return a 1-D float64 array of finite values."""
    vector = np.asarray(values, dtype=np.float64)
    if vector.ndim != 1:
        raise ValueError(f"Expected a 1-D vector, got shape {vector.shape}")
    if not np.all(np.isfinite(vector)):
        raise ValueError("Vector must contain only finite numbers")
    return vector


def scaled(values: VectorLike) -> np.ndarray:
    """
    Divide a vector by its largest absolute component.

    The result has components in [-1, 1] and the same direction, so cosine
    similarity is unchanged while the reductions can no longer overflow.
    A zero or empty vector is returned as is.
    """
    vector = as_vector(values)
    if len(vector) == 0:
        return vector
    largest = np.max(np.abs(vector))
    if largest == 0.0:
        return vector
    return vector / largest


def dot(a: VectorLike, b: VectorLike) -> float:
    """Sum of element-wise products. Raises DimensionMismatch on differing lengths."""
    a = as_vector(a)
    b = as_vector(b)
    if len(a) != len(b):
        raise DimensionMismatch(expected=len(a), actual=len(b))
    return float(np.dot(a, b))


def magnitude(v: VectorLike) -> float:
    """Euclidean norm; 0.0 for an empty or all-zero vector."""
    v = as_vector(v)
    if len(v) == 0:
        return 0.0
    largest = float(np.max(np.abs(v)))
    if largest == 0.0:
        return 0.0
    return largest * float(np.linalg.norm(v / largest))


def combine(dot_product: float, magnitude_a: float, magnitude_b: float) -> float:
    """
    Combine a dot product and two magnitudes into a cosine similarity.

    A zero magnitude on either side yields 0.0. The quotient is clipped to
    [-1.0, 1.0] to absorb floating point rounding. Inputs are expected to come
    from scaled vectors, where no reduction overflows.
    """
    if magnitude_a == 0.0 or magnitude_b == 0.0:
        return 0.0
    similarity = dot_product / (magnitude_a * magnitude_b)
    if not np.isfinite(similarity):
        raise ValueError(f"Cosine similarity is not finite: {similarity}")
    return float(np.clip(similarity, -1.0, 1.0))


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """Cosine of the angle between a and b, or 0.0 when either is a zero vector."""
    a = scaled(a)
    b = scaled(b)
    return combine(dot(a, b), magnitude(a), magnitude(b))
