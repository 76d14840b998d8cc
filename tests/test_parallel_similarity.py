"""
Tests for concurrent similarity evaluation.
"""

import random
import threading
import time

import numpy as np
import pytest

from src.core.errors import DimensionMismatch
from src.vector import vector_math
from src.vector.parallel import ParallelSimilarity, SequentialSimilarity, ISimilarityEngine


@pytest.fixture
def engine():
    """Create a parallel engine and shut it down after the test."""
    with ParallelSimilarity(max_workers=3) as parallel:
        yield parallel


@pytest.fixture
def random_delays(monkeypatch):
    """Delay each sub-computation by a random amount to shuffle completion order."""
    rng = random.Random(1234)
    rng_lock = threading.Lock()
    original_dot = vector_math.dot
    original_magnitude = vector_math.magnitude

    def jitter():
        with rng_lock:
            delay = rng.uniform(0, 0.003)
        time.sleep(delay)

    def slow_dot(a, b):
        jitter()
        return original_dot(a, b)

    def slow_magnitude(v):
        jitter()
        return original_magnitude(v)

    monkeypatch.setattr(vector_math, "dot", slow_dot)
    monkeypatch.setattr(vector_math, "magnitude", slow_magnitude)


def test_engines_implement_interface():
    """Test that both strategies implement ISimilarityEngine."""
    assert isinstance(SequentialSimilarity(), ISimilarityEngine)
    with ParallelSimilarity() as parallel:
        assert isinstance(parallel, ISimilarityEngine)


def test_parallel_matches_sequential(engine):
    """Test that the parallel result equals the plain cosine similarity."""
    rng = np.random.default_rng(7)
    sequential = SequentialSimilarity()
    for _ in range(50):
        a = rng.normal(size=8)
        b = rng.normal(size=8)
        assert engine.compute(a, b) == vector_math.cosine_similarity(a, b)
        assert sequential.compute(a, b) == vector_math.cosine_similarity(a, b)


def test_parallel_zero_vector(engine):
    """Test the zero-magnitude rule through the parallel engine."""
    assert engine.compute([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0


def test_parallel_is_independent_of_completion_order(engine, random_delays):
    """Test that random scheduling never changes the combined value."""
    a = [0.3, -1.2, 4.5, 2.0]
    b = [1.1, 0.4, -0.7, 3.3]
    expected = SequentialSimilarity().compute(a, b)

    for _ in range(30):
        assert engine.compute(a, b) == expected


def test_parallel_propagates_dimension_mismatch(engine):
    """Test that a failure inside the dot task fails the whole computation."""
    with pytest.raises(DimensionMismatch):
        engine.compute([1.0, 2.0, 3.0], [1.0, 2.0])


def test_parallel_waits_for_siblings_before_raising(engine, monkeypatch):
    """Test that sibling tasks finish before the failure reaches the caller."""
    original_magnitude = vector_math.magnitude
    finished = []

    def slow_magnitude(v):
        time.sleep(0.02)
        result = original_magnitude(v)
        finished.append(result)
        return result

    monkeypatch.setattr(vector_math, "magnitude", slow_magnitude)

    with pytest.raises(DimensionMismatch):
        engine.compute([1.0, 2.0, 3.0], [1.0, 2.0])

    assert len(finished) == 2


def test_parallel_inputs_are_copied(engine, monkeypatch):
    """Test that tasks receive read-only copies of the inputs."""
    seen = []
    original_dot = vector_math.dot

    def recording_dot(a, b):
        seen.append((a, b))
        return original_dot(a, b)

    monkeypatch.setattr(vector_math, "dot", recording_dot)

    query = np.array([1.0, 2.0])
    engine.compute(query, [3.0, 4.0])

    task_a, task_b = seen[0]
    assert task_a is not query
    assert not task_a.flags.writeable
    assert not task_b.flags.writeable


def test_parallel_closed_engine_rejects_work():
    """Test that a closed engine refuses new computations."""
    parallel = ParallelSimilarity()
    parallel.close()
    parallel.close()  # idempotent

    assert parallel.closed
    with pytest.raises(RuntimeError):
        parallel.compute([1.0], [1.0])


def test_parallel_invalid_worker_count():
    """Test that the pool size must be positive."""
    with pytest.raises(ValueError):
        ParallelSimilarity(max_workers=0)


def test_parallel_with_external_executor():
    """Test that an externally owned executor is left running on close."""
    from concurrent.futures import ThreadPoolExecutor

    with ThreadPoolExecutor(max_workers=1) as executor:
        parallel = ParallelSimilarity(executor=executor)
        # A single worker still completes all three tasks
        assert parallel.compute([1.0, 0.0], [1.0, 0.0]) == pytest.approx(1.0)
        parallel.close()
        assert executor.submit(lambda: 42).result() == 42


def test_parallel_concurrent_callers(engine):
    """Test that many threads can share one engine."""
    rng = np.random.default_rng(3)
    pairs = [(rng.normal(size=5), rng.normal(size=5)) for _ in range(40)]
    expected = [vector_math.cosine_similarity(a, b) for a, b in pairs]
    results = [None] * len(pairs)

    def worker(i):
        results[i] = engine.compute(*pairs[i])

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(len(pairs))]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == expected
