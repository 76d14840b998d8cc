"""
Similarity search configuration.
Environment-driven settings with factory helpers for the search engine.
"""

import os

# Debug flag (module constant for convenience; use debug_enabled() for dynamic reads)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Similarity evaluation
SIMILARITY_STRATEGY = os.getenv("SIMILARITY_STRATEGY", "parallel")  # parallel|sequential
SIMILARITY_MAX_WORKERS = int(os.getenv("SIMILARITY_MAX_WORKERS", "3"))

# Search behaviour
MISMATCH_POLICY = os.getenv("MISMATCH_POLICY", "skip")  # skip|abort
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "3"))

VALID_STRATEGIES = ["parallel", "sequential"]
VALID_MISMATCH_POLICIES = ["skip", "abort"]

# Version string
VERSION = "0.1.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_log_level():
    """Get the configured log level name."""
    return os.getenv("LOG_LEVEL", LOG_LEVEL).upper()


def get_similarity_strategy():
    """Get similarity strategy (parallel|sequential)."""
    return os.getenv("SIMILARITY_STRATEGY", SIMILARITY_STRATEGY).lower()


def get_similarity_max_workers():
    """Get the thread pool size used by the parallel strategy."""
    return int(os.getenv("SIMILARITY_MAX_WORKERS", str(SIMILARITY_MAX_WORKERS)))


def get_mismatch_policy():
    """Get the per-document dimension mismatch policy (skip|abort)."""
    return os.getenv("MISMATCH_POLICY", MISMATCH_POLICY).lower()


def get_default_top_k():
    """Get the default number of results returned by a search."""
    return int(os.getenv("DEFAULT_TOP_K", str(DEFAULT_TOP_K)))


def validate_search_config():
    """Validate search configuration and return any issues."""
    issues = []

    if get_similarity_strategy() not in VALID_STRATEGIES:
        issues.append(f"Invalid SIMILARITY_STRATEGY: {get_similarity_strategy()}")

    if get_mismatch_policy() not in VALID_MISMATCH_POLICIES:
        issues.append(f"Invalid MISMATCH_POLICY: {get_mismatch_policy()}")

    if get_similarity_max_workers() < 1:
        issues.append("SIMILARITY_MAX_WORKERS must be >= 1")

    if get_default_top_k() < 0:
        issues.append("DEFAULT_TOP_K must be >= 0")

    return issues


def get_similarity_engine():
    """Get configured similarity engine implementation."""
    issues = validate_search_config()
    if issues:
        raise ValueError(f"Search configuration invalid: {issues}")

    if get_similarity_strategy() == "sequential":
        from src.vector.parallel import SequentialSimilarity
        return SequentialSimilarity()

    from src.vector.parallel import ParallelSimilarity
    return ParallelSimilarity(max_workers=get_similarity_max_workers())
