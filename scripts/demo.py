#!/usr/bin/env python3
"""
Document search demo.
Builds two collections, runs one query against each and prints the ranked hits.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import get_default_top_k
from src.core.errors import CollectionNotFound
from src.core.ids import new_document_id
from src.core.registry import CollectionRegistry
from src.core.schemas import SearchResponse
from src.vector.types import Document

DEMO_COLLECTIONS = {
    "NotaryDocuments": [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]],
    "LegalFiles": [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
}
DEFAULT_QUERY = [1.0, 1.0, 1.0]


def build_registry(id_supplier=new_document_id, registry=None, progress=None):
    """Create (or fill) a registry with the demo collections. Progress goes to stdout unless redirected."""
    registry = registry or CollectionRegistry()
    progress = progress or sys.stdout

    print("Adding collections...", file=progress)
    for name, vectors in DEMO_COLLECTIONS.items():
        collection = registry.add_collection(name)
        print(f"\nAdding documents to collection '{name}'...", file=progress)
        collection.batch_add_or_update(Document(id=id_supplier(), vector=v) for v in vectors)
        print("✓ Documents added", file=progress)

    return registry


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="In-memory document similarity search demo")
    parser.add_argument("--query", type=float, nargs="+", default=DEFAULT_QUERY,
                        help="Query vector components (default: 1.0 1.0 1.0)")
    parser.add_argument("--k", type=int, default=None,
                        help="Number of results per collection (default: DEFAULT_TOP_K)")
    parser.add_argument("--collection", action="append", dest="collections",
                        help="Collection to search (repeatable; default: all demo collections)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    return parser.parse_args(argv)


def main(argv=None):
    """Run the demo. Returns a process exit code."""
    args = parse_args(argv)
    k = args.k if args.k is not None else get_default_top_k()
    names = args.collections or list(DEMO_COLLECTIONS)
    # Keep stdout pure JSON in --json mode
    progress = sys.stderr if args.json else sys.stdout

    print("\n=== Document Search Engine ===\n", file=progress)

    with build_registry(progress=progress) as registry:
        print(f"\n=== Query: {args.query} ===", file=progress)

        for name in names:
            try:
                results = registry.search_in_collection(name, args.query, k)
            except CollectionNotFound:
                print(f"\nNo results found in '{name}'.", file=progress)
                continue

            if args.json:
                print(SearchResponse.from_results(name, results).model_dump_json())
                continue

            print(f"\nResults in '{name}':")
            for result in results:
                print(f"Document ID: {result.id} - Similarity: {result.score:.4f}")

    print("\n=== Search complete ===", file=progress)
    return 0


if __name__ == "__main__":
    sys.exit(main())
