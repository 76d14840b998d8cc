"""
Tests for structured operation logging.
"""

import logging

import pytest

from src.vector.index import Collection
from src.vector.parallel import SequentialSimilarity
from src.vector.types import Document
from util.logging import StructuredLogger, logger


def test_global_logger_has_single_handler():
    """Test the module-level logger is configured once."""
    again = StructuredLogger()
    assert again.logger is logger.logger
    assert len(logger.logger.handlers) == 1


def test_log_operation_format(caplog):
    """Test the structured message layout."""
    with caplog.at_level(logging.INFO, logger="similarity_search"):
        logger.log_operation("collection.created", "success", {"collection": "LegalFiles"})

    assert "Operation: collection.created, Status: success, Details: {'collection': 'LegalFiles'}" in caplog.text


def test_log_search_details(caplog):
    """Test that searches log counts and duration."""
    with caplog.at_level(logging.INFO, logger="similarity_search"):
        logger.log_search("LegalFiles", k=3, scanned=2, returned=2, start_time=1.0, end_time=1.0125)

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert "'duration_ms': 12.5" in record.getMessage()
    assert "skipped" not in record.getMessage()


def test_log_search_aborted_is_warning(caplog):
    """Test that failed searches are logged at WARNING."""
    with caplog.at_level(logging.INFO, logger="similarity_search"):
        logger.log_search("c", k=1, scanned=1, returned=0, start_time=0.0, end_time=0.0, status="aborted")

    assert caplog.records[-1].levelno == logging.WARNING


def test_document_operations_log_at_debug(caplog):
    """Test that document mutations are DEBUG-level events."""
    collection = Collection(name="logged", similarity=SequentialSimilarity())

    with caplog.at_level(logging.INFO, logger="similarity_search"):
        collection.add_or_update(Document(id="quiet", vector=[1.0]))
    assert "document.add" not in caplog.text

    with caplog.at_level(logging.DEBUG, logger="similarity_search"):
        collection.add_or_update(Document(id="quiet", vector=[2.0]))
        collection.remove("quiet")

    assert "document.update" in caplog.text
    assert "document.remove" in caplog.text


def test_skipped_documents_are_logged(caplog):
    """Test that the skip policy leaves a warning per dropped document."""
    collection = Collection(name="mixed", similarity=SequentialSimilarity(), mismatch_policy="skip")
    collection.add_or_update(Document(id="short", vector=[1.0, 0.0]))
    collection.add_or_update(Document(id="full", vector=[1.0, 0.0, 0.0]))

    with caplog.at_level(logging.INFO, logger="similarity_search"):
        results = collection.search([1.0, 0.0, 0.0], k=2)

    assert [r.id for r in results] == ["full"]
    assert "Skipping document 'short'" in caplog.text
    assert "'skipped': 1" in caplog.text
