"""
Structured logging for similarity search operations.
"""

import logging
import os
from typing import Any, Dict


class StructuredLogger:
    """Structured logger for collection, document and search operations."""

    def __init__(self, name: str = "similarity_search", level: str = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level or os.getenv("LOG_LEVEL", "INFO").upper())

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_collection_operation(self, operation: str, collection: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a registry-level collection operation."""
        log_details = {"collection": collection}
        if details:
            log_details.update(details)

        self.log_operation(f"collection.{operation}", status, log_details)

    def log_document_operation(self, operation: str, collection: str, document_id: Any, details: Dict[str, Any] = None, status: str = "success"):
        """Log a document mutation. Emitted at DEBUG to keep bulk loads quiet."""
        log_details = {"collection": collection, "document_id": str(document_id)}
        if details:
            log_details.update(details)

        self.log_operation(f"document.{operation}", status, log_details, level=logging.DEBUG)

    def log_search(self, collection: str, k: int, scanned: int, returned: int, start_time: float, end_time: float,
                   skipped: int = 0, status: str = "success"):
        """Log a completed (or failed) search."""
        duration_ms = round((end_time - start_time) * 1000, 2)
        log_details = {
            "collection": collection,
            "k": k,
            "scanned": scanned,
            "returned": returned,
            "duration_ms": duration_ms
        }
        if skipped:
            log_details["skipped"] = skipped

        level = logging.INFO if status == "success" else logging.WARNING
        self.log_operation("search", status, log_details, level=level)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
