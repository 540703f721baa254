"""
Structured logging for index, embedding and search operations.
"""

import logging
from typing import Any, Dict, List


class StructuredLogger:
    """Structured logger for index, embedding and search operations."""

    def __init__(self, name: str = "redisknn"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def set_debug(self, enabled: bool) -> None:
        self.logger.setLevel(logging.DEBUG if enabled else logging.INFO)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_index_operation(self, operation: str, index_name: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log an index operation (create, drop, write)."""
        log_details = {"index": index_name}
        if details:
            log_details.update(details)

        level = logging.INFO if status == "success" else logging.WARNING
        self.log_operation(f"index.{operation}", status, log_details, level)

    def log_embedding_request(self, provider: str, model: str, text: str, status: str = "success", details: Dict[str, Any] = None):
        """Log an embedding request; the text is truncated."""
        log_details = {
            "provider": provider,
            "model": model,
            "text": text[:50] + "..." if len(text) > 50 else text,
        }
        if details:
            log_details.update(details)

        level = logging.DEBUG if status == "success" else logging.WARNING
        self.log_operation("embedding.request", status, log_details, level)

    def log_search(self, index_name: str, limit: int, total: int, returned: int, status: str = "success"):
        """Log a KNN search."""
        log_details = {
            "index": index_name,
            "limit": limit,
            "total": total,
            "returned": returned,
        }
        self.log_operation("search.knn", status, log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()


def sanitize_config(payload: Any, sensitive_fields: List[str] = None) -> Any:
    """Redact credentials from a (nested) config mapping before it is logged."""
    if sensitive_fields is None:
        sensitive_fields = ['password', 'api_key', 'secret', 'token']

    if isinstance(payload, dict):
        sanitized = {}
        for k, v in payload.items():
            if k in sensitive_fields:
                sanitized[k] = "[REDACTED]" if v else v
            else:
                sanitized[k] = sanitize_config(v, sensitive_fields)
        return sanitized
    elif isinstance(payload, list):
        return [sanitize_config(item, sensitive_fields) for item in payload]
    else:
        return payload
