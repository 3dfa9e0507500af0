"""Utility modules."""

from .logging import setup_logging, get_logger
from .retry import retry_request
from .validation import (
    validate_duration,
    validate_query_text,
    validate_provider_name,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "retry_request",
    "validate_duration",
    "validate_query_text",
    "validate_provider_name",
]
