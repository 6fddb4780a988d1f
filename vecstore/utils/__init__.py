"""
Utility modules for vecstore.
"""

from .logging_config import configure_logging, get_logger, log_collection_event
from .errors import (
    VectorStoreError,
    ConfigurationError,
    ValidationError,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_collection_event",
    "VectorStoreError",
    "ConfigurationError",
    "ValidationError",
]
