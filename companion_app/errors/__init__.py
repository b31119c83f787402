"""
Error classification for the learning companion.

This module provides a structured exception hierarchy separating data quality
issues (malformed or missing payloads) from system failures (unreachable
services, storage problems, invalid view transitions).
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    DuplicateIdentifierError,
)
from .system_failures import (
    SystemFailureError,
    ServiceError,
    ConfigurationError,
    GenerationError,
    SearchError,
    PersistenceError,
    StateTransitionError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "DuplicateIdentifierError",
    # System Failures
    "SystemFailureError",
    "ServiceError",
    "ConfigurationError",
    "GenerationError",
    "SearchError",
    "PersistenceError",
    "StateTransitionError",
]
