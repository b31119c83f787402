"""
Data quality error classifications for plan and profile payloads.

These exceptions describe problems with the shape of data: a profile without
a topic, or a generation response that cannot be turned into a valid plan.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class DuplicateIdentifierError(MalformedDataError):
    """A day or step identifier appears more than once in a plan."""

    def __init__(self, message: str, identifier: Optional[str] = None,
                 scope: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.identifier = identifier
        self.scope = scope
