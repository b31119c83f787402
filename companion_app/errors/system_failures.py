"""
System failure error classifications.

These exceptions represent failures outside the caller's data: the generation
service being unconfigured or unreachable, the storage backend refusing a
write, or a view transition the lifecycle does not allow.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ServiceError(SystemFailureError):
    """Failure reported by an external service (generation, chat, search)."""

    def __init__(self, message: str, service: Optional[str] = None,
                 operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.service = service
        self.operation = operation


class ConfigurationError(ServiceError):
    """Service credentials are missing or rejected."""

    def __init__(self, message: str, setting: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.setting = setting


class GenerationError(ServiceError):
    """The generation service call itself failed."""
    pass


class SearchError(ServiceError):
    """The resource search service returned an error."""

    def __init__(self, message: str, query: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, service="search", **kwargs)
        self.query = query
        self.status_code = status_code


class StateTransitionError(SystemFailureError):
    """Invalid view transition requested of the lifecycle controller."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class PersistenceError(SystemFailureError):
    """Storage backend read or write failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
