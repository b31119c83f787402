"""
Centralized logging configuration for the learning companion.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the package should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # structlog does the formatting, stdlib only routes
    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for view lifecycle transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for the lifecycle controller
    """
    return get_logger(name).bind(
        subsystem="lifecycle",
        audit_trail=True
    )


def get_storage_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for the persistence layer.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for storage operations
    """
    return get_logger(name).bind(subsystem="storage")


def log_view_transition(
    logger: FilteringBoundLogger,
    from_view: str,
    to_view: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a view transition with standardized format.

    Args:
        logger: Structlog logger instance
        from_view: Current view
        to_view: Target view
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_view=from_view,
        to_view=to_view,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("View transition")


def log_service_failure(
    logger: FilteringBoundLogger,
    operation: str,
    error: Exception,
    fallback_view: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a failed external service call and the view it falls back to.

    Args:
        logger: Structlog logger instance
        operation: Service operation that failed
        error: The raised exception
        fallback_view: View the controller returns to
        context: Additional context data
    """
    bound_logger = logger.bind(
        operation=operation,
        error_type=type(error).__name__,
        error=str(error),
        fallback_view=fallback_view,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.warning("Service call failed")
