"""
Centralized logging configuration for the crossalert system.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import orjson
import structlog
from structlog.types import FilteringBoundLogger


def _orjson_dumps(event_dict: dict[str, Any], default: Any = None, **kwargs: Any) -> str:
    """Serialize a log record with orjson; dates render as ISO strings."""
    return orjson.dumps(event_dict, default=default).decode()


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
        format_json: If True, emit one orjson-encoded record per line;
            otherwise use the coloured console renderer
        include_timestamp: Include an ISO timestamp of the log call
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors, run before rendering
    """
    log_level = getattr(logging, level.upper())

    # Records are rendered by structlog; stdlib only writes the line
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

    # Wall-clock time of the log call, not the bar date being analyzed
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    # Renderer must come last
    if format_json:
        processors.append(structlog.processors.JSONRenderer(serializer=_orjson_dumps))
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


def get_confirmation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for secondary-condition confirmation decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger bound to the confirmation subsystem
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="confirmation",
        audit_trail=True
    )


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for pending condition lifecycle events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger bound to the lifecycle subsystem
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="condition_lifecycle",
        audit_trail=True
    )


def log_confirmation_decision(
    logger: FilteringBoundLogger,
    symbol: str,
    condition_type: str,
    confirmed: bool,
    score: float,
    threshold: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a confirmation decision with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Stock symbol being analyzed
        condition_type: Primary condition being confirmed
        confirmed: Whether the score reached the threshold
        score: Weighted secondary score
        threshold: Confirmation threshold
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        condition_type=condition_type,
        decision="CONFIRMED" if confirmed else "PENDING",
        score=round(score, 4),
        threshold=threshold,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if confirmed:
        bound_logger.info("Confirmation decision")
    else:
        bound_logger.debug("Confirmation decision")


def log_state_transition(
    logger: FilteringBoundLogger,
    symbol: str,
    condition_id: Any,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a pending condition lifecycle transition.

    Args:
        logger: Structlog logger instance
        symbol: Stock symbol owning the condition
        condition_id: Store identity of the condition
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        condition_id=condition_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Condition transition")
