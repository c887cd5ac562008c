"""
Centralized logging configuration for the banca ledger.

This module provides standardized logging configuration using structlog
for all components. Journal, persistence and rendering code should obtain
their loggers here so that ledger events share one format.
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

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
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


def get_ledger_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the ledger subsystem.

    Every event emitted through it carries ``subsystem="ledger"`` and is
    flagged as part of the audit trail of operations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for ledger events
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="ledger",
        audit_trail=True
    )


def log_operation_recorded(
    logger: FilteringBoundLogger,
    operation_id: str,
    result: str,
    amount: float,
    profit: float,
    balance: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an appended operation with standardized format.

    Args:
        logger: Structlog logger instance
        operation_id: ID of the recorded operation
        result: WIN or LOSS
        amount: Stake magnitude of the operation
        profit: Signed profit the operation contributed
        balance: Current balance after the operation
        context: Additional context data
    """
    bound_logger = logger.bind(
        operation_id=operation_id,
        result=result,
        amount=amount,
        profit=profit,
        balance=balance,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Operation recorded")


def log_input_rejected(
    logger: FilteringBoundLogger,
    field: Optional[str],
    reason: str,
    value: Any = None
) -> None:
    """
    Log a rejected form submission.

    Args:
        logger: Structlog logger instance
        field: Name of the offending input field
        reason: User-visible rejection message
        value: Raw value that failed validation
    """
    logger.bind(
        field=field,
        reason=reason,
        value=repr(value),
    ).warning("Operation input rejected")
