"""
Structured Logger Module

Configures structlog for JSON-formatted structured logging with correlation IDs.
Logs go to stderr so they never interleave with the report on stdout.

Example Usage:
    from profile_analyzer.utils.logger import configure_logging, get_logger

    configure_logging(log_level="INFO")
    logger = get_logger(__name__, phase="fetch", component="profile_fetcher")
    logger.info("Fetching profile", username="torvalds")

Log Levels:
    - DEBUG: Request URLs, prompt/response lengths
    - INFO: Stage progress
    - WARNING: Empty or unparseable model output
    - ERROR: The fatal condition that ended the run
"""

import logging
import sys
import uuid
from pathlib import Path
from typing import List, Optional

import structlog
from structlog.types import BindableLogger, EventDict, WrappedLogger


def mask_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Processor to mask sensitive credentials in log output.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with masked credentials

    Masks:
        - password, api_key, token, secret, credential, auth fields
        - Replaces values with "***MASKED***"
        - Uses word boundary matching to avoid false positives
    """
    sensitive_fields = {"password", "api_key", "token", "secret", "credential", "auth"}

    for key in list(event_dict.keys()):
        key_lower = key.lower()
        for sensitive in sensitive_fields:
            if (
                key_lower == sensitive
                or key_lower.endswith(f"_{sensitive}")
                or key_lower.endswith(f"-{sensitive}")
                or key_lower.startswith(f"{sensitive}_")
                or key_lower.startswith(f"{sensitive}-")
            ):
                event_dict[key] = "***MASKED***"
                break

    return event_dict


def configure_logging(
    log_file: Optional[str] = None, log_level: str = "WARNING"
) -> None:
    """
    Configure structlog with JSON output on stderr and optional file logging.

    Args:
        log_file: Optional path to a log file (parent directory is created)
        log_level: Logging level (default: "WARNING")
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_credentials,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: Optional[str] = None,
    correlation_id: Optional[str] = None,
    phase: Optional[str] = None,
    component: Optional[str] = None,
) -> BindableLogger:
    """
    Get structured logger with bound context.

    Args:
        name: Logger name, normally the caller's __name__
        correlation_id: Correlation ID for run tracing (generates UUID if not provided)
        phase: Pipeline phase (e.g., "fetch", "analysis")
        component: Component name (e.g., "profile_fetcher", "gemini_client")

    Returns:
        BoundLogger with correlation_id, phase, and component bound to context
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    logger = structlog.get_logger(name) if name else structlog.get_logger()

    if correlation_id:
        logger = logger.bind(correlation_id=correlation_id)
    if phase:
        logger = logger.bind(phase=phase)
    if component:
        logger = logger.bind(component=component)

    return logger
