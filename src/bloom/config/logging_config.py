"""
Bloom Logging Configuration

Structured logging with:
- Correlation ID tracking for request tracing
- Redaction of secrets and of child-authored check-in content
- JSON output for production, console output for development

PRIVACY: Prompt answers, notes, triggers, coping strategies and
expression data must never reach log sinks. Their keys match the
`to_dict()` field names, so a logged session or entry is scrubbed too.
"""

import logging
import sys
from typing import Any

import structlog

from bloom import __version__
from bloom.config.settings import Settings

REDACTED = "[REDACTED]"

# Key fragments marking secrets, matched anywhere in a key
SECRET_PATTERNS: frozenset[str] = frozenset({
    "password",
    "token",
    "secret",
    "dsn",
    "authorization",
    "credential",
})

# Check-in fields holding what a child wrote, said or drew
CHILD_CONTENT_KEYS: frozenset[str] = frozenset({
    "response",
    "response_value",
    "pending_response",
    "notes",
    "triggers",
    "coping_strategies",
    "data",
})


def is_sensitive_key(key: str) -> bool:
    key_lower = key.lower()
    if key_lower in CHILD_CONTENT_KEYS:
        return True
    return any(pattern in key_lower for pattern in SECRET_PATTERNS)


def _redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Redact sensitive data from log entries.

    Walks nested dicts and lists. Values under secret-like keys or
    child content keys are replaced.
    """
    def redact_value(key: str, value: Any) -> Any:
        if is_sensitive_key(key):
            return REDACTED

        if isinstance(value, dict):
            return {k: redact_value(k, v) for k, v in value.items()}
        elif isinstance(value, list):
            return [redact_value(key, item) for item in value]

        return value

    return {key: redact_value(key, value) for key, value in event_dict.items()}


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add service-level context to all log entries."""
    event_dict["service"] = "bloom-backend"
    event_dict["version"] = __version__
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Get structlog processors based on environment.

    Args:
        is_development: Whether running in development mode

    Returns:
        List of log processors
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive_data,
        _add_service_context,
    ]

    if is_development:
        shared_processors.extend([
            structlog.processors.ExceptionPrettyPrinter(),
            structlog.dev.ConsoleRenderer(colors=True),
        ])
    else:
        shared_processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])

    return shared_processors


def configure_logging(settings: Settings) -> None:
    """
    Configure application logging.

    Should be called once during application startup.

    Args:
        settings: Application settings
    """
    is_development = settings.env == "development"
    log_level = getattr(logging, settings.log_level.upper())

    structlog.configure(
        processors=get_processors(is_development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Quiet noisy libraries
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """
    Bind correlation ID to current context.

    All subsequent log entries in this context will include
    the correlation ID for request tracing.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Clear all context variables (call at end of request)."""
    structlog.contextvars.clear_contextvars()
