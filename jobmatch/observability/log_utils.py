"""
Structured logging helpers.

Turns analysis identifiers, questions, chunk lists and domain models into
short log-safe strings and attaches them to records as extras. Keys that
collide with LogRecord attributes are prefixed instead of raising.

Dependencies: logging (stdlib), enum, pydantic
System role: Logging helper functions
"""

import enum
import logging
from typing import Any

from pydantic import BaseModel

# Attributes set by LogRecord itself; passing them as extras raises KeyError
RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a value for a log record.

    Strings pass through, enums log their value, models log their class
    and identifier, containers log their size.

    Args:
        value: Value to render
        max_length: Length after which the text is truncated

    Returns:
        str: Log-safe text
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, enum.Enum):
            text = str(value.value)
        elif isinstance(value, str):
            text = value
        elif isinstance(value, BaseModel):
            identifier = getattr(value, "id", None)
            text = f"{type(value).__name__}({identifier})" if identifier else type(value).__name__
        elif isinstance(value, (list, tuple, set, frozenset)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        elif isinstance(value, float):
            text = f"{value:.4f}"
        else:
            text = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def _extras(context: dict[str, Any]) -> dict[str, str]:
    extras = {}
    for key, value in context.items():
        name = f"ctx_{key}" if key in RESERVED_RECORD_KEYS else key
        extras[name] = safe_log_value(value)
    return extras


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with rendered context extras.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Context values (analysis_id, question, counts, ...)
    """
    logger.log(level, message, extra=_extras(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with its type, message and context extras.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being handled
        **context: Context values
    """
    extras = _extras(context)
    extras["error_type"] = type(exc).__name__
    extras["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extras)
