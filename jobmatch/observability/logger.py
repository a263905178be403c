"""
Logger configuration.

Console logging for the process: one stdout handler on the root logger,
timestamped records, and quieter provider client libraries.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty HTTP/gRPC layers under the Gemini client
NOISY_LOGGERS = ("httpx", "httpcore", "google", "google_genai", "grpc", "urllib3")


def configure_logging(level: str = "INFO") -> None:
    """
    Install the console handler on the root logger.

    Safe to call repeatedly; previous root handlers are replaced.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
