"""Structured logging configuration for sensory-profile."""

import logging
import sys

PACKAGE_LOGGER = "sensory_profile"


class StructuredFormatter(logging.Formatter):
    """key=value structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured output."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        parts = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(parts)


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Install the structured formatter on the package logger.

    Calling this again only updates the level.

    Args:
        level: Log level name or number.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    return logger
