"""
Structured logging utilities for Mutabaah library.

Provides a configured logger and helper functions for consistent logging.
"""

import logging
import sys
from typing import Optional


# Default format for Mutabaah logs
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "mutabaah") -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (default: "mutabaah")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure logging for the Mutabaah library.

    Args:
        level: Logging level (default: INFO)
        format_string: Log format string (default: DEFAULT_FORMAT)
        date_format: Date format string (default: DEFAULT_DATE_FORMAT)
        stream: Output stream (default: sys.stderr)

    Returns:
        Configured root logger for mutabaah
    """
    logger = logging.getLogger("mutabaah")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            format_string or DEFAULT_FORMAT,
            datefmt=date_format or DEFAULT_DATE_FORMAT,
        )
    )
    logger.addHandler(handler)

    return logger


def enable_debug_logging() -> None:
    """Enable debug-level logging for the Mutabaah library."""
    configure_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Disable all Mutabaah logging."""
    logger = logging.getLogger("mutabaah")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())


_logger = get_logger("mutabaah.session")


def log_session_start(surah_id: int | None, sessions_used: int) -> None:
    """Log follow-along session start."""
    _logger.info(f"Follow-along started: Surah {surah_id} (session #{sessions_used} today)")


def log_session_complete(
    surah_id: int,
    verses_recited: int,
    accuracy: int,
    duration: int,
) -> None:
    """Log follow-along session completion."""
    _logger.info(
        f"Follow-along finished: Surah {surah_id}, {verses_recited} verses, "
        f"accuracy={accuracy}%, duration={duration}s"
    )


def log_verse_matched(verse_number: int, confidence: float) -> None:
    """Log a verse transition."""
    _logger.debug(f"Matched verse {verse_number}: confidence={confidence:.2f}")


def log_warning(message: str, **context) -> None:
    """Log a warning with optional context."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.warning(f"{message} ({ctx_str})")
    else:
        _logger.warning(message)


def log_error(message: str, exc_info: bool = False, **context) -> None:
    """Log an error with optional context and exception info."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.error(f"{message} ({ctx_str})", exc_info=exc_info)
    else:
        _logger.error(message, exc_info=exc_info)
