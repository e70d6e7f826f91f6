"""
Cleaning context logger.

Provides logging interface for the cleaning context with automatic [clean] prefix.
All cleaning modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[clean]"


def _log_info(message: str) -> None:
    """Log info message with [clean] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [clean] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [clean] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
