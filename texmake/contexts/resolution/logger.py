"""
Resolution context logger.

Provides logging interface for the resolution context with automatic [resolve] prefix.
All resolution modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[resolve]"


def _log_info(message: str) -> None:
    """Log info message with [resolve] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [resolve] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
