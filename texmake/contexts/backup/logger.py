"""
Backup context logger.

Provides logging interface for the backup context with automatic [backup] prefix.
All backup modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[backup]"


def _log_info(message: str) -> None:
    """Log info message with [backup] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [backup] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [backup] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [backup] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
