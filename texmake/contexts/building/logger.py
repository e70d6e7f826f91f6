"""
Building context logger.

Provides logging interface for the building context with automatic [build] prefix.
All building modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[build]"


def _log_info(message: str) -> None:
    """Log info message with [build] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [build] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [build] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [build] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [build] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level building-specific logging helpers


def log_build_start(base: str, output_name: str, passes: int) -> None:
    """Log start of a primary compilation."""
    _log_info(f"Compiling {base}.tex -> {output_name}")
    _log_debug(f"  Passes: {passes}")


def log_tool_output(command: str, stdout: str, stderr: str) -> None:
    """
    Log captured tool output verbatim at debug level.

    Uses opt(raw=True) so multi-line output keeps its original formatting.
    """
    if stdout:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\n{command} STDOUT:\n{'=' * 80}\n{stdout}\n")
    if stderr:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\n{command} STDERR:\n{'=' * 80}\n{stderr}\n")


def log_build_result(result, verbose: bool = False) -> None:
    """
    Log the outcome of a build step with diagnostics.

    Args:
        result: BuildResult from the pipeline
        verbose: Show more of the parsed LaTeX warnings
    """
    if result.skipped:
        _log_info(f"'{result.output.name}' is up to date.")
        return

    _log_success(f"Built {result.output.name}")
    if result.page_count is not None:
        _log_debug(f"  Pages: {result.page_count}")

    for i, err in enumerate(result.errors[:5], 1):
        _log_error(f"  Error {i}: {err}")

    if result.warnings:
        _log_warning(f"{len(result.warnings)} LaTeX warnings detected")
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")
