"""Timestamp formatting utilities."""

from datetime import datetime


def now_exact() -> str:
    """Current local time in ISO 8601 with microseconds."""
    return datetime.now().isoformat()


def format_timestamp(iso_timestamp: str) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549")
        # "2025-11-13 18:45:40"
    """
    try:
        return datetime.fromisoformat(iso_timestamp).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, TypeError):
        # Return original if parsing fails
        return iso_timestamp
