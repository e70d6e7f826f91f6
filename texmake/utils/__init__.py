"""
Shared utilities for texmake.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps
- PDF inspection
"""

from texmake.utils.timestamp import format_timestamp, now_exact

__all__ = ["format_timestamp", "now_exact"]
