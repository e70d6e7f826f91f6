"""
Cleaning Context

Responsibilities:
- Removes transient LaTeX byproducts
- Removes PostScript/PDF outputs that can be regenerated from a source
- Wipes outputs unconditionally on request

Owns: File removal
Never: Touches .tex sources
"""

from texmake.contexts.cleaning.cleaner import (
    TRANSIENT_PATTERNS,
    CleanupReport,
    clean_all,
    clean_outputs,
    clean_transient,
    wipe_all,
    wipe_outputs,
)
from texmake.contexts.cleaning.remover import Remover

__all__ = [
    "TRANSIENT_PATTERNS",
    "CleanupReport",
    "Remover",
    "clean_all",
    "clean_outputs",
    "clean_transient",
    "wipe_all",
    "wipe_outputs",
]
