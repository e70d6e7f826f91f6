"""
Building Context

Responsibilities:
- Compiles LaTeX sources into the primary format (PostScript or PDF)
- Converts primary outputs into the secondary format
- Skips outputs that are already up to date
- Reports LaTeX errors and warnings from the log file

Owns: Tool invocation, output naming
Never: Deletes files
"""

from texmake.contexts.building.pipeline import (
    LATEX_PASSES,
    BuildResult,
    build_format,
    build_primary,
    build_secondary,
    build_target,
    is_up_to_date,
)

__all__ = [
    "LATEX_PASSES",
    "BuildResult",
    "build_format",
    "build_primary",
    "build_secondary",
    "build_target",
    "is_up_to_date",
]
