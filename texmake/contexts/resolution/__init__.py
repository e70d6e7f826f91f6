"""
Resolution Context

Responsibilities:
- Picks the .tex source a build acts on
- Honours an explicitly configured source list
- Disambiguates several sources by existing primary outputs

Owns: Source selection
Never: Modifies the filesystem
"""

from texmake.contexts.resolution.resolver import (
    explicit_sources,
    find_source,
    resolve_sources,
    tex_files,
)

__all__ = ["explicit_sources", "find_source", "resolve_sources", "tex_files"]
