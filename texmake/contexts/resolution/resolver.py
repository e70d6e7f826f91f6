"""
Source resolution.

Decides which LaTeX source (by base name, without the .tex suffix) a build
should act on, either from the configured SRC list or by scanning the
working directory.
"""

from pathlib import Path
from typing import List

from texmake.config import BuildConfig, OutputFormat
from texmake.contexts.resolution.logger import _log_debug, _log_info
from texmake.exceptions import AmbiguousSourceError, SourceNotFoundError

# Suffixes stripped from explicitly named sources
NAMED_SUFFIXES = (".tex", ".ps", ".pdf")


def tex_files(directory: Path) -> List[Path]:
    """All regular *.tex files in directory, in lexical order."""
    return sorted(path for path in Path(directory).glob("*.tex") if path.is_file())


def explicit_sources(src: str) -> List[str]:
    """
    Split an explicit SRC setting into base names.

    Args:
        src: Whitespace separated names, e.g. "paper.tex notes"

    Returns:
        Base names in the given order, duplicates removed

    Example:
        explicit_sources("paper.tex slides.pdf notes")
        # ["paper", "slides", "notes"]
    """
    bases = []
    for name in src.split():
        for suffix in NAMED_SUFFIXES:
            if name.endswith(suffix) and len(name) > len(suffix):
                name = name[: -len(suffix)]
                break
        if name not in bases:
            bases.append(name)
    return bases


def find_source(directory: Path, primary_format: OutputFormat, secondary: bool = False) -> str:
    """
    Find the single LaTeX source in a directory.

    With several .tex files a primary build gives up straight away. A secondary
    build can still guess: if exactly one existing primary output has a
    matching .tex file, that source is the one the user built last.

    Args:
        directory: Directory to scan
        primary_format: Format whose outputs are used for disambiguation
        secondary: True when resolving for a secondary-format build

    Returns:
        Base name of the selected source

    Raises:
        SourceNotFoundError: No .tex file exists
        AmbiguousSourceError: Several .tex files and no unique guess
    """
    sources = tex_files(directory)

    if not sources:
        raise SourceNotFoundError(directory=Path(directory))

    if len(sources) == 1:
        _log_debug(f"Found single source: {sources[0].name}")
        return sources[0].stem

    if not secondary:
        raise AmbiguousSourceError(sources)

    source_stems = {path.stem for path in sources}
    built = [
        path.stem
        for path in sorted(Path(directory).glob(f"*{primary_format.suffix}"))
        if path.is_file() and path.stem in source_stems
    ]
    if len(built) != 1:
        raise AmbiguousSourceError(sources)

    _log_info(f"Several sources found; using {built[0]}.tex (has {built[0]}{primary_format.suffix})")
    return built[0]


def resolve_sources(config: BuildConfig, secondary: bool = False) -> List[str]:
    """
    Resolve the base names a build should act on.

    An explicit SRC setting always wins; otherwise the working directory
    is scanned with find_source().
    """
    named = explicit_sources(config.src)
    if named:
        _log_debug(f"Using configured sources: {', '.join(named)}")
        return named
    return [find_source(config.workdir, config.primary_format, secondary=secondary)]
