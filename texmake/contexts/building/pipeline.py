"""
Format pipeline.

Compiles a LaTeX source into the primary format and converts the primary
output into the secondary format:

    PostScript primary:  latex x.tex; latex x.tex; dvips -o x.ps x.dvi
                         ps2pdf x.ps x.pdf            (secondary)
    PDF primary:         pdflatex x.tex; pdflatex x.tex
                         pdf2ps x.pdf x.ps            (secondary)

Outputs that are not older than what they are derived from are left alone,
so repeated runs converge without invoking any tool.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from texmake.config import BuildConfig, OutputFormat
from texmake.contexts.building.diagnostics import read_latex_log
from texmake.contexts.building.logger import (
    _log_warning,
    log_build_result,
    log_build_start,
)
from texmake.contexts.building.tools import run_tool, tool_argv
from texmake.contexts.resolution import resolve_sources
from texmake.exceptions import SourceNotFoundError, UnknownTargetError
from texmake.utils.pdf_processing import page_count

# First pass writes the .aux file, second pass resolves references and the TOC
LATEX_PASSES = 2


@dataclass
class BuildResult:
    """
    Result of one build step.

    Attributes:
        source: The .tex source
        output: The file this step produces
        output_format: Format of output
        skipped: Output was already up to date, no tool was run
        commands: Argument vectors of the tools that were run
        errors: Errors parsed from the LaTeX log (compile steps only)
        warnings: Warnings parsed from the LaTeX log (compile steps only)
        page_count: Pages of a PDF output, if readable
        prerequisite: Primary build result a secondary step depended on
    """

    source: Path
    output: Path
    output_format: OutputFormat
    skipped: bool = False
    commands: List[List[str]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None
    prerequisite: Optional["BuildResult"] = None


def is_up_to_date(target: Path, *dependencies: Path) -> bool:
    """True if target exists and is not older than any existing dependency."""
    if not target.exists():
        return False
    target_mtime = target.stat().st_mtime
    return all(
        target_mtime >= dependency.stat().st_mtime
        for dependency in dependencies
        if dependency.exists()
    )


def _run(command: str, args: Sequence[str], config: BuildConfig, commands: List[List[str]]) -> None:
    run_tool(command, args, cwd=config.workdir)
    commands.append(tool_argv(command, args))


def _source_for(base: str, config: BuildConfig) -> Path:
    source = config.workdir / f"{base}.tex"
    if not source.is_file():
        raise SourceNotFoundError(f"No LaTeX source found: {source.name}", directory=config.workdir)
    return source


def _finish(result: BuildResult) -> BuildResult:
    if not result.output.exists():
        _log_warning(f"{result.output.name} was not produced")
    elif result.output_format is OutputFormat.PDF:
        result.page_count = page_count(result.output)
    return result


def build_primary(base: str, config: BuildConfig, verbose: bool = False) -> BuildResult:
    """
    Compile <base>.tex into the primary format.

    Runs the typesetting tool exactly twice, then dvips when PostScript is
    primary. The first failing tool aborts the build; partial outputs stay.

    Args:
        base: Source base name (without .tex)
        config: Build configuration
        verbose: Log more LaTeX warnings

    Returns:
        BuildResult; skipped=True if the output was already up to date

    Raises:
        SourceNotFoundError: <base>.tex does not exist
        ToolInvocationError: A tool exited non-zero
        MissingToolError: A tool is not installed
    """
    source = _source_for(base, config)
    fmt = config.primary_format
    output = config.workdir / f"{base}{fmt.suffix}"
    result = BuildResult(source=source, output=output, output_format=fmt)

    if is_up_to_date(output, source):
        result.skipped = True
        log_build_result(result, verbose=verbose)
        return result

    log_build_start(base, output.name, LATEX_PASSES)
    typesetter = config.pdflatex if fmt is OutputFormat.PDF else config.latex
    for _ in range(LATEX_PASSES):
        _run(typesetter, [source.name], config, result.commands)

    if fmt is OutputFormat.PS:
        _run(config.dvips, ["-o", output.name, f"{base}.dvi"], config, result.commands)

    result.errors, result.warnings = read_latex_log(config.workdir / f"{base}.log")
    _finish(result)
    log_build_result(result, verbose=verbose)
    return result


def build_secondary(base: str, config: BuildConfig, verbose: bool = False) -> BuildResult:
    """
    Produce <base> in the secondary format by converting the primary output.

    The primary output is brought up to date first; it is rebuilt only when
    missing or older than the source.

    Raises:
        SourceNotFoundError: <base>.tex does not exist
        ToolInvocationError: A tool exited non-zero
        MissingToolError: A tool is not installed
    """
    primary = build_primary(base, config, verbose=verbose)
    fmt = config.secondary_format
    output = config.workdir / f"{base}{fmt.suffix}"
    result = BuildResult(
        source=primary.source, output=output, output_format=fmt, prerequisite=primary
    )

    if is_up_to_date(output, primary.output, primary.source):
        result.skipped = True
        log_build_result(result, verbose=verbose)
        return result

    converter = config.ps2pdf if fmt is OutputFormat.PDF else config.pdf2ps
    _run(converter, [primary.output.name, output.name], config, result.commands)

    _finish(result)
    log_build_result(result, verbose=verbose)
    return result


def build_format(
    fmt: Optional[OutputFormat], config: BuildConfig, verbose: bool = False
) -> List[BuildResult]:
    """
    Resolve the source(s) and build the requested format.

    Args:
        fmt: Requested format; None means the primary format (default goal)
        config: Build configuration
        verbose: Log more LaTeX warnings

    Returns:
        One BuildResult per resolved source, in order

    Raises:
        SourceNotFoundError, AmbiguousSourceError: Resolution failed (nothing is run)
        ToolInvocationError, MissingToolError: A build step failed
    """
    fmt = fmt or config.primary_format
    secondary = fmt is config.secondary_format
    bases = resolve_sources(config, secondary=secondary)

    builder = build_secondary if secondary else build_primary
    return [builder(base, config, verbose=verbose) for base in bases]


def build_target(name: str, config: BuildConfig, verbose: bool = False) -> BuildResult:
    """
    Build an explicitly named goal.

    "paper.tex" builds the primary format of paper; "paper.ps" and
    "paper.pdf" build exactly that file.

    Raises:
        UnknownTargetError: The name has a directory part or no .tex, .ps
            or .pdf suffix (matched case-sensitively, like make targets)
    """
    path = Path(name)
    if path.name != name:
        raise UnknownTargetError(name)

    suffix = path.suffix
    base = path.stem

    if not base or suffix not in (".tex", ".ps", ".pdf"):
        raise UnknownTargetError(name)

    if suffix == ".tex" or suffix == config.primary_format.suffix:
        return build_primary(base, config, verbose=verbose)
    return build_secondary(base, config, verbose=verbose)
