#!/usr/bin/env python3
"""
texmake command line interface

Compiles LaTeX sources into PostScript or PDF, cleans up build products
and keeps Git-backed snapshots of the working directory.

Commands:
    ps / pdf     - Build PostScript or PDF (no command builds the primary format)
    build        - Build explicitly named files (paper.tex, paper.ps, paper.pdf)
    clean        - Remove transient files (.aux, .dvi, .log, .toc, backups)
    clean-ps     - Careful cleanup of outputs that have a source (cascading)
    clean-pdf
    cleanup      - Careful cleanup of both formats
    clean-all
    wipe-ps      - Unconditional removal of outputs (cascading)
    wipe-pdf
    wipe-all
    save         - Snapshot the directory into the backup repository
    restore      - Restore files deleted since the last snapshot
    show-saved   - List files in the backup repository
    help         - Show usage

Examples:\n

    texmake                                   # Build the only .tex file here

    texmake pdf                               # Build PDF (via PostScript by default)

    texmake --pdflatex                        # Use pdflatex, PDF is primary

    texmake build stau-decay.tex              # Several sources: name the one to build

    texmake -D RM=: clean-all                 # Show what would be removed
"""

import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from typing_extensions import Annotated

from texmake import __version__
from texmake.config import BuildConfig, OutputFormat, config_summary, load_config
from texmake.contexts.backup import restore, save, show_saved
from texmake.contexts.building import BuildResult, build_format, build_target
from texmake.contexts.cleaning import (
    CleanupReport,
    clean_all,
    clean_outputs,
    clean_transient,
    wipe_all,
    wipe_outputs,
)
from texmake.exceptions import TexmakeError
from texmake.utils.logger import setup_logger

HELP_MESSAGE = """\
texmake: compiles LaTeX source into PostScript or PDF.

If only one TeX file is present in the current directory
    texmake

More specifically
    texmake ps
or
    texmake pdf
will generate, respectively, PostScript or PDF.

If more than one TeX file is present in the current directory,
name the one to use
    texmake build stau-decay.tex
or
    texmake --src stau-decay.tex pdf

To remove .aux, .dvi and so on files, run
    texmake clean

Settings (USE_PDFLATEX, LATEX, PDFLATEX, DVIPS, PS2PDF, PDF2PS, RM, SRC, GIT, ...)
come from texmake.yaml, TEXMAKE_<NAME> environment variables (.env is read)
or -D NAME=VALUE on the command line.
"""


@dataclass
class CliState:
    config: BuildConfig
    verbose: bool = False


app = typer.Typer(
    help="Compile LaTeX into PostScript or PDF, clean up safely, and back up the working directory",
    add_completion=False,
    invoke_without_command=True,
)


def _error(message: str) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn texmake errors into a red message and the error's exit code."""
    try:
        yield
    except TexmakeError as e:
        _error(e.message)
        raise typer.Exit(code=e.exit_code)


def _state(ctx: typer.Context) -> CliState:
    return ctx.find_root().obj


def _report_builds(results: List[BuildResult]) -> None:
    for result in results:
        if result.skipped:
            continue
        typer.secho(f"✓ {result.output.name}", fg=typer.colors.GREEN, bold=True)


def _echo_file_name(name: str) -> None:
    # Raw bytes, so names that are not valid UTF-8 print as git stores them
    typer.echo(os.fsencode(name))


def _report_cleanup(report: CleanupReport) -> None:
    typer.echo(f"Removed: {len(report.removed)}  Left: {len(report.left)}")
    if report.failed:
        typer.secho(f"Failed to remove: {len(report.failed)}", fg=typer.colors.YELLOW, err=True)
        for path in report.failed:
            typer.secho(f"  - {path.name}", fg=typer.colors.YELLOW, err=True)


@app.callback()
def main(
    ctx: typer.Context,
    directory: Annotated[
        Path,
        typer.Option("--dir", "-C", help="Directory holding the LaTeX sources"),
    ] = Path("."),
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="YAML settings file (default: texmake.yaml if present)"),
    ] = None,
    define: Annotated[
        Optional[List[str]],
        typer.Option("--define", "-D", help="Override a setting, e.g. -D RM=: (repeatable)"),
    ] = None,
    src: Annotated[
        Optional[str],
        typer.Option("--src", help="Explicit source file(s), whitespace separated"),
    ] = None,
    use_pdflatex: Annotated[
        Optional[bool],
        typer.Option(
            "--pdflatex/--latex",
            help="Make PDF (pdflatex) or PostScript (latex + dvips) the primary format",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show tool output and all diagnostics"),
    ] = False,
    log_file: Annotated[
        Optional[Path],
        typer.Option("--log-file", help="Also write a DEBUG-level log to this file"),
    ] = None,
):
    """Build the primary format when no command is given."""
    overrides = list(define or [])
    if src is not None:
        overrides.append(f"SRC={src}")
    if use_pdflatex is not None:
        overrides.append(f"USE_PDFLATEX={'true' if use_pdflatex else 'false'}")

    with _reporting_errors():
        config = load_config(directory, config_file=config_file, overrides=overrides)

    setup_logger(
        verbose=verbose,
        log_file=log_file,
        extra_provenance={"texmake": __version__, "Settings": "; ".join(config_summary(config))},
    )
    ctx.obj = CliState(config=config, verbose=verbose)

    if ctx.invoked_subcommand is None:
        with _reporting_errors():
            _report_builds(build_format(None, config, verbose=verbose))


@app.command("ps")
def ps_command(ctx: typer.Context):
    """Build PostScript."""
    state = _state(ctx)
    with _reporting_errors():
        _report_builds(build_format(OutputFormat.PS, state.config, verbose=state.verbose))


@app.command("pdf")
def pdf_command(ctx: typer.Context):
    """Build PDF."""
    state = _state(ctx)
    with _reporting_errors():
        _report_builds(build_format(OutputFormat.PDF, state.config, verbose=state.verbose))


@app.command("build")
def build_command(
    ctx: typer.Context,
    targets: Annotated[
        List[str],
        typer.Argument(help="Files to build: x.tex (primary format), x.ps or x.pdf"),
    ],
):
    """
    Build explicitly named files, in order.

    Examples:\n

        $ texmake build paper.tex            # Primary format of paper

        $ texmake build paper.pdf notes.ps   # Exactly these files
    """
    state = _state(ctx)
    with _reporting_errors():
        _report_builds([build_target(name, state.config, verbose=state.verbose) for name in targets])


@app.command("clean")
def clean_command(ctx: typer.Context):
    """Remove .aux, .dvi, .log, .toc and backup files."""
    with _reporting_errors():
        _report_cleanup(clean_transient(_state(ctx).config))


@app.command("clean-ps")
def clean_ps_command(ctx: typer.Context):
    """Remove PostScript files that have a .tex source (cascades from the primary format)."""
    with _reporting_errors():
        _report_cleanup(clean_outputs(OutputFormat.PS, _state(ctx).config))


@app.command("clean-pdf")
def clean_pdf_command(ctx: typer.Context):
    """Remove PDF files that have a .tex source (cascades from the primary format)."""
    with _reporting_errors():
        _report_cleanup(clean_outputs(OutputFormat.PDF, _state(ctx).config))


@app.command("cleanup")
@app.command("clean-all")
def clean_all_command(ctx: typer.Context):
    """Remove transient files and every output that has a .tex source."""
    with _reporting_errors():
        _report_cleanup(clean_all(_state(ctx).config))


@app.command("wipe-ps")
def wipe_ps_command(ctx: typer.Context):
    """Remove all PostScript files without checking for sources."""
    with _reporting_errors():
        _report_cleanup(wipe_outputs(OutputFormat.PS, _state(ctx).config))


@app.command("wipe-pdf")
def wipe_pdf_command(ctx: typer.Context):
    """Remove all PDF files without checking for sources."""
    with _reporting_errors():
        _report_cleanup(wipe_outputs(OutputFormat.PDF, _state(ctx).config))


@app.command("wipe-all")
def wipe_all_command(ctx: typer.Context):
    """Remove transient files and all outputs of both formats."""
    with _reporting_errors():
        _report_cleanup(wipe_all(_state(ctx).config))


@app.command("save")
def save_command(ctx: typer.Context):
    """Snapshot the working directory into the backup repository."""
    with _reporting_errors():
        save(_state(ctx).config)


@app.command("restore")
def restore_command(ctx: typer.Context):
    """Restore files deleted since the last snapshot."""
    with _reporting_errors():
        restored = restore(_state(ctx).config)
    for name in restored:
        _echo_file_name(name)


@app.command("show-saved")
def show_saved_command(ctx: typer.Context):
    """List the files held in the backup repository."""
    with _reporting_errors():
        saved = show_saved(_state(ctx).config)
    for name in saved:
        _echo_file_name(name)


@app.command("help")
def help_command(ctx: typer.Context):
    """Show usage."""
    typer.echo(HELP_MESSAGE)
    typer.echo(ctx.find_root().get_help())


if __name__ == "__main__":
    app()
