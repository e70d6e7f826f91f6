"""
Artifact cleanup.

Two tiers:
- Transient files (.aux, .dvi, .log, ...) are always safe to delete.
- Outputs (.ps, .pdf) are only deleted when their .tex source still exists,
  since an output without a source cannot be regenerated.

Cleaning the secondary format always cleans the primary format first,
which always cleans transient files first:

    transient -> primary outputs -> secondary outputs

The wipe variants follow the same cascade without checking for sources.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from texmake.config import BuildConfig, OutputFormat
from texmake.contexts.cleaning.logger import _log_debug, _log_info
from texmake.contexts.cleaning.remover import Remover

TRANSIENT_PATTERNS = ["*.aux", "*.dvi", "*.log", "*.toc", "texput.log", "*.bak", "*~"]


@dataclass
class CleanupReport:
    """
    What a cleanup pass did.

    Attributes:
        removed: Files the removal command was applied to
        left: Outputs kept because no .tex source exists
        failed: Files whose removal failed
    """

    removed: List[Path] = field(default_factory=list)
    left: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)

    def extend(self, other: "CleanupReport") -> "CleanupReport":
        self.removed.extend(other.removed)
        self.left.extend(other.left)
        self.failed.extend(other.failed)
        return self


def _remover(config: BuildConfig) -> Remover:
    return Remover(config.rm, cwd=config.workdir)


def _outputs(directory: Path, fmt: OutputFormat) -> List[Path]:
    return sorted(path for path in directory.glob(f"*{fmt.suffix}") if path.is_file())


def _remove(path: Path, remover: Remover, report: CleanupReport) -> None:
    _log_info(f"{remover.command} {path.name}")
    if remover.remove(path):
        report.removed.append(path)
    else:
        report.failed.append(path)


def clean_transient(config: BuildConfig) -> CleanupReport:
    """Remove auxiliary, log, table-of-contents and backup files unconditionally."""
    remover = _remover(config)
    report = CleanupReport()

    seen = set()
    for pattern in TRANSIENT_PATTERNS:
        for path in sorted(config.workdir.glob(pattern)):
            if path in seen or not path.is_file():
                continue
            seen.add(path)
            _remove(path, remover, report)

    if not seen:
        _log_debug("No transient files found")
    return report


def _clean_format(fmt: OutputFormat, config: BuildConfig) -> CleanupReport:
    remover = _remover(config)
    report = CleanupReport()

    for output in _outputs(config.workdir, fmt):
        source = output.with_suffix(".tex")
        if source.is_file():
            _remove(output, remover, report)
        else:
            _log_info(f"Leaving {output.name} (no source file exists)")
            report.left.append(output)
    return report


def clean_outputs(fmt: OutputFormat, config: BuildConfig) -> CleanupReport:
    """
    Remove outputs of a format whose .tex source exists, cascading.

    Primary format: transient cleanup, then primary outputs.
    Secondary format: the primary cascade, then secondary outputs.
    """
    if fmt is config.primary_format:
        report = clean_transient(config)
    else:
        report = clean_outputs(config.primary_format, config)
    return report.extend(_clean_format(fmt, config))


def clean_all(config: BuildConfig) -> CleanupReport:
    """Careful cleanup of both formats (the full cascade)."""
    return clean_outputs(config.secondary_format, config)


def _wipe_format(fmt: OutputFormat, config: BuildConfig) -> CleanupReport:
    remover = _remover(config)
    report = CleanupReport()
    for output in _outputs(config.workdir, fmt):
        _remove(output, remover, report)
    return report


def wipe_outputs(fmt: OutputFormat, config: BuildConfig) -> CleanupReport:
    """Remove every output of a format without checking for sources, cascading."""
    if fmt is config.primary_format:
        report = clean_transient(config)
    else:
        report = wipe_outputs(config.primary_format, config)
    return report.extend(_wipe_format(fmt, config))


def wipe_all(config: BuildConfig) -> CleanupReport:
    """Unconditional removal of transient files and all outputs of both formats."""
    return wipe_outputs(config.secondary_format, config)
