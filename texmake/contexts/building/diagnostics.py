"""
LaTeX log inspection.

Reads the .log file TeX leaves behind and pulls out errors and warnings
for reporting. Build success is decided by exit status, not by this.
"""

import re
from pathlib import Path
from typing import List, Optional, Tuple

ERROR_PATTERN = re.compile(r"^! (.+)$")

# TeX follows an error with "l.<n> <input up to the error>" a few lines later
LOCATION_PATTERN = re.compile(r"^l\.(\d+)(?: (.*))?$")
LOCATION_LOOKAHEAD = 10

WARNING_PATTERNS = [
    re.compile(r"LaTeX Warning: (.+)", re.MULTILINE),
    re.compile(r"Package \w+ Warning: (.+)", re.MULTILINE),
    re.compile(r"Overfull \\hbox \((.+)\)", re.MULTILINE),
    re.compile(r"Underfull \\hbox \((.+)\)", re.MULTILINE),
]


def _error_location(lines: List[str], start: int) -> Optional[str]:
    for line in lines[start : start + LOCATION_LOOKAHEAD]:
        if ERROR_PATTERN.match(line):
            return None
        match = LOCATION_PATTERN.match(line)
        if match:
            context = (match.group(2) or "").strip()
            return f"l.{match.group(1)} {context}".rstrip()
    return None


def parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Parse LaTeX log content for errors and warnings.

    Errors are the "! ..." lines. When TeX reports where an error happened,
    the "l.<n>" line is appended in parentheses, e.g.
    "Undefined control sequence. (l.4 This has an \\undefinedcommand)".

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    lines = log_content.splitlines()
    errors = []
    for index, line in enumerate(lines):
        match = ERROR_PATTERN.match(line)
        if not match:
            continue
        message = match.group(1).strip()
        location = _error_location(lines, index + 1)
        errors.append(f"{message} ({location})" if location else message)

    warnings = []
    for compiled in WARNING_PATTERNS:
        for match in compiled.finditer(log_content):
            warnings.append(match.group(1).strip())

    return errors, warnings


def read_latex_log(log_file: Path) -> Tuple[List[str], List[str]]:
    """Parse a .log file if it exists; ([], []) otherwise."""
    if not log_file.exists():
        return [], []
    # TeX writes log files in latin-1 compatible bytes (font metadata is not UTF-8)
    return parse_latex_log(log_file.read_text(encoding="latin-1"))
