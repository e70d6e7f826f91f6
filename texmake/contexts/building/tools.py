"""
External tool invocation.

Every tool (latex, pdflatex, dvips, ps2pdf, pdf2ps) is configured as a
command string, so extra flags can be part of the setting:

    LATEX=latex -interaction=nonstopmode
"""

import shlex
import subprocess
from pathlib import Path
from typing import List, Sequence

from texmake.contexts.building.logger import _log_debug, _log_error, _log_info, log_tool_output
from texmake.exceptions import ConfigurationError, MissingToolError, ToolInvocationError


def tool_argv(command: str, args: Sequence[str]) -> List[str]:
    """Split a configured command string and append the arguments."""
    argv = shlex.split(command)
    if not argv:
        raise ConfigurationError("Empty tool command configured")
    return argv + [str(arg) for arg in args]


def run_tool(command: str, args: Sequence[str], cwd: Path) -> subprocess.CompletedProcess:
    """
    Run one external tool to completion.

    stdin is closed so that TeX cannot sit at an interactive error prompt;
    it reads EOF and stops with "Emergency stop" instead.

    Args:
        command: Configured command string (e.g. "pdflatex")
        args: Arguments appended to the command
        cwd: Working directory for the tool

    Returns:
        CompletedProcess with captured stdout/stderr

    Raises:
        MissingToolError: The program does not exist
        ToolInvocationError: The program exited with a non-zero status
    """
    argv = tool_argv(command, args)
    display = " ".join(shlex.quote(part) for part in argv)
    _log_info(display)

    try:
        result = subprocess.run(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
        )
    except FileNotFoundError as e:
        raise MissingToolError(argv[0]) from e

    log_tool_output(argv[0], result.stdout, result.stderr)

    if result.returncode != 0:
        _log_error(f"{argv[0]} exited with status {result.returncode}")
        # Show the tail of the output on failure even without --verbose
        tail = (result.stdout or result.stderr).strip().splitlines()[-15:]
        for line in tail:
            _log_error(f"  {line}")
        raise ToolInvocationError(argv, result.returncode, result.stdout, result.stderr)

    _log_debug(f"{argv[0]} finished")
    return result
