"""Exceptions raised by texmake, each carrying the process exit code it maps to."""

from pathlib import Path
from typing import List, Optional, Sequence


class TexmakeError(Exception):
    """
    Base class for every fatal texmake error.

    Attributes:
        message: Error description
        exit_code: Process exit status the CLI terminates with
    """

    exit_code = 2

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(TexmakeError):
    """Raised when a configuration value is unknown or not of the accepted form."""


class SourceNotFoundError(TexmakeError):
    """Raised when no LaTeX source can be found for a build."""

    def __init__(self, message: str = "No LaTeX source found", directory: Optional[Path] = None):
        self.directory = directory
        super().__init__(message)


class AmbiguousSourceError(TexmakeError):
    """
    Raised when several .tex files are present and none can be picked.

    Attributes:
        candidates: The .tex files that were considered
    """

    def __init__(self, candidates: Sequence[Path]):
        self.candidates: List[Path] = list(candidates)
        names = ", ".join(path.name for path in self.candidates)
        super().__init__(
            "More than one LaTeX files found - specify which one to use"
            + (f" ({names})" if names else "")
        )


class UnknownTargetError(TexmakeError):
    """Raised when an explicit goal is neither a .tex, .ps nor .pdf file name."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(
            f"Don't know how to process '{target}' (file name correct?), "
            'try "texmake help" for help'
        )


class MissingToolError(TexmakeError):
    """Raised when an external program cannot be found on PATH."""

    def __init__(self, tool: str, message: Optional[str] = None):
        self.tool = tool
        super().__init__(message or f"Required program not found: {tool}")


class NothingSavedError(TexmakeError):
    """Raised by restore/show-saved when no backup repository exists yet."""

    def __init__(self, git_dir: Path):
        self.git_dir = git_dir
        super().__init__("Looks like nothing has been saved yet!")


class ToolInvocationError(TexmakeError):
    """
    Raised when an external tool exits with a non-zero status.

    The CLI exits with the tool's own return code.

    Attributes:
        command: Full argument vector that was run
        returncode: Exit status of the tool
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(self, command: Sequence[str], returncode: int, stdout: str = "", stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        # Killed by a signal: exit like a shell would (128 + signal number)
        self.exit_code = returncode if returncode > 0 else 128 - returncode
        super().__init__(f"{' '.join(self.command)} failed with exit status {returncode}")
