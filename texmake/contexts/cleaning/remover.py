"""
File removal primitive.

Built from the RM setting. "rm -f" (or any rm invocation) deletes natively,
":" turns every removal into a no-op that is still reported, and any other
command is run with the file name appended:

    texmake -D RM=: clean-all          # show what would go, delete nothing
    texmake -D "RM=gio trash" clean    # move to trash instead
"""

import shlex
import subprocess
from pathlib import Path

from texmake.contexts.cleaning.logger import _log_debug, _log_warning

NOOP_COMMANDS = {":", "true"}


class Remover:
    """
    Best-effort file removal; failures are logged and reported, never raised.

    Attributes:
        command: The configured removal command string
        argv: The command split into arguments
    """

    def __init__(self, command: str, cwd: Path):
        self.command = command
        self.argv = shlex.split(command)
        self.cwd = cwd

    @property
    def disabled(self) -> bool:
        """True when removal has been switched off (RM=: or an empty RM)."""
        return not self.argv or self.argv[0] in NOOP_COMMANDS

    @property
    def native(self) -> bool:
        return not self.disabled and Path(self.argv[0]).name == "rm"

    def remove(self, path: Path) -> bool:
        """
        Apply the removal command to one file.

        Returns:
            True if the command was applied (a disabled remover counts),
            False if the removal failed
        """
        if self.disabled:
            _log_debug(f"Removal disabled, keeping {path.name}")
            return True

        if self.native:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                _log_warning(f"Could not remove {path.name}: {e}")
                return False
            return True

        try:
            result = subprocess.run(
                self.argv + [str(path)], cwd=self.cwd, capture_output=True, text=True
            )
        except FileNotFoundError:
            _log_warning(f"Removal command not found: {self.argv[0]}")
            return False
        if result.returncode != 0:
            _log_warning(
                f"'{self.command} {path.name}' failed with status {result.returncode}: "
                f"{result.stderr.strip()}"
            )
            return False
        return True
