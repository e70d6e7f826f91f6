"""
Git-backed save/restore of the working directory.

Snapshots live in a repository whose metadata directory is not ".git"
(".git-texmake-backups" by default), so they never clash with version
control the user may run in the same directory.
"""

import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from texmake.config import BuildConfig
from texmake.contexts.backup.logger import _log_debug, _log_error, _log_info, _log_success
from texmake.exceptions import MissingToolError, NothingSavedError, ToolInvocationError
from texmake.utils.timestamp import format_timestamp, now_exact

BACKUP_MESSAGE = "texmake backup performed on {timestamp}"


def _git_env(config: BuildConfig) -> Dict[str, str]:
    env = dict(os.environ)
    env.update(
        {
            "GIT_DIR": str(config.git_dir_path),
            "GIT_WORK_TREE": str(config.git_work_tree_path),
            "GIT_AUTHOR_NAME": config.git_author_name,
            "GIT_AUTHOR_EMAIL": config.git_author_email,
            "GIT_COMMITTER_NAME": config.git_author_name,
            "GIT_COMMITTER_EMAIL": config.git_author_email,
        }
    )
    return env


def _require_git(config: BuildConfig) -> List[str]:
    argv = shlex.split(config.git)
    if not argv or shutil.which(argv[0]) is None:
        raise MissingToolError(
            config.git,
            f"Need to have Git installed ('{config.git}') to use the save/restore features",
        )
    return argv


def _require_repository(config: BuildConfig) -> None:
    if not config.git_dir_path.is_dir():
        raise NothingSavedError(config.git_dir_path)


def _git(config: BuildConfig, *args: Union[str, bytes]) -> subprocess.CompletedProcess:
    """
    Run one git command with the backup repository environment.

    Output stays as bytes: file names in the repository need not be valid UTF-8.
    """
    argv = _require_git(config) + list(args)
    display = [_printable(arg) for arg in argv]
    _log_debug(" ".join(display))
    result = subprocess.run(
        argv,
        cwd=config.workdir,
        env=_git_env(config),
        capture_output=True,
    )
    if result.returncode != 0:
        stdout = result.stdout.decode(errors="replace")
        stderr = result.stderr.decode(errors="replace")
        _log_error(f"git {display[len(argv) - len(args)]} failed: {stderr.strip()}")
        raise ToolInvocationError(display, result.returncode, stdout, stderr)
    return result


def _file_names(listing: bytes) -> List[str]:
    """Split NUL-separated git output into file names, undecodable bytes preserved."""
    return [os.fsdecode(name) for name in listing.split(b"\0") if name]


def _printable(name: Union[str, bytes]) -> str:
    return os.fsencode(name).decode(errors="replace")


def _exclude_entry(config: BuildConfig) -> Optional[str]:
    """Ignore pattern for the metadata directory, or None if it lies outside the work tree."""
    try:
        relative = config.git_dir_path.resolve().relative_to(config.git_work_tree_path.resolve())
    except ValueError:
        return None
    if relative == Path("."):
        return None
    return f"/{relative.as_posix()}/"


def save(config: BuildConfig) -> bool:
    """
    Snapshot every file of the working tree.

    Creates the backup repository on first use and excludes its own
    metadata directory from it. Stages all additions, modifications and
    deletions, then commits with a timestamped message.

    Returns:
        True if a snapshot was committed, False if nothing had changed

    Raises:
        MissingToolError: git is not installed
        ToolInvocationError: A git command failed
    """
    _require_git(config)

    if not config.git_dir_path.is_dir():
        _git(config, "init", "-q")
        entry = _exclude_entry(config)
        if entry is not None:
            exclude = config.git_dir_path / "info" / "exclude"
            exclude.parent.mkdir(parents=True, exist_ok=True)
            # Keep git from adding its own repository into itself
            exclude.write_text(f"{entry}\n", encoding="utf-8")
        _log_info(f"Created backup repository {config.git_dir}")

    _git(config, "add", "-A")

    status = _git(config, "status", "--porcelain")
    if not status.stdout.strip():
        _log_info("No changes found")
        return False

    message = BACKUP_MESSAGE.format(timestamp=format_timestamp(now_exact()))
    _git(config, "commit", "-q", "-m", message)
    _log_success(message)
    return True


def restore(config: BuildConfig) -> List[str]:
    """
    Bring back files deleted since the last snapshot.

    Modified files are left as they are; only deleted ones are checked out.

    Returns:
        Names of the restored files (empty if nothing was deleted)

    Raises:
        MissingToolError: git is not installed
        NothingSavedError: No snapshot has been taken yet
    """
    _require_git(config)
    _require_repository(config)

    deleted = _file_names(_git(config, "ls-files", "--deleted", "-z").stdout)
    if not deleted:
        _log_info("No deleted files found")
        return []

    _log_info(f"Restoring {' '.join(_printable(name) for name in deleted)}")
    _git(config, "checkout", "--", *(os.fsencode(name) for name in deleted))
    return deleted


def show_saved(config: BuildConfig) -> List[str]:
    """List the files tracked by the backup repository."""
    _require_git(config)
    _require_repository(config)

    return _file_names(_git(config, "ls-files", "--cached", "-z").stdout)
