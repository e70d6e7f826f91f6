"""
Backup Context

Responsibilities:
- Snapshots the working directory into a private Git repository
- Restores files deleted since the last snapshot
- Lists what has been saved

Owns: The backup repository
Never: Touches the user's own .git
"""

from texmake.contexts.backup.repository import restore, save, show_saved

__all__ = ["restore", "save", "show_saved"]
