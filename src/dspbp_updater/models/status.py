"""Worktree status model built from ``git status --porcelain -z`` output."""

from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel


class FileState(str, Enum):
    """Porcelain v1 status letter for one side (index or worktree)."""

    UNMODIFIED = " "
    MODIFIED = "M"
    TYPE_CHANGED = "T"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    UNTRACKED = "?"
    IGNORED = "!"


class FileStatus(BaseModel):
    """Status of a single path in the worktree."""

    path: str
    staging: FileState
    worktree: FileState
    original_path: Optional[str] = None  # Source path of a rename or copy

    @property
    def is_unmodified(self) -> bool:
        return (
            self.staging == FileState.UNMODIFIED
            and self.worktree == FileState.UNMODIFIED
        )


def parse_porcelain_status(output: str) -> List[FileStatus]:
    """Parse NUL separated porcelain v1 status entries.

    Each entry is ``XY PATH``. Renames and copies, on either side, are
    followed by an extra entry holding the original path.

    Args:
        output: Raw output of ``git status --porcelain=v1 -z``

    Returns:
        One FileStatus per changed path, in git's order
    """
    entries = output.split("\0")
    statuses = []
    index = 0
    while index < len(entries):
        entry = entries[index]
        index += 1
        if len(entry) < 4:
            continue

        try:
            staging = FileState(entry[0])
            worktree = FileState(entry[1])
        except ValueError as e:
            raise ValueError(f"Unrecognised status entry {entry!r}") from e

        original_path = None
        moved = (FileState.RENAMED, FileState.COPIED)
        if (staging in moved or worktree in moved) and index < len(entries):
            original_path = entries[index]
            index += 1

        statuses.append(
            FileStatus(
                path=entry[3:],
                staging=staging,
                worktree=worktree,
                original_path=original_path,
            )
        )
    return statuses


def is_clean(statuses: Iterable[FileStatus], ignored_paths: Iterable[str] = ()) -> bool:
    """Check that nothing outside ``ignored_paths`` is modified or untracked."""
    ignored = set(ignored_paths)
    return all(s.is_unmodified for s in statuses if s.path not in ignored)
