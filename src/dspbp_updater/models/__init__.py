"""Data models for the blueprint updater."""

from .mirror import DIRECT, MIRRORS, Mirror
from .settings import UpdaterSettings
from .status import FileState, FileStatus, is_clean, parse_porcelain_status
from .sync import FetchResult, HeadState, SyncOutcome

__all__ = [
    "DIRECT",
    "MIRRORS",
    "Mirror",
    "UpdaterSettings",
    "FileState",
    "FileStatus",
    "is_clean",
    "parse_porcelain_status",
    "FetchResult",
    "HeadState",
    "SyncOutcome",
]
