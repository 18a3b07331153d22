"""Core git operations for the blueprint updater."""

from .errors import UpdaterError
from .repository import BlueprintRepository

__all__ = ["BlueprintRepository", "UpdaterError"]
