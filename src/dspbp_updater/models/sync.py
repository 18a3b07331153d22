"""Models describing the state and result of a sync run."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class SyncOutcome(str, Enum):
    """How an updater run ended."""

    CLONED = "cloned"
    UPDATED = "updated"
    ALREADY_UP_TO_DATE = "already_up_to_date"
    CHECKOUT_DECLINED = "checkout_declined"
    RESET_DECLINED = "reset_declined"


class HeadState(BaseModel):
    """Where HEAD points in the working directory."""

    unborn: bool = False
    detached: bool = False
    branch: Optional[str] = None
    commit: Optional[str] = None

    def is_on(self, branch_name: str) -> bool:
        return not self.unborn and not self.detached and self.branch == branch_name

    @property
    def display_name(self) -> str:
        if self.unborn:
            return "(no commits)"
        if self.detached:
            return f"detached HEAD at {self.commit[:7] if self.commit else '?'}"
        return self.branch or "HEAD"


class FetchResult(BaseModel):
    """Refs touched by a fetch."""

    up_to_date: bool
    updated_refs: List[str] = []
