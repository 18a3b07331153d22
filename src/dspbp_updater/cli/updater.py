"""Interactive clone/update flow for the blueprint repository."""

import logging
from typing import Optional

from dspbp_updater.core.repository import BlueprintRepository
from dspbp_updater.models.mirror import MIRRORS
from dspbp_updater.models.settings import UpdaterSettings
from dspbp_updater.models.sync import SyncOutcome

logger = logging.getLogger(__name__)

CLONE_OPTION = "Clone Repository"
UPDATE_OPTION = "Update Repository"
MIRROR_OPTION = "Set mirror (for China Mainland users)"


class Updater:
    """Walks the user from an empty or stale directory to the latest branch.

    The terminal must provide ``info``, ``select``, ``confirm`` and
    ``progress``; see :class:`dspbp_updater.cli.terminal.Terminal`.
    """

    def __init__(
        self,
        repository: BlueprintRepository,
        terminal,
        settings: Optional[UpdaterSettings] = None,
    ):
        self.repository = repository
        self.terminal = terminal
        self.settings = settings or repository.settings

    def run(self) -> SyncOutcome:
        """Run the whole flow; raises UpdaterError on any git failure."""
        repo_available = self.repository.open_or_init()
        self.choose_operation(repo_available)

        if repo_available:
            self.terminal.info("Starting to update repository...")
        else:
            self.terminal.info("Starting to clone repository...")

        self.repository.ensure_remote()
        self.terminal.info(f"Fetching from {self.repository.effective_url()}")
        with self.terminal.progress() as progress:
            fetch_result = self.repository.fetch(progress)
        logger.debug("Fetch up to date: %s", fetch_result.up_to_date)

        if not self._switch_branch():
            return SyncOutcome.CHECKOUT_DECLINED
        if not self._ensure_clean():
            return SyncOutcome.RESET_DECLINED

        if not repo_available:
            self.terminal.info("Repository has been cloned.")
            return SyncOutcome.CLONED

        if self.repository.is_up_to_date():
            self.terminal.info("Repository is already up to date.")
            return SyncOutcome.ALREADY_UP_TO_DATE

        with self.terminal.progress() as progress:
            moved = self.repository.pull(progress)
        if not moved:
            self.terminal.info("Repository is already up to date.")
            return SyncOutcome.ALREADY_UP_TO_DATE
        self.terminal.info("Repository has been pulled and updated.")
        return SyncOutcome.UPDATED

    def choose_operation(self, repo_available: bool) -> None:
        """Loop on the main menu until the user picks clone/update."""
        primary = UPDATE_OPTION if repo_available else CLONE_OPTION
        while True:
            selected = self.terminal.select("Choose an operation", [primary, MIRROR_OPTION])
            if selected == primary:
                return
            self.choose_mirror()

    def choose_mirror(self) -> None:
        current = self.repository.active_mirror()
        labels = [m.label for m in MIRRORS]
        selected = self.terminal.select(
            "Select a mirror", labels, default=labels.index(current.label)
        )
        mirror = next(m for m in MIRRORS if m.label == selected)
        self.repository.set_mirror(mirror)
        self.terminal.info(f"Mirror set to {mirror.label}.")

    def _switch_branch(self) -> bool:
        branch = self.settings.branch_name
        head = self.repository.head_state()
        if head.is_on(branch):
            return True

        if head.unborn:
            # Fresh clone: files already in the directory give way to the branch
            self.repository.checkout_branch(force=True)
            return True

        self.terminal.info(f"Repository is not on {branch} branch ({head.display_name}).")
        if not self.terminal.confirm(f"Do you want to checkout to {branch} branch?"):
            return False
        self.repository.checkout_branch()
        self.terminal.info(f"Repository has been checked out to {branch} branch.")
        return True

    def _ensure_clean(self) -> bool:
        if self.repository.is_clean():
            return True

        self.terminal.info(
            "Repository is not clean, please consider committing or stashing "
            "your changes first."
        )
        if not self.terminal.confirm(
            "Do you want to reset the repository anyway?", default=False
        ):
            return False
        self.repository.hard_reset()
        self.terminal.info("Repository has been reset.")
        return True
