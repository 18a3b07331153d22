"""Blueprint repository management using GitPython."""

import configparser
import logging
import shutil
from pathlib import Path
from typing import List, Optional

import git
from git import FetchInfo, Remote, RemoteProgress, Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from dspbp_updater.core.errors import UpdaterError
from dspbp_updater.models.mirror import DIRECT, MIRRORS, Mirror
from dspbp_updater.models.settings import UpdaterSettings
from dspbp_updater.models.status import FileStatus, is_clean, parse_porcelain_status
from dspbp_updater.models.sync import FetchResult, HeadState

logger = logging.getLogger(__name__)

GIT_ERRORS = (git.GitError, configparser.Error, ValueError, OSError)


class BlueprintRepository:
    """Keeps one working directory on the configured remote branch."""

    def __init__(self, path: Path, settings: Optional[UpdaterSettings] = None):
        self.path = Path(path).resolve()
        self.git_dir = self.path / ".git"
        self.settings = settings or UpdaterSettings()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """Get the git repository, opening it on first use."""
        if self._repo is None:
            try:
                self._repo = Repo(self.path)
            except GIT_ERRORS as e:
                raise UpdaterError(f"Failed to open repository: {e}") from e
        return self._repo

    def exists(self) -> bool:
        """Check if the directory holds a repository git can open."""
        try:
            Repo(self.path)
        except (InvalidGitRepositoryError, NoSuchPathError):
            return False
        return True

    def open_or_init(self) -> bool:
        """Open the repository, initializing a fresh one if needed.

        A ``.git`` entry that git cannot open is removed before initializing.

        Returns:
            True if an existing repository was opened, False if one was created
        """
        try:
            self._repo = Repo(self.path)
            logger.debug("Opened repository at %s", self.path)
            return True
        except (InvalidGitRepositoryError, NoSuchPathError):
            pass
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to open repository: {e}") from e

        if self.git_dir.exists():
            logger.warning("Removing unusable git directory %s", self.git_dir)
            try:
                if self.git_dir.is_dir():
                    shutil.rmtree(self.git_dir)
                else:
                    self.git_dir.unlink()
            except OSError as e:
                raise UpdaterError(f"Failed to remove .git directory: {e}") from e

        try:
            self._repo = Repo.init(self.path)
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to initialize repository: {e}") from e
        logger.debug("Initialized repository at %s", self.path)
        return False

    # === Remote and mirror configuration ===

    def ensure_remote(self) -> Remote:
        """Return the configured remote, creating it if missing."""
        name = self.settings.remote_name
        try:
            return self.repo.remote(name)
        except ValueError:
            logger.debug("Remote %s missing, creating it", name)

        try:
            return self.repo.create_remote(name, self.settings.repo_url)
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to create remote: {e}") from e

    def set_mirror(self, mirror: Mirror) -> None:
        """Make ``mirror`` the only active URL rewrite in the repository config."""
        try:
            with self.repo.config_writer() as config:
                for known in MIRRORS:
                    if known.config_section and config.has_section(known.config_section):
                        config.remove_section(known.config_section)
                if mirror.config_section:
                    config.set_value(mirror.config_section, "insteadOf", mirror.instead_of)
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to set config: {e}") from e
        logger.debug("Mirror set to %s", mirror.label)

    def active_mirror(self) -> Mirror:
        """Return the mirror whose rewrite is configured, or the direct one."""
        try:
            config = self.repo.config_reader("repository")
            for mirror in MIRRORS:
                section = mirror.config_section
                if section and config.has_section(section):
                    if config.get_value(section, "insteadOf", "") == mirror.instead_of:
                        return mirror
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to get config: {e}") from e
        return DIRECT

    def effective_url(self) -> str:
        """URL git contacts for the remote once any mirror rewrite applies."""
        remote = self.ensure_remote()
        try:
            url = remote.url
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to get remote URL: {e}") from e
        return self.active_mirror().rewrite(url)

    # === Fetch, checkout and pull ===

    def fetch(self, progress: Optional[RemoteProgress] = None) -> FetchResult:
        """Fetch every branch of the remote, pruning deleted ones."""
        remote = self.ensure_remote()
        try:
            infos = remote.fetch(
                refspec=self.settings.fetch_refspec, progress=progress, prune=True
            )
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to fetch remote: {e}") from e

        updated = [i.name for i in infos if not i.flags & FetchInfo.HEAD_UPTODATE]
        logger.debug("Fetched %d refs, %d changed", len(infos), len(updated))
        return FetchResult(up_to_date=not updated, updated_refs=updated)

    def head_state(self) -> HeadState:
        """Describe where HEAD currently points."""
        head = self.repo.head
        if not head.is_valid():
            return HeadState(unborn=True)
        try:
            if head.is_detached:
                return HeadState(detached=True, commit=head.commit.hexsha)
            return HeadState(branch=head.reference.name, commit=head.commit.hexsha)
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to get HEAD: {e}") from e

    def _remote_branch(self):
        remote = self.ensure_remote()
        try:
            return remote.refs[self.settings.branch_name]
        except IndexError as e:
            raise UpdaterError(
                f"Failed to get remote reference: {self.settings.tracking_ref} not found"
            ) from e

    def checkout_branch(self, force: bool = False) -> None:
        """Check out the target branch, creating it from the remote if needed.

        Args:
            force: Overwrite local files in the way, used for the first checkout
        """
        branch = self.settings.branch_name
        try:
            if branch in self.repo.heads:
                head = self.repo.heads[branch]
                if head.tracking_branch() is None:
                    head.set_tracking_branch(self._remote_branch())
            else:
                remote_ref = self._remote_branch()
                head = self.repo.create_head(branch, remote_ref.commit)
                head.set_tracking_branch(remote_ref)
            head.checkout(force=force)
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to checkout to {branch} branch: {e}") from e
        logger.debug("Checked out %s (force=%s)", branch, force)

    def status(self) -> List[FileStatus]:
        """Return every modified, staged or untracked path."""
        try:
            output = self.repo.git.status(
                "--porcelain=v1", "-z", "--untracked-files=all"
            )
            return parse_porcelain_status(output)
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to get status: {e}") from e

    def is_clean(self) -> bool:
        return is_clean(self.status(), self.settings.ignored_paths)

    def hard_reset(self) -> None:
        """Discard staged and worktree changes to tracked files."""
        try:
            self.repo.head.reset(index=True, working_tree=True)
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to reset worktree: {e}") from e

    def is_up_to_date(self) -> bool:
        """Check if the local branch already sits on the fetched remote commit."""
        remote_ref = self._remote_branch()
        try:
            local = self.repo.heads[self.settings.branch_name]
            return local.commit == remote_ref.commit
        except IndexError:
            return False
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to compare with remote: {e}") from e

    def pull(self, progress: Optional[RemoteProgress] = None) -> bool:
        """Fast-forward the target branch from the remote.

        Returns:
            True if HEAD moved, False if there was nothing to pull
        """
        remote = self.ensure_remote()
        try:
            before = self.repo.head.commit.hexsha
            remote.pull(self.settings.branch_name, progress=progress, ff_only=True)
            after = self.repo.head.commit.hexsha
        except GIT_ERRORS as e:
            raise UpdaterError(f"Failed to pull repository: {e}") from e
        logger.debug("Pulled %s: %s -> %s", self.settings.branch_name, before, after)
        return before != after
