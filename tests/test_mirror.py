"""Tests for mirror URL substitution."""

import tempfile
from pathlib import Path

import pytest

from dspbp_updater.core.repository import BlueprintRepository
from dspbp_updater.models.mirror import CODEBERG, DIRECT


@pytest.fixture
def repository():
    """Create an initialized repository in a temporary directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        repository = BlueprintRepository(Path(temp_dir))
        repository.open_or_init()
        yield repository


def test_rewrite_replaces_github_prefix():
    url = "https://github.com/DSPBluePrints/FactoryBluePrints.git"

    assert CODEBERG.rewrite(url) == "https://codeberg.org/DSPBluePrints/FactoryBluePrints.git"
    assert DIRECT.rewrite(url) == url


def test_rewrite_leaves_other_hosts_alone():
    assert CODEBERG.rewrite("https://example.com/repo.git") == "https://example.com/repo.git"


def test_default_mirror_is_direct(repository):
    assert repository.active_mirror() == DIRECT


def test_set_mirror_is_idempotent(repository):
    config_path = repository.git_dir / "config"

    repository.set_mirror(CODEBERG)
    once = config_path.read_text()
    repository.set_mirror(CODEBERG)
    twice = config_path.read_text()

    assert once == twice
    assert twice.count('[url "https://codeberg.org/"]') == 1
    assert repository.active_mirror() == CODEBERG


def test_direct_mirror_removes_rewrite(repository):
    repository.set_mirror(CODEBERG)
    repository.set_mirror(DIRECT)
    repository.set_mirror(DIRECT)

    assert "codeberg" not in (repository.git_dir / "config").read_text()
    assert repository.active_mirror() == DIRECT


def test_effective_url_follows_mirror(repository):
    repository.set_mirror(CODEBERG)

    assert repository.effective_url() == (
        "https://codeberg.org/DSPBluePrints/FactoryBluePrints.git"
    )
