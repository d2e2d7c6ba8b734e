"""Tests for GitSource."""

from pathlib import Path

import pytest
from git.exc import GitCommandError

from conftest import sha1_of, write_tree
from release_sbom.exceptions import SourceError
from release_sbom.sources.git import GitSource

CLONE_URL = "https://github.com/owner/repo.git"


@pytest.fixture
def fake_clone(mocker, sample_tree):
    """Patch Repo.clone_from to write the sample tree plus a .git directory."""
    checkouts: list[Path] = []

    def clone_from(url, to_path, **kwargs):
        checkout = Path(to_path)
        checkouts.append(checkout)
        write_tree(checkout, sample_tree)
        write_tree(checkout, {".git/HEAD": b"ref: refs/heads/main\n"})

    mock = mocker.patch("release_sbom.sources.git.Repo.clone_from", side_effect=clone_from)
    mock.checkouts = checkouts
    return mock


class TestGitSource:
    """Test suite for GitSource."""

    def test_checkout_clones_requested_ref(self, fake_clone):
        """Test that the clone targets the tag inside a temporary directory."""
        with GitSource.checkout(CLONE_URL, "v1.0.0") as source:
            assert source.path.is_dir()

        args, kwargs = fake_clone.call_args
        assert args[0] == CLONE_URL
        assert kwargs["branch"] == "v1.0.0"
        assert Path(args[1]) == fake_clone.checkouts[0]

    def test_analyze_files_delegates_to_filesystem(self, fake_clone, sample_tree):
        """Test that every tree file is analyzed and .git is skipped."""
        with GitSource.checkout(CLONE_URL, "v1.0.0") as source:
            results = source.analyze_files()

        assert set(results) == {"./" + name for name in sample_tree}
        assert results["./README.md"].checksum == sha1_of(sample_tree["README.md"])
        assert "./.git/HEAD" not in results

    def test_checkout_removed_on_close(self, fake_clone):
        """Test that closing releases the temporary directory."""
        source = GitSource.checkout(CLONE_URL, "v1.0.0")
        checkout = source.path
        source.analyze_files()

        source.close()

        assert not checkout.exists()

    def test_checkout_removed_on_failure(self, fake_clone, mocker):
        """Test that the directory is released when analysis fails."""
        mocker.patch(
            "release_sbom.sources.git.FilesystemSource.analyze_files",
            side_effect=SourceError("boom"),
        )

        with pytest.raises(SourceError):
            with GitSource.checkout(CLONE_URL, "v1.0.0") as source:
                source.analyze_files()

        assert not fake_clone.checkouts[0].exists()

    def test_clone_failure(self, mocker):
        """Test that a failed clone raises SourceError and cleans up."""
        targets: list[Path] = []

        def clone_from(url, to_path, **kwargs):
            targets.append(Path(to_path))
            raise GitCommandError("clone", 128, b"fatal: Remote branch nope not found")

        mocker.patch("release_sbom.sources.git.Repo.clone_from", side_effect=clone_from)

        with pytest.raises(SourceError) as exc_info:
            GitSource.checkout(CLONE_URL, "nope")

        assert isinstance(exc_info.value.__cause__, GitCommandError)
        assert not targets[0].exists()
