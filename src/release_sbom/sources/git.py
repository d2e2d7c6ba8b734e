"""Source for a git checkout of one tag or branch.

Clones the repository with GitPython into a temporary directory owned by the
source, then delegates to FilesystemSource.
"""

import logging
import tempfile
from pathlib import Path

from git import Repo
from git.exc import GitCommandError

from release_sbom.exceptions import SourceError
from release_sbom.models import SourceResults
from release_sbom.sources.base import BaseSource
from release_sbom.sources.filesystem import FilesystemSource

logger = logging.getLogger(__name__)


class GitSource(BaseSource):
    """Analyzes the working tree of a fresh clone.

    The temporary checkout directory is removed by ``close()``, on context
    manager exit, or when the source is garbage collected, whether or not
    the analysis succeeded.

    Attributes:
        clone_url: URL the repository was cloned from.
        ref: Tag or branch that was checked out.
    """

    # Repository metadata is not part of the released tree
    DEFAULT_IGNORES = (".git",)

    def __init__(self, clone_url: str, ref: str, checkout_dir: tempfile.TemporaryDirectory) -> None:
        """Initialize from an existing checkout. Use ``checkout()`` instead.

        Args:
            clone_url: URL the repository was cloned from.
            ref: Tag or branch that was checked out.
            checkout_dir: Temporary directory holding the checkout; the source
                takes ownership of it.
        """
        super().__init__()
        self.clone_url = clone_url
        self.ref = ref
        self._checkout_dir = checkout_dir

    @classmethod
    def checkout(cls, clone_url: str, ref: str) -> "GitSource":
        """Clone ``clone_url`` at ``ref`` into a new temporary directory.

        Args:
            clone_url: Repository URL (or local path).
            ref: Tag or branch name to check out.

        Returns:
            A GitSource owning the checkout.

        Raises:
            SourceError: If the clone fails. The temporary directory is
                removed before raising.
        """
        checkout_dir = tempfile.TemporaryDirectory(prefix="release-sbom-git-")
        logger.info("Cloning %s at %s into %s", clone_url, ref, checkout_dir.name)
        try:
            Repo.clone_from(clone_url, checkout_dir.name, branch=ref, depth=1)
        except GitCommandError as e:
            checkout_dir.cleanup()
            raise SourceError(f"cloning {clone_url} at {ref} failed: {e}") from e

        return cls(clone_url, ref, checkout_dir)

    @property
    def channel(self) -> str:
        return "git"

    @property
    def path(self) -> Path:
        """Return the checkout directory."""
        return Path(self._checkout_dir.name)

    def _collect(self, results: SourceResults) -> None:
        results.update(FilesystemSource(self.path, ignores=self.DEFAULT_IGNORES).analyze_files())

    def close(self) -> None:
        """Remove the checkout directory."""
        self._checkout_dir.cleanup()

    def __enter__(self) -> "GitSource":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit, removing the checkout."""
        self.close()
