"""Source for a directory tree on the local filesystem."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path, PurePath
from typing import Union

from release_sbom.exceptions import SourceError
from release_sbom.models import SourceResults
from release_sbom.sources.base import BaseSource
from release_sbom.sources.paths import PATH_PREFIX

logger = logging.getLogger(__name__)


class FilesystemSource(BaseSource):
    """Analyzes every file below a root directory.

    Traverses the tree depth-first with an explicit stack. Each path relative
    to the root (POSIX form, e.g. "build" or "docs/_build") is checked
    against the ignore set before it is visited or descended into.
    Directories are pushed on the stack; anything else is analyzed as a
    file. Symlinks to files are followed; symlinks to directories are
    skipped.

    Attributes:
        root: Root directory of the tree.
        ignores: Relative paths excluded from the traversal.
    """

    def __init__(self, root: Union[str, Path], ignores: Iterable[str] = ()) -> None:
        """Initialize the source.

        Args:
            root: Root directory to analyze.
            ignores: Relative paths to skip (exact match, e.g. ".git").
        """
        super().__init__()
        self.root = Path(root)
        self.ignores: set[str] = set()
        for ignore in ignores:
            self.add_ignore(ignore)

    @property
    def channel(self) -> str:
        return "path"

    def add_ignore(self, path: Union[str, PurePath]) -> None:
        """Exclude a relative path (and everything below it) from analysis.

        Args:
            path: Path relative to the root, e.g. "target" or "docs/_build".
        """
        self.ignores.add(PurePath(path).as_posix())

    def is_ignored(self, relative_path: str) -> bool:
        """Return True if the relative POSIX path is in the ignore set."""
        return relative_path in self.ignores

    def _collect(self, results: SourceResults) -> None:
        stack = [self.root]

        while stack:
            directory = stack.pop()
            try:
                entries = sorted(os.scandir(directory), key=lambda e: e.name)
            except OSError as e:
                raise SourceError(f"reading directory {directory} failed: {e}") from e

            for entry in entries:
                relative_path = Path(entry.path).relative_to(self.root).as_posix()
                if self.is_ignored(relative_path):
                    logger.debug("Ignoring %s", relative_path)
                    continue

                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_dir_link = entry.is_symlink() and entry.is_dir()
                except OSError as e:
                    raise SourceError(
                        f"reading metadata of {relative_path} failed: {e}",
                        path=relative_path,
                    ) from e

                if is_dir:
                    stack.append(Path(entry.path))
                    continue

                # Directory links are never descended into
                if is_dir_link:
                    logger.warning("Skipping symlink to directory %s", relative_path)
                    continue

                self._analyze_file(Path(entry.path), PATH_PREFIX + relative_path, results)

    def _analyze_file(self, file_path: Path, path: str, results: SourceResults) -> None:
        try:
            stream = open(file_path, "rb")
        except OSError as e:
            raise SourceError(f"opening file {path} failed: {e}", path=path) from e

        with stream:
            self._analyze_entry(path, stream, results)
