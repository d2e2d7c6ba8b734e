"""Source for a zip archive, read through its central directory."""

import logging
import zipfile
import zlib
from typing import BinaryIO

from release_sbom.exceptions import SourceError
from release_sbom.models import SourceResults
from release_sbom.sources.base import BaseSource
from release_sbom.sources.paths import normalize_path

logger = logging.getLogger(__name__)


class ZipSource(BaseSource):
    """Analyzes the files of a zip archive in central-directory order.

    The central directory is read eagerly at construction, which requires a
    seekable file. Entry names are sanitized (no absolute prefixes, no ".."
    components) and normalized after stripping ``strip_components`` leading
    directories.

    Attributes:
        archive: The opened zip archive.
        strip_components: Leading directories removed from entry names.
    """

    def __init__(self, archive: zipfile.ZipFile, strip_components: int = 1) -> None:
        """Initialize from an opened archive. Use ``from_file()`` instead."""
        super().__init__()
        self.archive = archive
        self.strip_components = strip_components

    @classmethod
    def from_file(cls, fileobj: BinaryIO, strip_components: int = 1) -> "ZipSource":
        """Open a zip archive and index its entries.

        Args:
            fileobj: Seekable binary file holding the archive.
            strip_components: Leading directories to strip; GitHub zipballs
                nest everything under "<owner>-<repo>-<sha>/".

        Returns:
            A ZipSource over the archive.

        Raises:
            SourceError: If the file is not a valid zip archive.
        """
        try:
            archive = zipfile.ZipFile(fileobj)
        except (zipfile.BadZipFile, OSError) as e:
            raise SourceError(f"reading zip archive failed: {e}") from e
        return cls(archive, strip_components=strip_components)

    @property
    def channel(self) -> str:
        return "zip"

    def _collect(self, results: SourceResults) -> None:
        with self.archive:
            for info in self.archive.infolist():
                if info.is_dir():
                    continue

                path = normalize_path(info.filename, self.strip_components)
                if path is None:
                    logger.warning("Skipping top-level zip entry %s", info.filename)
                    continue

                try:
                    with self.archive.open(info) as stream:
                        self._analyze_entry(path, stream, results)
                except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError) as e:
                    raise SourceError(
                        f"reading zip entry {info.filename} failed: {e}", path=path
                    ) from e
