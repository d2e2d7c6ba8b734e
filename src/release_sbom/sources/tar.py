"""Source for a gzip-compressed tar archive, read as a stream."""

import gzip
import logging
import tarfile
from typing import BinaryIO

from release_sbom.exceptions import SourceError
from release_sbom.models import SourceResults
from release_sbom.sources.base import BaseSource
from release_sbom.sources.paths import normalize_path

logger = logging.getLogger(__name__)


class TarSource(BaseSource):
    """Analyzes the regular files of a ``.tar.gz`` archive in archive order.

    The archive is decoded as a forward-only stream, so the underlying file
    does not need to be seekable and is never buffered whole. Member names
    are taken from the tar headers and normalized after stripping
    ``strip_components`` leading directories.

    Attributes:
        fileobj: Binary stream of the compressed archive.
        strip_components: Leading directories removed from member names.
    """

    def __init__(self, fileobj: BinaryIO, strip_components: int = 1) -> None:
        """Initialize the source.

        Args:
            fileobj: Readable binary stream of the gzip-compressed tarball.
            strip_components: Leading directories to strip; GitHub tarballs
                nest everything under "<owner>-<repo>-<sha>/".
        """
        super().__init__()
        self.fileobj = fileobj
        self.strip_components = strip_components

    @classmethod
    def from_file(cls, fileobj: BinaryIO, strip_components: int = 1) -> "TarSource":
        """Create a source reading from an open binary file."""
        return cls(fileobj, strip_components=strip_components)

    @property
    def channel(self) -> str:
        return "tar"

    def _collect(self, results: SourceResults) -> None:
        member_name = None
        try:
            # A truncated gzip stream raises EOFError instead of ending the member list
            with gzip.GzipFile(fileobj=self.fileobj, mode="rb") as decompressed, tarfile.open(
                fileobj=decompressed, mode="r|"
            ) as archive:
                for member in archive:
                    member_name = member.name
                    if member.isdir():
                        continue
                    if not member.isfile():
                        logger.warning(
                            "Skipping non-regular tar member %s (type %r)",
                            member.name,
                            member.type,
                        )
                        continue

                    path = normalize_path(member.name, self.strip_components)
                    if path is None:
                        logger.warning("Skipping top-level tar member %s", member.name)
                        continue

                    stream = archive.extractfile(member)
                    self._analyze_entry(path, stream, results)
        except (tarfile.TarError, OSError, EOFError) as e:
            location = f" at member {member_name}" if member_name else ""
            raise SourceError(
                f"reading tar archive failed{location}: {e}", path=member_name
            ) from e
