"""In-memory SPDX document graph.

Holds packages, files and relationships for one document, plus the
identifier allocator shared by every element constructor of that document.
"""

import hashlib
import uuid
from datetime import UTC, datetime
from typing import Optional

from release_sbom import __version__
from release_sbom.models import (
    Algorithm,
    FileInfo,
    PackageInfo,
    Relationship,
    RelationshipType,
)

SPDX_VERSION = "SPDX-2.2"
DATA_LICENSE = "CC0-1.0"
DOCUMENT_ID = "SPDXRef-DOCUMENT"
DEFAULT_NAMESPACE_BASE = "https://spdx.org/spdxdocs"


class SpdxDocument:
    """SPDX document being assembled.

    Element identifiers ("SPDXRef-1", "SPDXRef-2", ...) come from a counter
    owned by the document, so no identifier is ever emitted twice within a
    document.

    Attributes:
        name: Document name.
        namespace: Unique document namespace URI.
        creators: Creator strings (e.g. "Tool: release-sbom-0.1.0").
        created: Creation timestamp (UTC).
        packages: Packages in insertion order.
        files: Files in insertion order.
        relationships: Relationships in insertion order.
    """

    def __init__(
        self,
        name: str,
        namespace: Optional[str] = None,
        creators: Optional[list[str]] = None,
        created: Optional[datetime] = None,
    ) -> None:
        """Initialize an empty document.

        Args:
            name: Document name, e.g. "<repo>_<tag>".
            namespace: Document namespace; a unique one is generated from the
                name if omitted.
            creators: Creator strings; defaults to this tool.
            created: Creation timestamp; defaults to now.
        """
        self.name = name
        self.namespace = namespace or f"{DEFAULT_NAMESPACE_BASE}/{name}-{uuid.uuid4()}"
        self.creators = creators or [f"Tool: release-sbom-{__version__}"]
        self.created = created or datetime.now(UTC)
        self.packages: list[PackageInfo] = []
        self.files: list[FileInfo] = []
        self.relationships: list[Relationship] = []
        self._last_id = 0
        self._base_id = 0

    @property
    def spdx_version(self) -> str:
        return SPDX_VERSION

    @property
    def data_license(self) -> str:
        return DATA_LICENSE

    @property
    def spdx_id(self) -> str:
        return DOCUMENT_ID

    @property
    def last_id(self) -> int:
        """Return the last identifier number handed out (0 if none)."""
        return self._last_id

    def _next_id(self) -> str:
        self._last_id += 1
        return f"SPDXRef-{self._last_id}"

    def new_package(self, name: str, download_location: str = "NOASSERTION") -> PackageInfo:
        """Create a package with a fresh identifier (not yet added)."""
        return PackageInfo(
            name=name,
            spdx_id=self._next_id(),
            download_location=download_location,
        )

    def push_package(self, package: PackageInfo) -> None:
        self.packages.append(package)

    def new_file(self, name: str) -> FileInfo:
        """Create a file with a fresh identifier (not yet added)."""
        return FileInfo(name=name, spdx_id=self._next_id())

    def push_file(self, file: FileInfo) -> None:
        self.files.append(file)

    def push_contains(self, package_id: str, file_id: str) -> None:
        """Record that a package contains a file."""
        self.relationships.append(
            Relationship(package_id, file_id, RelationshipType.CONTAINS)
        )

    def get_file(self, spdx_id: str) -> Optional[FileInfo]:
        """Return the file with the given identifier, or None."""
        return next((f for f in self.files if f.spdx_id == spdx_id), None)

    def get_package(self, name: str) -> Optional[PackageInfo]:
        """Return the first package with the given name, or None."""
        return next((p for p in self.packages if p.name == name), None)

    def files_of(self, package_id: str) -> list[FileInfo]:
        """Return the files a package contains, in document order."""
        file_ids = {
            r.related_element_id
            for r in self.relationships
            if r.element_id == package_id
            and r.relationship_type is RelationshipType.CONTAINS
        }
        return [f for f in self.files if f.spdx_id in file_ids]

    def verification_code(self, package_id: str) -> str:
        """Compute the SPDX package verification code of a package.

        The code is the SHA1 of the ascending-sorted, concatenated lowercase
        SHA1 values of every file the package contains.

        Raises:
            ValueError: If a contained file has no SHA1 checksum.
        """
        sha1s = []
        for file in self.files_of(package_id):
            checksum = next(
                (c for c in file.checksums if c.algorithm is Algorithm.SHA1), None
            )
            if checksum is None:
                raise ValueError(f"Can't find SHA1 checksum for '{file.spdx_id}'")
            sha1s.append(checksum.value.lower().encode("ascii"))
        return hashlib.sha1(b"".join(sorted(sha1s))).hexdigest()

    def merge(self, other: "SpdxDocument") -> None:
        """Append every element of ``other`` and adopt its identifier counter.

        ``other`` must have been started from this document's counter (see
        ``scratch()``), so the appended identifiers are fresh here as well.
        """
        if other._base_id != self._last_id:
            raise ValueError("cannot merge a document not started from this one")
        self.packages.extend(other.packages)
        self.files.extend(other.files)
        self.relationships.extend(other.relationships)
        self._last_id = other._last_id

    def scratch(self) -> "SpdxDocument":
        """Return an empty document continuing this document's identifiers.

        Used to build a batch of elements that is merged back only if the
        whole batch succeeds.
        """
        scratch = SpdxDocument(
            self.name,
            namespace=self.namespace,
            creators=list(self.creators),
            created=self.created,
        )
        scratch._last_id = self._last_id
        scratch._base_id = self._last_id
        return scratch
