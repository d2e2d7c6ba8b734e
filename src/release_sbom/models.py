"""Core data models for release_sbom.

This module defines the data structures shared by the analyzers, the source
adapters, the reconciliation engine and the reporters: per-file analysis
results, checksums, parsed license information and the SPDX graph entities.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Algorithm(str, Enum):
    """Checksum algorithms recognised by SPDX."""

    SHA1 = "SHA1"
    SHA224 = "SHA224"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"
    MD5 = "MD5"


class Channel(str, Enum):
    """Distribution channel a release is analyzed from."""

    GIT = "git"
    TAR = "tar"
    ZIP = "zip"


class RelationshipType(str, Enum):
    """SPDX relationship types emitted by the reconciliation engine."""

    CONTAINS = "CONTAINS"


@dataclass(frozen=True)
class Checksum:
    """A named-algorithm digest.

    Attributes:
        algorithm: Digest algorithm (e.g., Algorithm.SHA1).
        value: Lowercase hex digest.
    """

    algorithm: Algorithm
    value: str

    def __str__(self) -> str:
        return f"{self.algorithm.value}: {self.value}"


@dataclass(frozen=True)
class LicenseInfo:
    """License information declared inside a file.

    Parsed from an ``SPDX-License-Identifier:`` line.

    Attributes:
        identifier: Rendered license expression (e.g., "MIT").
        document_ref: Optional external document reference
            (e.g., "DocumentRef-spdx-tool-1.2"), without the trailing colon.
        license_ref: True if the identifier is a custom ``LicenseRef-`` id.
        expression: The parsed expression object from license-expression.
    """

    identifier: str
    document_ref: Optional[str] = None
    license_ref: bool = False
    expression: Any = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        if self.document_ref:
            return f"{self.document_ref}:{self.identifier}"
        return self.identifier


@dataclass(frozen=True)
class AnalysisResult:
    """Result of analyzing one file's content.

    Not self-identifying: the owning mapping (path -> result) supplies
    identity.

    Attributes:
        checksum: Digest of the full file content.
        license_info: Parsed license declaration, or None if the file has no
            compliance marker line.
    """

    checksum: Checksum
    license_info: Optional[LicenseInfo] = None


# Result set of one source adapter, keyed by normalized path ("./a/b.txt").
SourceResults = dict[str, AnalysisResult]


@dataclass
class PackageInfo:
    """An SPDX package, one per distribution channel.

    Attributes:
        name: Package name (the channel name, e.g. "git").
        spdx_id: Document-unique identifier (e.g., "SPDXRef-1").
        download_location: Where the channel's content came from, or
            "NOASSERTION" when unknown.
        files_analyzed: True, every package produced here has its files
            enumerated.
    """

    name: str
    spdx_id: str
    download_location: str = "NOASSERTION"
    files_analyzed: bool = True


@dataclass
class FileInfo:
    """An SPDX file, correlated across channels by path.

    Attributes:
        name: Normalized path of the file (e.g., "./src/main.c").
        spdx_id: Document-unique identifier.
        checksums: One checksum per channel the file was verified against.
        license_info: License declared in the file, from the git channel.
    """

    name: str
    spdx_id: str
    checksums: list[Checksum] = field(default_factory=list)
    license_info: Optional[LicenseInfo] = None


@dataclass(frozen=True)
class Relationship:
    """A typed edge between two SPDX elements."""

    element_id: str
    related_element_id: str
    relationship_type: RelationshipType = RelationshipType.CONTAINS

    def __str__(self) -> str:
        return (
            f"{self.element_id} {self.relationship_type.value} "
            f"{self.related_element_id}"
        )


@dataclass(frozen=True)
class ReleaseInfo:
    """Location of every distribution channel of one release.

    Attributes:
        owner: Repository owner.
        repo: Repository name.
        tag: Release tag.
        clone_url: URL the git channel is cloned from.
        tarball_url: Optional URL of the gzip tarball.
        zipball_url: Optional URL of the zip archive.
    """

    owner: str
    repo: str
    tag: str
    clone_url: str
    tarball_url: Optional[str] = None
    zipball_url: Optional[str] = None
