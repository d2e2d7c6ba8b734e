"""Release SBOM - SPDX bill of materials for released software.

This package analyzes the git checkout, tarball and zipball of a release,
verifies that they carry the same files, and produces an SPDX document.
"""

__version__ = "0.1.0"
__author__ = "release-sbom contributors"

from release_sbom.document import SpdxDocument
from release_sbom.models import (
    AnalysisResult,
    Checksum,
    FileInfo,
    LicenseInfo,
    PackageInfo,
    ReleaseInfo,
)
from release_sbom.reconcile import reconcile

__all__ = [
    "__version__",
    "AnalysisResult",
    "Checksum",
    "FileInfo",
    "LicenseInfo",
    "PackageInfo",
    "ReleaseInfo",
    "SpdxDocument",
    "reconcile",
]
