"""Streaming analyzers for file content.

This module provides the per-file analysis pipeline: a SHA1 digest, an SPDX
license tag scanner, and the composite that feeds both from one stream.
"""

from release_sbom.analyzers.base import BaseAnalyzer
from release_sbom.analyzers.checksum import Sha1Analyzer
from release_sbom.analyzers.composite import FileAnalyzer, analyze_stream
from release_sbom.analyzers.license import LicenseTagAnalyzer

__all__ = [
    "BaseAnalyzer",
    "FileAnalyzer",
    "LicenseTagAnalyzer",
    "Sha1Analyzer",
    "analyze_stream",
]
