"""Composite analyzer fanning one byte stream out to several analyzers.

This is the single per-file pipeline every source adapter uses: the adapter
copies a file's stream through a FileAnalyzer and stores the resulting
AnalysisResult under the file's normalized path.
"""

import logging
from typing import BinaryIO, Optional

from release_sbom.analyzers.base import BaseAnalyzer
from release_sbom.analyzers.checksum import Sha1Analyzer
from release_sbom.analyzers.license import LicenseTagAnalyzer
from release_sbom.models import AnalysisResult

logger = logging.getLogger(__name__)


class FileAnalyzer(BaseAnalyzer):
    """Forwards every chunk to a fixed, ordered list of analyzers.

    On finish the license scanner is finished before the checksum, so a
    license parse failure surfaces first. Any
    further analyzers are finished after those two and their results are
    collected in ``extra_results``, keyed by analyzer name.

    Attributes:
        license_analyzer: Scanner for the SPDX license identifier tag.
        checksum_analyzer: SHA1 digest of the content.
        extra_analyzers: Additional analyzers fed the same stream.
    """

    CHUNK_SIZE = 64 * 1024

    def __init__(self, extra_analyzers: Optional[list[BaseAnalyzer]] = None) -> None:
        """Initialize the composite with the default analyzers.

        Args:
            extra_analyzers: Optional analyzers appended after the defaults.
        """
        super().__init__()
        self.license_analyzer = LicenseTagAnalyzer()
        self.checksum_analyzer = Sha1Analyzer()
        self.extra_analyzers = list(extra_analyzers or [])
        self.extra_results: dict[str, object] = {}

    @property
    def name(self) -> str:
        return "file"

    @property
    def analyzers(self) -> list[BaseAnalyzer]:
        """Return all sub-analyzers in the order they are fed and finished."""
        return [self.license_analyzer, self.checksum_analyzer, *self.extra_analyzers]

    def _update(self, chunk: bytes) -> None:
        for analyzer in self.analyzers:
            analyzer.write(chunk)

    def _finalize(self) -> AnalysisResult:
        license_info = self.license_analyzer.finish()
        checksum = self.checksum_analyzer.finish()
        for analyzer in self.extra_analyzers:
            self.extra_results[analyzer.name] = analyzer.finish()

        return AnalysisResult(checksum=checksum, license_info=license_info)

    def copy_from(self, stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> int:
        """Copy a whole binary stream through the analyzer.

        Args:
            stream: Readable binary file object.
            chunk_size: Size of each read.

        Returns:
            Total number of bytes copied.
        """
        total = 0
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            total += self.write(chunk)
        return total


def analyze_stream(stream: BinaryIO, chunk_size: int = FileAnalyzer.CHUNK_SIZE) -> AnalysisResult:
    """Analyze a complete binary stream with a fresh FileAnalyzer.

    Args:
        stream: Readable binary file object positioned at the start of the
            content.
        chunk_size: Size of each read.

    Returns:
        The aggregated analysis result.

    Raises:
        OSError: If reading the stream fails.
        LicenseParseError: If the license marker line cannot be parsed.
    """
    analyzer = FileAnalyzer()
    size = analyzer.copy_from(stream, chunk_size)
    result = analyzer.finish()
    logger.debug("Analyzed %d bytes: %s", size, result.checksum)
    return result
