"""Base interface for file sources.

A source enumerates every regular file of one distribution channel, feeds
each file through the per-file analysis pipeline and returns a mapping of
normalized path to AnalysisResult. Sources are single-use.
"""

import logging
from abc import ABC, abstractmethod
from typing import BinaryIO

from release_sbom.analyzers import analyze_stream
from release_sbom.exceptions import SbomError, SourceError
from release_sbom.models import SourceResults

logger = logging.getLogger(__name__)


class BaseSource(ABC):
    """Abstract base class for file sources.

    Any failure while analyzing one file aborts the whole source with a
    SourceError naming the offending path; partial result sets are never
    returned.
    """

    def __init__(self) -> None:
        self._consumed = False

    def analyze_files(self) -> SourceResults:
        """Analyze every file of the source.

        Returns:
            Mapping of normalized path (e.g. "./src/main.c") to result.

        Raises:
            SourceError: If reading the source or analyzing a file fails.
            RuntimeError: If the source has already been analyzed.
        """
        if self._consumed:
            raise RuntimeError(f"{type(self).__name__} has already been analyzed")
        self._consumed = True

        results: SourceResults = {}
        self._collect(results)
        logger.info("%s source: analyzed %d files", self.channel, len(results))
        return results

    @abstractmethod
    def _collect(self, results: SourceResults) -> None:
        """Enumerate the source and fill ``results`` via ``_analyze_entry``."""
        ...

    @property
    @abstractmethod
    def channel(self) -> str:
        """Return the channel name for logging/debugging.

        Returns:
            Name like "git", "tar", "zip" or "path".
        """
        ...

    def _analyze_entry(self, path: str, stream: BinaryIO, results: SourceResults) -> None:
        """Analyze one file's stream and store the result under ``path``.

        Args:
            path: Normalized path of the file.
            stream: Readable binary stream of the file content.
            results: Mapping receiving the result.

        Raises:
            SourceError: If reading or analyzing the stream fails.
        """
        logger.debug("Analyzing %s", path)
        try:
            result = analyze_stream(stream)
        except (OSError, EOFError, SbomError) as e:
            raise SourceError(f"analyzing file {path} failed: {e}", path=path) from e

        if path in results:
            logger.warning("Duplicate entry %s in %s source, keeping the last one", path, self.channel)
        results[path] = result
