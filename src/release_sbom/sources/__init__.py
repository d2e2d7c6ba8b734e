"""File sources for each distribution channel of a release.

This module provides sources enumerating and analyzing the files of a
directory tree, a git checkout, a gzip tarball and a zip archive.
"""

from pathlib import Path

from release_sbom.models import SourceResults
from release_sbom.sources.base import BaseSource
from release_sbom.sources.filesystem import FilesystemSource
from release_sbom.sources.git import GitSource
from release_sbom.sources.paths import normalize_path
from release_sbom.sources.tar import TarSource
from release_sbom.sources.zip import ZipSource

__all__ = [
    "BaseSource",
    "FilesystemSource",
    "GitSource",
    "TarSource",
    "ZipSource",
    "analyze_local",
    "normalize_path",
]

TAR_SUFFIXES = (".tar.gz", ".tgz")
ZIP_SUFFIXES = (".zip",)


def analyze_local(
    path: Path, ignores: tuple[str, ...] = (), strip_components: int = 0
) -> SourceResults:
    """Analyze a local directory, tarball or zip archive.

    Auto-detects the source type from the path and returns its result set.

    Args:
        path: Directory, ``.tar.gz``/``.tgz`` file or ``.zip`` file.
        ignores: Relative paths to skip (directories only).
        strip_components: Leading directories to strip from archive members.

    Returns:
        Mapping of normalized path to AnalysisResult.

    Raises:
        ValueError: If the path is not a directory or a supported archive.
        SourceError: If analysis fails.
    """
    if path.is_dir():
        return FilesystemSource(path, ignores=ignores).analyze_files()

    name = path.name.lower()
    if name.endswith(TAR_SUFFIXES):
        with open(path, "rb") as f:
            return TarSource.from_file(f, strip_components=strip_components).analyze_files()
    if name.endswith(ZIP_SUFFIXES):
        with open(path, "rb") as f:
            return ZipSource.from_file(f, strip_components=strip_components).analyze_files()

    raise ValueError(
        f"No source available for '{path.name}'. "
        f"Supported: directories, *.tar.gz, *.tgz, *.zip"
    )
