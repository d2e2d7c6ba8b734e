"""Pytest configuration and fixtures."""

import hashlib
import io
import tarfile
import zipfile
from pathlib import Path

import pytest

from release_sbom.models import Algorithm, AnalysisResult, Checksum

# Files of a small release tree, shared by the source and pipeline tests
SAMPLE_TREE = {
    "README.md": b"# sample\n",
    "src/main.c": b"// SPDX-License-Identifier: MIT\nint main(void) { return 0; }\n",
    "src/util/helpers.py": b"# SPDX-License-Identifier: Apache-2.0\n\nVALUE = 1\n",
    "LICENSE": b"MIT License\n",
}


def sha1_of(content: bytes) -> Checksum:
    """Return the expected checksum of ``content``."""
    return Checksum(Algorithm.SHA1, hashlib.sha1(content).hexdigest())


def result_of(content: bytes) -> AnalysisResult:
    """Return an AnalysisResult carrying only the checksum of ``content``."""
    return AnalysisResult(checksum=sha1_of(content))


def write_tree(root: Path, tree: dict[str, bytes]) -> Path:
    """Create ``tree`` (relative path -> content) below ``root``."""
    for name, content in tree.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


def build_tarball(path: Path, tree: dict[str, bytes], prefix: str = "owner-repo-abc123/") -> Path:
    """Write a gzip tarball of ``tree`` nested under ``prefix``."""
    with tarfile.open(path, "w:gz") as archive:
        if prefix:
            directory = tarfile.TarInfo(prefix.rstrip("/"))
            directory.type = tarfile.DIRTYPE
            archive.addfile(directory)
        for name, content in tree.items():
            info = tarfile.TarInfo(prefix + name)
            info.size = len(content)
            archive.addfile(info, io.BytesIO(content))
    return path


def build_zipball(path: Path, tree: dict[str, bytes], prefix: str = "owner-repo-abc123/") -> Path:
    """Write a zip archive of ``tree`` nested under ``prefix``."""
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        if prefix:
            archive.writestr(prefix, b"")
        for name, content in tree.items():
            archive.writestr(prefix + name, content)
    return path


@pytest.fixture
def sample_tree() -> dict[str, bytes]:
    """Return a copy of the sample release tree."""
    return dict(SAMPLE_TREE)


@pytest.fixture
def tree_dir(tmp_path: Path, sample_tree: dict[str, bytes]) -> Path:
    """Create the sample tree on disk."""
    return write_tree(tmp_path / "tree", sample_tree)


@pytest.fixture
def tarball(tmp_path: Path, sample_tree: dict[str, bytes]) -> Path:
    """Create a GitHub-style tarball of the sample tree."""
    return build_tarball(tmp_path / "release.tar.gz", sample_tree)


@pytest.fixture
def zipball(tmp_path: Path, sample_tree: dict[str, bytes]) -> Path:
    """Create a GitHub-style zipball of the sample tree."""
    return build_zipball(tmp_path / "release.zip", sample_tree)
