"""Tests for source path normalization."""

import pytest

from release_sbom.sources.paths import normalize_path, sanitize_parts


@pytest.mark.parametrize(
    "name,expected",
    [
        ("a.txt", "./a.txt"),
        ("./a.txt", "./a.txt"),
        ("src/main.c", "./src/main.c"),
        ("/abs/path.txt", "./abs/path.txt"),
        ("../../etc/passwd", "./etc/passwd"),
        ("dir\\sub\\file.txt", "./dir/sub/file.txt"),
        ("C:/windows/file.txt", "./windows/file.txt"),
        ("a//b/./c.txt", "./a/b/c.txt"),
    ],
)
def test_normalize_path(name, expected):
    """Test conversion into the canonical path space."""
    assert normalize_path(name) == expected


def test_normalize_is_idempotent():
    """Test that normalizing twice changes nothing."""
    once = normalize_path("repo/src/x.py")

    assert normalize_path(once) == once


def test_strip_components():
    """Test removing the archive's top-level directory."""
    assert normalize_path("owner-repo-abc123/src/main.c", 1) == "./src/main.c"


def test_strip_components_leaves_nothing():
    """Test that the top-level directory itself normalizes to None."""
    assert normalize_path("owner-repo-abc123/", 1) is None
    assert normalize_path("pax_global_header", 1) is None


def test_sanitize_parts_drops_traversal():
    """Test that no component can escape the archive root."""
    assert sanitize_parts("/../a/../b") == ["a", "b"]
