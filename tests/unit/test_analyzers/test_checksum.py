"""Tests for the SHA1 analyzer."""

import hashlib

import pytest

from release_sbom.analyzers.checksum import Sha1Analyzer
from release_sbom.models import Algorithm


def _digest(*chunks: bytes):
    analyzer = Sha1Analyzer()
    for chunk in chunks:
        analyzer.write(chunk)
    return analyzer.finish()


def test_digest_of_empty_stream():
    """Test the digest of no content."""
    checksum = _digest()

    assert checksum.algorithm is Algorithm.SHA1
    assert checksum.value == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_digest_matches_hashlib():
    """Test that the digest covers the full concatenated stream."""
    content = b"hello world\n" * 1000

    assert _digest(content).value == hashlib.sha1(content).hexdigest()


def test_digest_is_chunking_invariant():
    """Test that splitting the stream differently gives the same digest."""
    content = bytes(range(256)) * 10

    assert _digest(content) == _digest(content[:1], content[1:700], content[700:])


def test_single_byte_mutation_changes_digest():
    """Test that a one-byte change produces a different digest."""
    content = bytearray(b"some file content")
    mutated = bytearray(content)
    mutated[3] ^= 0x01

    assert _digest(bytes(content)) != _digest(bytes(mutated))


def test_write_returns_chunk_length():
    """Test that write reports the whole chunk as consumed."""
    assert Sha1Analyzer().write(b"abcd") == 4


def test_finish_consumes_analyzer():
    """Test that an analyzer cannot be reused after finish."""
    analyzer = Sha1Analyzer()
    analyzer.finish()

    with pytest.raises(RuntimeError):
        analyzer.write(b"late")
    with pytest.raises(RuntimeError):
        analyzer.finish()
