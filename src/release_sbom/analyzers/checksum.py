"""SHA1 content digest analyzer."""

import hashlib

from release_sbom.analyzers.base import BaseAnalyzer
from release_sbom.models import Algorithm, Checksum


class Sha1Analyzer(BaseAnalyzer):
    """Computes the SHA1 digest of a byte stream incrementally.

    SHA1 is the checksum every SPDX 2.x file entry must carry.
    """

    def __init__(self) -> None:
        super().__init__()
        self._hash = hashlib.sha1()

    @property
    def name(self) -> str:
        return "sha1"

    def _update(self, chunk: bytes) -> None:
        self._hash.update(chunk)

    def _finalize(self) -> Checksum:
        return Checksum(algorithm=Algorithm.SHA1, value=self._hash.hexdigest())
