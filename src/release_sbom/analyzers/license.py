"""Scanner for SPDX license identifier tags in file content.

Looks for the first line carrying an ``SPDX-License-Identifier:`` marker,
e.g.::

    // SPDX-License-Identifier: MIT
    # SPDX-License-Identifier: Apache-2.0 OR MIT

and parses the expression that follows it.
"""

import io
from typing import Optional

from release_sbom.analyzers.base import BaseAnalyzer
from release_sbom.licenses import parse_license
from release_sbom.models import LicenseInfo

MARKER = "SPDX-License-Identifier:"

# Block comment closers that may end the marker line, e.g. "/* ... */"
COMMENT_TERMINATORS = ("*/", "-->", "*)", "#}", "%>")


class LicenseTagAnalyzer(BaseAnalyzer):
    """Buffers a file and extracts its SPDX license identifier on finish.

    The whole content is buffered; files are treated as text-sized. Only the
    first matching line is used, later marker lines are ignored. A marker
    line whose tail fails to parse raises LicenseParseError rather than
    being treated as "no license".
    """

    def __init__(self) -> None:
        super().__init__()
        self._buffer = io.BytesIO()

    @property
    def name(self) -> str:
        return "license"

    def _update(self, chunk: bytes) -> None:
        self._buffer.write(chunk)

    def _finalize(self) -> Optional[LicenseInfo]:
        """Scan the buffered content for the first marker line.

        Returns:
            Parsed license information, or None if no line has the marker.

        Raises:
            LicenseParseError: If the first marker line has an invalid tail.
        """
        self._buffer.seek(0)
        # Undecodable bytes are replaced, binary content never fails the scan
        lines = io.TextIOWrapper(self._buffer, encoding="utf-8", errors="replace")
        for line in lines:
            if MARKER in line:
                return parse_license(_marker_tail(line))
        return None


def _marker_tail(line: str) -> str:
    """Return the text after the marker, skipping spaces and tabs only.

    Args:
        line: A line containing MARKER.

    Returns:
        The remainder of the line without leading spaces/tabs, the line
        terminator and a trailing block comment closer.
    """
    start = line.index(MARKER) + len(MARKER)
    tail = line[start:].lstrip(" \t").rstrip("\r\n")
    stripped = tail.rstrip()
    for terminator in COMMENT_TERMINATORS:
        if stripped.endswith(terminator):
            return stripped[: -len(terminator)].rstrip()
    return tail
