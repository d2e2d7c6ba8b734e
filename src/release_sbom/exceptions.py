"""Exception hierarchy for release_sbom.

Every error raised by the library derives from SbomError, so callers can
treat document generation as a single all-or-nothing operation. Lower-level
causes are chained with ``raise ... from`` and stay reachable through
``__cause__``.
"""

from typing import Optional


class SbomError(Exception):
    """Base class for all release_sbom errors."""


class AnalyzeError(SbomError):
    """Analysis of a single file's content failed."""


class LicenseParseError(AnalyzeError):
    """A compliance marker line was found but its tail is not a valid expression.

    Attributes:
        text: The text following the marker that failed to parse.
    """

    def __init__(self, text: str, reason: Optional[str] = None) -> None:
        self.text = text
        message = f"parse license failed: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SourceError(SbomError):
    """A source adapter failed.

    Wraps stream I/O failures, analyzer failures and archive structural
    failures with a description of where they happened.

    Attributes:
        path: Offending path inside the source, if the failure concerns one
            entry.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)


class ReconcileError(SbomError):
    """Result sets of two channels disagree."""


class PathMissingError(ReconcileError):
    """A path of the git result set is absent from an archive result set."""

    def __init__(self, channel: str, path: str) -> None:
        self.channel = channel
        self.path = path
        super().__init__(f"{path} is missing in the {channel} package")


class ChecksumMismatchError(ReconcileError):
    """The same path has different content in git and in an archive."""

    def __init__(self, channel: str, path: str, expected: str, actual: str) -> None:
        self.channel = channel
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"checksum mismatch for {path} in the {channel} package: "
            f"git has {expected}, {channel} has {actual}"
        )


class ReleaseLookupError(SbomError):
    """Release metadata could not be retrieved."""


class DownloadError(SbomError):
    """A release asset could not be downloaded."""
