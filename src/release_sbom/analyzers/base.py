"""Base interface for file content analyzers.

Analyzers are write-only sinks: a file's bytes are appended chunk by chunk in
arrival order, and ``finish`` consumes the analyzer and returns its result.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyzer(ABC):
    """Abstract base class for streaming content analyzers.

    Subclasses implement ``_update`` and ``_finalize``; this class enforces
    that an analyzer is not written to or finished after it has been
    finished.
    """

    def __init__(self) -> None:
        """Initialize the analyzer in its open state."""
        self._finished = False

    def write(self, chunk: bytes) -> int:
        """Append a chunk of content.

        Args:
            chunk: Next bytes of the stream.

        Returns:
            Number of bytes consumed (always the whole chunk).

        Raises:
            RuntimeError: If the analyzer has already been finished.
        """
        self._check_open()
        self._update(chunk)
        return len(chunk)

    def finish(self) -> Any:
        """Consume the analyzer and return its result.

        Raises:
            RuntimeError: If the analyzer has already been finished.
        """
        self._check_open()
        self._finished = True
        return self._finalize()

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError(f"{type(self).__name__} has already been finished")

    @abstractmethod
    def _update(self, chunk: bytes) -> None:
        """Feed a chunk into the analyzer state."""
        ...

    @abstractmethod
    def _finalize(self) -> Any:
        """Compute the result from the accumulated state."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the analyzer name for logging/debugging.

        Returns:
            Name like "sha1" or "license".
        """
        ...
