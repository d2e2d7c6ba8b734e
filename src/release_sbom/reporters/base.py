"""Base interface for output reporters.

Reporters serialize a reconciled SpdxDocument to a text format.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from release_sbom.document import SpdxDocument


class BaseReporter(ABC):
    """Abstract base class for output reporters.

    Reporters take a reconciled document and generate formatted output.
    """

    @abstractmethod
    def render(self, document: SpdxDocument) -> str:
        """Render the document to formatted output.

        Args:
            document: Reconciled SPDX document.

        Returns:
            Rendered output as a string.
        """
        ...

    def write(self, document: SpdxDocument, output_path: Path) -> None:
        """Render and write output to a file.

        Args:
            document: Reconciled SPDX document.
            output_path: Path to write the output file.
        """
        content = self.render(document)
        output_path.write_text(content, encoding="utf-8")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            Format name like "tag-value".
        """
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the default file extension for this format.

        Returns:
            Extension like ".spdx".
        """
        ...
