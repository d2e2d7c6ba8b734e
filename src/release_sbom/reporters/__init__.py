"""Output reporters for serializing SPDX documents.

This module provides reporters for rendering a reconciled document to
SPDX output formats.
"""

from release_sbom.reporters.base import BaseReporter
from release_sbom.reporters.tag_value import TagValueReporter

__all__ = ["BaseReporter", "TagValueReporter"]
