"""SPDX tag-value reporter.

This module provides a reporter that renders an SpdxDocument in the SPDX 2.2
tag-value format using a Jinja2 template.
"""

from importlib.resources import files
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from release_sbom.document import SpdxDocument
from release_sbom.licenses import license_identifiers
from release_sbom.reporters.base import BaseReporter

NOASSERTION = "NOASSERTION"


class TagValueReporter(BaseReporter):
    """Reporter that generates SPDX tag-value documents.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(self, template_path: Optional[Path] = None) -> None:
        """Initialize the tag-value reporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the default bundled template.
        """
        if template_path:
            env = self._create_environment(FileSystemLoader(template_path.parent))
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    @staticmethod
    def _create_environment(loader=None) -> Environment:
        # Tag-value is plain text, nothing to escape
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def _load_default_template(self) -> Template:
        """Load the default bundled Jinja2 template.

        Returns:
            The default template loaded from package resources.
        """
        template_content = (
            files("release_sbom.templates")
            .joinpath("sbom.spdx.j2")
            .read_text(encoding="utf-8")
        )
        return self._create_environment().from_string(template_content)

    def render(self, document: SpdxDocument) -> str:
        """Render the document to SPDX tag-value text.

        Args:
            document: Reconciled SPDX document.

        Returns:
            Rendered tag-value document as a string.
        """
        # License fields list single identifiers, one per line
        file_licenses = {
            file.spdx_id: license_identifiers(file.license_info)
            for file in document.files
            if file.license_info
        }

        packages = []
        for package in document.packages:
            contained = document.files_of(package.spdx_id)
            licenses = sorted(
                {
                    identifier
                    for file in contained
                    for identifier in file_licenses.get(file.spdx_id, [])
                }
            )
            packages.append(
                {
                    "package": package,
                    "verification_code": document.verification_code(package.spdx_id),
                    "license_info_from_files": licenses or [NOASSERTION],
                }
            )

        return self.template.render(
            document=document,
            packages=packages,
            file_licenses=file_licenses,
            created=document.created.strftime("%Y-%m-%dT%H:%M:%SZ"),
            noassertion=NOASSERTION,
        )

    @property
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            The string "tag-value".
        """
        return "tag-value"

    @property
    def default_extension(self) -> str:
        """Return the default file extension for tag-value files.

        Returns:
            The string ".spdx".
        """
        return ".spdx"
