"""Tests for SPDX license expression parsing."""

import pytest

from release_sbom.exceptions import LicenseParseError
from release_sbom.licenses import license_identifiers, parse_license
from release_sbom.models import LicenseInfo


class TestParseLicense:
    """Test suite for parse_license."""

    def test_simple_identifier(self):
        """Test parsing a single SPDX identifier."""
        info = parse_license("MIT")

        assert info.identifier == "MIT"
        assert info.document_ref is None
        assert info.license_ref is False
        assert info.expression is not None

    def test_unknown_identifier_is_kept(self):
        """Test that well-formed identifiers off the SPDX list are accepted."""
        info = parse_license("GPL-3")

        assert info.identifier == "GPL-3"

    def test_compound_expression(self):
        """Test parsing an OR expression."""
        info = parse_license("Apache-2.0 OR MIT")

        assert info.identifier == "Apache-2.0 OR MIT"

    def test_license_ref(self):
        """Test that LicenseRef- identifiers are flagged."""
        info = parse_license("LicenseRef-Proprietary")

        assert info.identifier == "LicenseRef-Proprietary"
        assert info.license_ref is True

    def test_document_ref_prefix(self):
        """Test that an external document reference is split off."""
        info = parse_license("DocumentRef-spdx-tool-1.2:LicenseRef-MIT-Style-2")

        assert info.document_ref == "DocumentRef-spdx-tool-1.2"
        assert info.identifier == "LicenseRef-MIT-Style-2"
        assert info.license_ref is True
        assert str(info) == "DocumentRef-spdx-tool-1.2:LicenseRef-MIT-Style-2"

    def test_surrounding_whitespace_ignored(self):
        """Test that trailing whitespace does not break parsing."""
        assert parse_license("MIT  \r").identifier == "MIT"

    @pytest.mark.parametrize("text", ["", "   ", "DocumentRef-x:"])
    def test_empty_expression_raises(self, text):
        """Test that an empty expression is a parse error."""
        with pytest.raises(LicenseParseError):
            parse_license(text)

    def test_unbalanced_parenthesis_raises(self):
        """Test that a syntactically invalid expression is a parse error."""
        with pytest.raises(LicenseParseError) as exc_info:
            parse_license("(MIT OR Apache-2.0")

        assert exc_info.value.text == "(MIT OR Apache-2.0"
        assert exc_info.value.__cause__ is not None


class TestLicenseIdentifiers:
    """Test suite for license_identifiers."""

    def test_single_license(self):
        assert license_identifiers(parse_license("MIT")) == ["MIT"]

    def test_compound_expression_is_split(self):
        """Test that every license of an expression is listed once."""
        info = parse_license("(MIT OR Apache-2.0) AND MIT")

        assert license_identifiers(info) == ["MIT", "Apache-2.0"]

    def test_exception_stays_with_its_license(self):
        info = parse_license("GPL-2.0-only WITH Classpath-exception-2.0 OR MIT")

        assert license_identifiers(info) == [
            "GPL-2.0-only WITH Classpath-exception-2.0",
            "MIT",
        ]

    def test_document_ref_prefixes_each_license(self):
        info = parse_license("DocumentRef-spdx-tool-1.2:LicenseRef-A OR LicenseRef-B")

        assert license_identifiers(info) == [
            "DocumentRef-spdx-tool-1.2:LicenseRef-A",
            "DocumentRef-spdx-tool-1.2:LicenseRef-B",
        ]

    def test_without_parsed_expression(self):
        """Test falling back to the identifier text."""
        assert license_identifiers(LicenseInfo("MIT")) == ["MIT"]
