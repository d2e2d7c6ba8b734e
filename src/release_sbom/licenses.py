"""Parsing of SPDX license expressions found in source files.

Thin adapter over the license-expression library: it splits off an optional
external document reference, parses the remainder and wraps every parse
failure in LicenseParseError.
"""

import logging
import re

from license_expression import ExpressionError, get_spdx_licensing

from release_sbom.exceptions import LicenseParseError
from release_sbom.models import LicenseInfo

logger = logging.getLogger(__name__)

# Initialize SPDX licensing library once for the whole process
SPDX = get_spdx_licensing()

# "DocumentRef-<idstring>:" prefix of an externally defined license
DOCUMENT_REF_PATTERN = re.compile(r"^(DocumentRef-[A-Za-z0-9.+-]+):(.*)$")

LICENSE_REF_PREFIX = "LicenseRef-"


def parse_license(text: str) -> LicenseInfo:
    """Parse the text that follows an ``SPDX-License-Identifier:`` marker.

    Only the syntax of the expression is checked; identifiers that are not on
    the SPDX license list (e.g. "GPL-3") are kept verbatim.

    Args:
        text: Expression text, e.g. "MIT" or "Apache-2.0 OR MIT".

    Returns:
        Parsed license information.

    Raises:
        LicenseParseError: If the text is empty or not a valid expression.
    """
    document_ref = None
    remainder = text.strip()

    match = DOCUMENT_REF_PATTERN.match(remainder)
    if match:
        document_ref = match.group(1)
        remainder = match.group(2).strip()

    if not remainder:
        raise LicenseParseError(text, "empty expression")

    try:
        expression = SPDX.parse(remainder)
    except ExpressionError as e:
        raise LicenseParseError(text, str(e)) from e

    if expression is None:
        raise LicenseParseError(text, "empty expression")

    identifier = expression.render()
    logger.debug("Parsed license expression %r as %s", text, identifier)

    return LicenseInfo(
        identifier=identifier,
        document_ref=document_ref,
        license_ref=identifier.startswith(LICENSE_REF_PREFIX),
        expression=expression,
    )


def license_identifiers(info: LicenseInfo) -> list[str]:
    """Return the individual licenses named by a license declaration.

    Compound expressions are split into their license symbols, in order of
    first appearance; a license with an exception stays one entry
    ("GPL-2.0-only WITH Classpath-exception-2.0"). An external document
    reference prefixes every entry.

    Args:
        info: Parsed license information.

    Returns:
        Distinct license identifiers, e.g. ["Apache-2.0", "MIT"] for
        "Apache-2.0 OR MIT".
    """
    if info.expression is None:
        identifiers = [info.identifier]
    else:
        symbols = SPDX.license_symbols(info.expression, unique=True, decompose=False)
        identifiers = [symbol.render() for symbol in symbols]

    if info.document_ref:
        return [f"{info.document_ref}:{identifier}" for identifier in identifiers]
    return identifiers
