"""Reconciliation of per-channel result sets into one SPDX document.

The git result set is authoritative: it alone decides which files exist.
The tarball and zipball result sets are only verified to be faithful
repackagings of it. Any missing path or checksum difference aborts the
whole reconciliation and leaves the document untouched.
"""

import logging
from typing import Optional

from release_sbom.document import SpdxDocument
from release_sbom.exceptions import ChecksumMismatchError, PathMissingError
from release_sbom.models import Channel, PackageInfo, SourceResults
from release_sbom.sources.paths import normalize_path

logger = logging.getLogger(__name__)


def _rekey(results: SourceResults) -> SourceResults:
    """Re-key a result set into the canonical "./a/b.txt" path space."""
    rekeyed: SourceResults = {}
    for path, result in results.items():
        rekeyed[normalize_path(path) or path] = result
    return rekeyed


def reconcile(
    document: SpdxDocument,
    git_results: SourceResults,
    zip_results: Optional[SourceResults] = None,
    tar_results: Optional[SourceResults] = None,
    download_locations: Optional[dict[Channel, str]] = None,
) -> None:
    """Merge the result sets of every channel into ``document``.

    Phase 1 creates one package per channel present (git always, tar and zip
    when supplied). Phase 2 walks the git result set in its own order: each
    path becomes a file carrying the git checksum and license, contained in
    the git package; every archive channel must hold the same path with the
    same checksum, and then also contains the file. Files that only exist
    in an archive are not added.

    Args:
        document: Document receiving packages, files and relationships.
        git_results: Authoritative result set of the git checkout.
        zip_results: Optional result set of the zipball.
        tar_results: Optional result set of the tarball.
        download_locations: Optional download location per channel.

    Raises:
        PathMissingError: If a git path is absent from an archive set.
        ChecksumMismatchError: If an archive has different content for a
            git path.
    """
    download_locations = download_locations or {}
    scratch = document.scratch()

    def add_package(channel: Channel) -> PackageInfo:
        package = scratch.new_package(
            channel.value,
            download_location=download_locations.get(channel, "NOASSERTION"),
        )
        scratch.push_package(package)
        return package

    # Phase 1: one package per channel present
    git_package = add_package(Channel.GIT)
    archives: list[tuple[Channel, PackageInfo, SourceResults]] = []
    if tar_results is not None:
        archives.append((Channel.TAR, add_package(Channel.TAR), _rekey(tar_results)))
    if zip_results is not None:
        archives.append((Channel.ZIP, add_package(Channel.ZIP), _rekey(zip_results)))

    # Phase 2: files come from git only, archives corroborate them
    for path, git_result in git_results.items():
        file = scratch.new_file(path)
        file.checksums.append(git_result.checksum)
        file.license_info = git_result.license_info
        scratch.push_file(file)
        scratch.push_contains(git_package.spdx_id, file.spdx_id)

        key = normalize_path(path) or path
        for channel, package, archive_results in archives:
            archive_result = archive_results.get(key)
            if archive_result is None:
                raise PathMissingError(channel.value, path)
            if archive_result.checksum != git_result.checksum:
                raise ChecksumMismatchError(
                    channel.value,
                    path,
                    expected=git_result.checksum.value,
                    actual=archive_result.checksum.value,
                )
            file.checksums.append(archive_result.checksum)
            scratch.push_contains(package.spdx_id, file.spdx_id)

    # Phase 3: archive-only files are left out of the document
    git_keys = {normalize_path(path) or path for path in git_results}
    for channel, _, archive_results in archives:
        extra = len(archive_results.keys() - git_keys)
        if extra:
            logger.debug("Ignoring %d %s-only files", extra, channel.value)

    document.merge(scratch)
    logger.info(
        "Reconciled %d files across %d packages",
        len(scratch.files),
        len(scratch.packages),
    )
