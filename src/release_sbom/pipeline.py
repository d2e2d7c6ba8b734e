"""End-to-end SBOM generation for one release.

Looks up the release, analyzes its git checkout, tarball and zipball
concurrently, and reconciles the three result sets into one document.
"""

import asyncio
import logging
from typing import Optional

from release_sbom.document import SpdxDocument
from release_sbom.models import Channel, ReleaseInfo, SourceResults
from release_sbom.reconcile import reconcile
from release_sbom.remote import Downloader, GitHubReleaseClient
from release_sbom.sources import GitSource, TarSource, ZipSource

logger = logging.getLogger(__name__)


def _checkout_and_analyze(clone_url: str, ref: str) -> SourceResults:
    with GitSource.checkout(clone_url, ref) as source:
        return source.analyze_files()


async def analyze_git(clone_url: str, ref: str) -> SourceResults:
    """Clone and analyze the git channel in a worker thread."""
    return await asyncio.to_thread(_checkout_and_analyze, clone_url, ref)


async def analyze_tar(downloader: Downloader, url: Optional[str]) -> Optional[SourceResults]:
    """Download and analyze the tarball channel, if the release has one."""
    if url is None:
        return None
    file = await downloader.download(url)
    with file:
        return await asyncio.to_thread(lambda: TarSource.from_file(file).analyze_files())


async def analyze_zip(downloader: Downloader, url: Optional[str]) -> Optional[SourceResults]:
    """Download and analyze the zipball channel, if the release has one."""
    if url is None:
        return None
    file = await downloader.download(url)
    with file:
        return await asyncio.to_thread(lambda: ZipSource.from_file(file).analyze_files())


async def analyze_release(
    release: ReleaseInfo, downloader: Optional[Downloader] = None
) -> tuple[SourceResults, Optional[SourceResults], Optional[SourceResults]]:
    """Analyze every channel of a release concurrently.

    All three tasks are awaited even if one fails, so that no checkout
    directory or download is left behind; the first failure (in git, tar,
    zip order) is then raised.

    Args:
        release: Release to analyze.
        downloader: Optional downloader; a new one is created if omitted.

    Returns:
        Tuple of (git results, tar results or None, zip results or None).

    Raises:
        SbomError: If any channel fails.
    """
    owns_downloader = downloader is None
    downloader = downloader or Downloader()

    try:
        results = await asyncio.gather(
            analyze_git(release.clone_url, release.tag),
            analyze_tar(downloader, release.tarball_url),
            analyze_zip(downloader, release.zipball_url),
            return_exceptions=True,
        )
    finally:
        if owns_downloader:
            await downloader.close()

    for channel, result in zip((Channel.GIT, Channel.TAR, Channel.ZIP), results):
        if isinstance(result, BaseException):
            logger.error("Analysis of the %s channel failed: %s", channel.value, result)

    for result in results:
        if isinstance(result, BaseException):
            raise result

    git_results, tar_results, zip_results = results
    return git_results, tar_results, zip_results


async def describe_release(
    owner: str,
    repo: str,
    tag: str,
    github_token: Optional[str] = None,
    github_client: Optional[GitHubReleaseClient] = None,
    downloader: Optional[Downloader] = None,
) -> SpdxDocument:
    """Build the reconciled SPDX document of a GitHub release.

    Args:
        owner: Repository owner.
        repo: Repository name.
        tag: Release tag.
        github_token: Optional GitHub API token.
        github_client: Optional preconfigured release client.
        downloader: Optional preconfigured downloader.

    Returns:
        The document with one package per channel and every git file.

    Raises:
        ReleaseLookupError: If the release cannot be found.
        SourceError: If a channel cannot be analyzed.
        ReconcileError: If the channels disagree.
    """
    if github_client is None:
        async with GitHubReleaseClient(github_token) as client:
            release = await client.get_release(owner, repo, tag)
    else:
        release = await github_client.get_release(owner, repo, tag)

    git_results, tar_results, zip_results = await analyze_release(release, downloader)

    document = SpdxDocument(f"{repo}_{tag}")
    download_locations = {Channel.GIT: f"git+{release.clone_url}@{tag}"}
    if release.tarball_url:
        download_locations[Channel.TAR] = release.tarball_url
    if release.zipball_url:
        download_locations[Channel.ZIP] = release.zipball_url

    reconcile(
        document,
        git_results,
        zip_results=zip_results,
        tar_results=tar_results,
        download_locations=download_locations,
    )
    return document
