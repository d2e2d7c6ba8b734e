"""Clients for remote collaborators: release metadata and downloads."""

from release_sbom.remote.download import Downloader
from release_sbom.remote.github import GitHubReleaseClient
from release_sbom.remote.http import HttpClient

__all__ = ["Downloader", "GitHubReleaseClient", "HttpClient"]
