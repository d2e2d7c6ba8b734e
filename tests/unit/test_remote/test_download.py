"""Tests for the archive downloader."""

import asyncio
from typing import AsyncGenerator

import aiohttp
import pytest
from aioresponses import aioresponses

from release_sbom.exceptions import DownloadError
from release_sbom.remote.download import Downloader

URL = "https://api.github.com/repos/owner/repo/tarball/v1.0.0"


@pytest.fixture
async def downloader() -> AsyncGenerator[Downloader, None]:
    downloader = Downloader()
    yield downloader
    await downloader.close()


class TestDownloader:
    """Test suite for Downloader."""

    @pytest.mark.asyncio
    async def test_download_to_temporary_file(self, downloader: Downloader) -> None:
        """Test that the body lands in a rewound file."""
        body = b"archive-bytes" * 10000

        with aioresponses() as m:
            m.get(URL, body=body)

            with await downloader.download(URL) as file:
                assert file.tell() == 0
                assert file.read() == body

    @pytest.mark.asyncio
    async def test_http_error(self, downloader: Downloader) -> None:
        with aioresponses() as m:
            m.get(URL, status=404)

            with pytest.raises(DownloadError, match="404"):
                await downloader.download(URL)

    @pytest.mark.asyncio
    async def test_network_error(self, downloader: Downloader) -> None:
        with aioresponses() as m:
            m.get(URL, exception=aiohttp.ClientPayloadError("truncated"))

            with pytest.raises(DownloadError) as exc_info:
                await downloader.download(URL)

        assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)

    @pytest.mark.asyncio
    async def test_read_timeout(self, downloader: Downloader) -> None:
        """Test that a stalled transfer is reported as a DownloadError."""
        with aioresponses() as m:
            m.get(URL, exception=asyncio.TimeoutError())

            with pytest.raises(DownloadError) as exc_info:
                await downloader.download(URL)

        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)

    @pytest.mark.asyncio
    async def test_session_limits_reads_not_transfers(self) -> None:
        """Test that only connect and per-read timeouts are configured."""
        async with Downloader(timeout=30.0) as downloader:
            session = await downloader._get_session()

            assert session.timeout.total is None
            assert session.timeout.sock_read == 30.0
            assert session.timeout.sock_connect == 30.0

    @pytest.mark.asyncio
    async def test_session_is_reused_and_closed(self) -> None:
        """Test the lazily created session lifecycle."""
        async with Downloader() as downloader:
            first = await downloader._get_session()
            second = await downloader._get_session()
            assert first is second
            assert first.headers["User-Agent"].startswith("release-sbom/")

        assert first.closed
