"""Download of release archives into local temporary files."""

import asyncio
import logging
import tempfile
from typing import BinaryIO

import aiohttp

from release_sbom.exceptions import DownloadError
from release_sbom.remote.http import HttpClient

logger = logging.getLogger(__name__)


class Downloader(HttpClient):
    """Streams remote files into seekable anonymous temporary files."""

    CHUNK_SIZE = 64 * 1024

    async def download(self, url: str) -> BinaryIO:
        """Download ``url`` into a temporary file.

        The caller owns the returned file and must close it; the file is
        deleted from disk when closed.

        Args:
            url: URL to download (redirects are followed).

        Returns:
            Binary file positioned at offset 0.

        Raises:
            DownloadError: On network errors, read timeouts or non-200 responses.
        """
        session = await self._get_session()
        file = tempfile.TemporaryFile()
        try:
            async with session.get(url) as response:
                if response.status != 200:
                    raise DownloadError(f"GET {url} returned HTTP {response.status}")
                async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                    file.write(chunk)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            file.close()
            raise DownloadError(f"downloading {url} failed: {e!r}") from e
        except BaseException:
            file.close()
            raise

        logger.debug("Downloaded %s (%d bytes)", url, file.tell())
        file.seek(0)
        return file
