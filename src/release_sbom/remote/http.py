"""Shared aiohttp session handling for the remote collaborators."""

from typing import Optional

import aiohttp

from release_sbom import __version__

USER_AGENT = f"release-sbom/{__version__}"


class HttpClient:
    """Base class for clients talking to GitHub over HTTP.

    Owns one lazily created aiohttp.ClientSession, reused for every request
    until ``close()``.

    Attributes:
        timeout: Seconds allowed for connecting and between two reads of a
            response. A transfer as a whole has no time limit.
    """

    DEFAULT_TIMEOUT = 60.0

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        """Create the session used for every request of this client.

        Subclasses can override this to provide custom session configuration.
        """
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(
                total=None, sock_connect=self.timeout, sock_read=self.timeout
            ),
            headers={"User-Agent": USER_AGENT},
        )

    async def close(self) -> None:
        """Close the session, if one was opened."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
