"""
Async HTTP client for the file server: one authenticated GET per file.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import aiohttp

from hfsync.exceptions import HTTPStatusError
from hfsync.models.config import SyncSettings
from hfsync.utils.path import build_file_url

from .auth import build_basic_auth

log = logging.getLogger(__name__)


class FileServerClient:
    """
    Streams files from the sync server with basic authentication.

    The underlying aiohttp session is created lazily and shared by every
    worker of the process; it is sized to the worker count.
    """

    def __init__(self, settings: SyncSettings, credential: str):
        """
        Initializes the client.

        Args:
            settings: The validated process settings.
            credential: The derived per-machine credential.
        """
        self.settings = settings
        self._auth = build_basic_auth(settings, credential)
        self._session: Optional[aiohttp.ClientSession] = None

    def build_url(self, relative_path: str) -> str:
        return build_file_url(
            self.settings.server_url, self.settings.server_port, relative_path
        )

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            workers = self.settings.worker_count
            connector = aiohttp.TCPConnector(
                limit=workers * 2,
                limit_per_host=workers,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            # Throttled bodies trickle in, so only connect and per-read timeouts apply.
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90),
            )
            log.debug(f"Created file server session with limit_per_host={workers}")
        return self._session

    @asynccontextmanager
    async def fetch(self, relative_path: str) -> AsyncIterator[aiohttp.ClientResponse]:
        """
        Opens a streaming GET for one file.

        Raises:
            HTTPStatusError: If the server answers outside the 2xx range.
            aiohttp.ClientError: On connection or protocol failures.
        """
        session = await self._initialize_session()
        url = self.build_url(relative_path)
        log.debug(f"GET {url}")
        async with session.get(url, auth=self._auth) as response:
            if not 200 <= response.status < 300:
                raise HTTPStatusError(response.status, response.reason)
            yield response

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "FileServerClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
