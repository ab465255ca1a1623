"""
Handles the paced download of a single file: stream to a temporary sibling
under a per-second byte cap, then atomically promote it into place.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable

import aiofiles
import aiohttp
from rich.markup import escape

from hfsync.api.client import FileServerClient
from hfsync.api.rate_limiter import TickThrottle
from hfsync.exceptions import DownloadError
from hfsync.models.stats import SyncStats
from hfsync.utils.path import create_dir, resolve_local_path, temp_path_for

log = logging.getLogger(__name__)


async def _copy_at_most(stream: aiohttp.StreamReader, f, limit: int) -> tuple[int, bool]:
    """
    Copies up to `limit` bytes from the response body into an open file.

    Returns:
        The number of bytes copied and whether end-of-stream was reached.
    """
    copied = 0
    while copied < limit:
        chunk = await stream.read(limit - copied)
        if not chunk:
            return copied, True
        await f.write(chunk)
        copied += len(chunk)
    return copied, False


def _promote(temp_path: Path, destination: Path) -> None:
    # os.replace overwrites an existing destination atomically on POSIX and Windows.
    os.replace(temp_path, destination)


def _discard(temp_path: Path) -> None:
    try:
        temp_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        log.warning(
            f"[yellow]Could not remove temporary file {escape(str(temp_path))}: "
            f"{escape(str(e))}[/yellow]"
        )


class Downloader:
    """A rate-limited file downloader with atomic replace of the destination."""

    def __init__(
        self,
        client: FileServerClient,
        root: Path,
        rate_per_worker: int,
        throttle_factory: Callable[[], TickThrottle] = TickThrottle,
    ):
        """
        Args:
            client: The authenticated file server client.
            root: Destination root directory.
            rate_per_worker: Bytes copied per throttle tick for one transfer.
            throttle_factory: Builds a fresh throttle for each transfer.
        """
        if rate_per_worker < 1:
            raise ValueError("rate_per_worker must be at least 1 byte per tick")
        self.client = client
        self.root = root
        self.rate_per_worker = rate_per_worker
        self._throttle_factory = throttle_factory

    async def download(self, relative_path: str, stats: SyncStats | None = None) -> Path:
        """
        Downloads one manifest path to the destination root.

        On failure the temporary file is removed and whatever was at the
        destination before the call is left untouched.

        Returns:
            The final local path.

        Raises:
            DownloadError: For any per-file failure, including non-2xx status.
        """
        try:
            destination = resolve_local_path(self.root, relative_path)
        except ValueError as e:
            raise DownloadError(str(e)) from e

        try:
            await asyncio.to_thread(create_dir, destination.parent)
        except OSError as e:
            raise DownloadError(
                f"Cannot create directory for '{relative_path}': {e}"
            ) from e

        temp_path = temp_path_for(destination)
        try:
            bytes_copied = await self._transfer(relative_path, temp_path)
            await asyncio.to_thread(_promote, temp_path, destination)
        except DownloadError:
            await asyncio.to_thread(_discard, temp_path)
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            await asyncio.to_thread(_discard, temp_path)
            raise DownloadError(f"Download of '{relative_path}' failed: {e}") from e

        if stats:
            stats.bytes_downloaded += bytes_copied
        log.debug(
            f"Saved '{escape(relative_path)}' ({bytes_copied} bytes) "
            f"to {escape(str(destination))}"
        )
        return destination

    async def _transfer(self, relative_path: str, temp_path: Path) -> int:
        """Streams the response body into temp_path, one bounded copy per tick."""
        total = 0
        async with aiofiles.open(temp_path, "wb") as f:
            async with self.client.fetch(relative_path) as response:
                throttle = self._throttle_factory()
                while True:
                    await throttle.wait()
                    copied, at_eof = await _copy_at_most(
                        response.content, f, self.rate_per_worker
                    )
                    total += copied
                    if at_eof:
                        break
        return total
