"""
The top-level orchestrator: one fetch, plan and dispatch cycle, repeated on a
fixed interval.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from hfsync.api.client import FileServerClient
from hfsync.models.config import SyncSettings
from hfsync.models.stats import SyncStats
from hfsync.transfer.downloader import Downloader
from hfsync.utils.formatting import format_duration, format_size

from .dispatcher import WorkerPool
from .manifest import ManifestFetcher
from .planner import build_plan

log = logging.getLogger(__name__)


class SyncLoop:
    """Runs sync cycles until polling is disabled or the process is stopped."""

    def __init__(
        self,
        settings: SyncSettings,
        fetcher: ManifestFetcher,
        pool: WorkerPool,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings
        self.fetcher = fetcher
        self.pool = pool
        self._sleep = sleep
        self.cycles = 0

    @classmethod
    def from_settings(cls, settings: SyncSettings, client: FileServerClient) -> "SyncLoop":
        """Wires the default components around an authenticated client."""
        downloader = Downloader(
            client, settings.destination_root, settings.rate_per_worker
        )
        return cls(
            settings,
            ManifestFetcher(downloader, settings.manifest_name),
            WorkerPool(downloader, settings.worker_count, settings.show_progress),
        )

    async def run_cycle(self) -> SyncStats:
        """
        Runs one full cycle: fetch manifest, plan, dispatch and wait.

        Raises:
            ManifestError: If the file index cannot be fetched or parsed.
        """
        stats = SyncStats()
        records = await self.fetcher.fetch()
        plan = await asyncio.to_thread(build_plan, records, self.settings)

        if not plan:
            log.info("[green]✓ Everything is up to date.[/green]")
        else:
            log.info(
                f"{len(plan)} file(s) to download ({format_size(plan.total_size)})"
            )
            await self.pool.dispatch(plan, stats)
            log.info(
                f"Cycle done: [green]{stats.files_downloaded} downloaded[/green], "
                f"[red]{stats.files_failed} failed[/red] "
                f"in {format_duration(stats.elapsed)}"
            )

        self.cycles += 1
        return stats

    async def run(self) -> SyncStats:
        """
        Repeats cycles every `check_time` seconds; returns after one cycle when
        polling is disabled.
        """
        while True:
            stats = await self.run_cycle()
            if self.settings.runs_once:
                return stats
            log.info("Waiting.")
            await self._sleep(self.settings.check_time)
