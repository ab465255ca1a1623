"""
Fans a sync plan out to a fixed pool of download workers.
"""

import asyncio
import logging
from typing import Optional

from rich.markup import escape

from hfsync.models.manifest import SyncPlan
from hfsync.models.stats import SyncStats
from hfsync.transfer.downloader import Downloader
from hfsync.utils.formatting import format_percent

log = logging.getLogger(__name__)

# One sentinel per worker closes the queue.
_CLOSED = None


class WorkerPool:
    """
    Owns N concurrent workers draining a shared queue of paths for one cycle.

    The coordinator is the only producer. Each path is delivered to exactly
    one worker, and per-file failures are logged and counted, never raised.
    """

    def __init__(
        self, downloader: Downloader, worker_count: int, show_progress: bool = True
    ):
        if worker_count < 1:
            raise ValueError("worker_count must be at least 1")
        self.downloader = downloader
        self.worker_count = worker_count
        self.show_progress = show_progress

    async def dispatch(self, plan: SyncPlan, stats: Optional[SyncStats] = None) -> SyncStats:
        """
        Enqueues every planned path, closes the queue and waits for all workers.

        Progress is the declared size handed out so far over the plan's total,
        not bytes actually transferred.
        """
        stats = stats or SyncStats()
        stats.files_planned += len(plan)
        stats.bytes_planned += plan.total_size

        # maxsize=1 makes each put a near hand-off, so progress tracks dispatch.
        queue: asyncio.Queue[Optional[str]] = asyncio.Queue(maxsize=1)
        workers = [
            asyncio.create_task(self._worker(i, queue, stats), name=f"hfsync-worker-{i}")
            for i in range(self.worker_count)
        ]

        total = plan.total_size
        dispatched = 0
        try:
            for record in plan:
                if self.show_progress:
                    log.info(
                        f"[{format_percent(dispatched, total)}%] - {escape(record.path)}"
                    )
                dispatched += record.size
                await queue.put(record.path)
        finally:
            for _ in workers:
                await queue.put(_CLOSED)
            await asyncio.gather(*workers)

        return stats

    async def _worker(
        self, worker_id: int, queue: "asyncio.Queue[Optional[str]]", stats: SyncStats
    ) -> None:
        while True:
            path = await queue.get()
            try:
                if path is _CLOSED:
                    log.debug(f"Worker {worker_id} drained, exiting")
                    return
                try:
                    await self.downloader.download(path, stats)
                    stats.files_downloaded += 1
                except Exception as e:
                    stats.files_failed += 1
                    log.error(f"[red]✗ {escape(path)}: {escape(str(e))}[/red]")
            finally:
                queue.task_done()
