"""
Core sync engine.

This package contains the primary logic. The `SyncLoop` drives each cycle,
the `ManifestFetcher` and planner decide what is stale, and the `WorkerPool`
hands each planned file to a `Downloader`.
"""

from .dispatcher import WorkerPool
from .manifest import ManifestFetcher
from .planner import build_plan
from .sync_loop import SyncLoop

__all__ = ["ManifestFetcher", "SyncLoop", "WorkerPool", "build_plan"]
