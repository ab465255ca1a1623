"""
Dataclass for tracking the statistics of one sync cycle.
"""

import time
from dataclasses import dataclass, field


@dataclass
class SyncStats:
    """Tracks what one sync cycle planned, transferred and failed."""

    files_planned: int = 0
    files_downloaded: int = 0
    files_failed: int = 0
    bytes_planned: int = 0
    bytes_downloaded: int = 0
    started_at: float = field(default_factory=time.monotonic, repr=False)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started_at

    @property
    def average_speed_bps(self) -> float:
        elapsed = self.elapsed
        if elapsed <= 0:
            return 0.0
        return self.bytes_downloaded / elapsed
